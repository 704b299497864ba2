"""Custom field (v2) and custom field folder operations for custom objects."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _bool, _drop_none, _str, _td

_FIELD_ID = {"id": _str("The ID of the custom field or folder")}
_DATA_TYPES = [
    "TEXT", "LARGE_TEXT", "NUMERICAL", "PHONE", "MONETORY", "CHECKBOX", "SINGLE_OPTIONS",
    "MULTIPLE_OPTIONS", "DATE", "TEXTBOX_LIST", "FILE_UPLOAD", "RADIO", "EMAIL",
]


class CustomFieldV2Tools(ToolModule):
    DEFINITIONS = [
        _td("ghl_get_custom_field_by_id", "Get a custom field or folder by its ID",
            _FIELD_ID, ["id"], read_only=True),
        _td("ghl_create_custom_field", "Create a new custom field for custom objects or company", {
            "name": _str("Field name"),
            "data_type": {"type": "string", "enum": _DATA_TYPES, "description": "Type of field to create"},
            "field_key": _str("Field key, formatted as \"custom_object.{objectKey}.{fieldKey}\""),
            "object_key": _str("The object key (e.g., \"custom_object.pet\")"),
            "parent_id": _str("The parent folder ID"),
            "description": _str("Field description"),
            "placeholder": _str("Placeholder text"),
            "show_in_forms": _bool("Whether the field appears in forms (default: true)"),
            "options": _arr("Option labels for option-type fields"),
        }, ["data_type", "field_key", "object_key", "parent_id"]),
        _td("ghl_update_custom_field", "Update an existing custom field by ID", {
            **_FIELD_ID,
            "name": _str("Field name"),
            "description": _str("Field description"),
            "placeholder": _str("Placeholder text"),
            "show_in_forms": _bool("Whether the field appears in forms"),
            "options": _arr("Option labels for option-type fields"),
        }, ["id"]),
        _td("ghl_delete_custom_field", "Delete a custom field by ID", _FIELD_ID, ["id"]),
        _td("ghl_get_custom_fields_by_object_key", "Get all custom fields and folders for an object key", {
            "object_key": _str("Object key (e.g., \"custom_object.pet\")"),
        }, ["object_key"], read_only=True),
        _td("ghl_create_custom_field_folder", "Create a new custom field folder", {
            "object_key": _str("Object key for the folder"),
            "name": _str("Folder name"),
        }, ["object_key", "name"]),
        _td("ghl_update_custom_field_folder", "Rename a custom field folder", {
            **_FIELD_ID, "name": _str("New folder name"),
        }, ["id", "name"]),
        _td("ghl_delete_custom_field_folder", "Delete a custom field folder", _FIELD_ID, ["id"]),
    ]

    def get_tools(self):
        return self._definitions()

    async def execute_custom_field_v2_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def ghl_get_custom_field_by_id(self, id: str) -> Any:
        return await self._client.get(f"/custom-fields/{id}")

    async def ghl_create_custom_field(
        self,
        data_type: str,
        field_key: str,
        object_key: str,
        parent_id: str,
        name: str | None = None,
        description: str | None = None,
        placeholder: str | None = None,
        show_in_forms: bool = True,
        options: list[str] | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, name=name, dataType=data_type, fieldKey=field_key,
            objectKey=object_key, parentId=parent_id, description=description, placeholder=placeholder,
            showInForms=show_in_forms,
            options=[{"key": o.lower().replace(" ", "_"), "label": o} for o in options] if options else None,
        )
        return await self._client.post("/custom-fields/", payload)

    async def ghl_update_custom_field(
        self,
        id: str,
        name: str | None = None,
        description: str | None = None,
        placeholder: str | None = None,
        show_in_forms: bool | None = None,
        options: list[str] | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, name=name, description=description,
            placeholder=placeholder, showInForms=show_in_forms,
            options=[{"key": o.lower().replace(" ", "_"), "label": o} for o in options] if options else None,
        )
        return await self._client.put(f"/custom-fields/{id}", payload)

    async def ghl_delete_custom_field(self, id: str) -> Any:
        return await self._client.delete(f"/custom-fields/{id}")

    async def ghl_get_custom_fields_by_object_key(self, object_key: str) -> Any:
        return await self._client.get(
            f"/custom-fields/object-key/{object_key}", {"locationId": self._client.location_id},
        )

    async def ghl_create_custom_field_folder(self, object_key: str, name: str) -> Any:
        payload = {"objectKey": object_key, "name": name, "locationId": self._client.location_id}
        return await self._client.post("/custom-fields/folder", payload)

    async def ghl_update_custom_field_folder(self, id: str, name: str) -> Any:
        payload = {"name": name, "locationId": self._client.location_id}
        return await self._client.put(f"/custom-fields/folder/{id}", payload)

    async def ghl_delete_custom_field_folder(self, id: str) -> Any:
        return await self._client.delete(f"/custom-fields/folder/{id}", {"locationId": self._client.location_id})
