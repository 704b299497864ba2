"""Association and relation operations between CRM records."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _drop_none, _int, _str, _td

_ASSOCIATION_ID = {"association_id": _str("The ID of the association")}


class AssociationTools(ToolModule):
    DEFINITIONS = [
        _td("ghl_get_all_associations", "Get all associations for a sub-account/location with pagination", {
            "skip": _int("Number of records to skip for pagination"),
            "limit": _int("Maximum number of records to return (max 100)"),
        }, read_only=True),
        _td("ghl_create_association", "Create a new association that defines relationship types between entities", {
            "key": _str("Unique key for the association (e.g., \"student_course\")"),
            "first_object_label": _str("Label for the first object in the association"),
            "first_object_key": _str("Key for the first object (e.g., \"custom_objects.children\")"),
            "second_object_label": _str("Label for the second object in the association"),
            "second_object_key": _str("Key for the second object (e.g., \"contact\")"),
        }, ["key", "first_object_label", "first_object_key", "second_object_label", "second_object_key"]),
        _td("ghl_get_association_by_id", "Get a specific association by its ID",
            _ASSOCIATION_ID, ["association_id"], read_only=True),
        _td("ghl_update_association", "Update the labels of an existing association", {
            **_ASSOCIATION_ID,
            "first_object_label": _str("New label for the first object"),
            "second_object_label": _str("New label for the second object"),
        }, ["association_id", "first_object_label", "second_object_label"]),
        _td("ghl_delete_association", "Delete a user-defined association (also removes its relations)",
            _ASSOCIATION_ID, ["association_id"]),
        _td("ghl_get_association_by_key", "Get an association by its key", {
            "key_name": _str("Key of the association"),
        }, ["key_name"], read_only=True),
        _td("ghl_create_relation", "Create a relation between two entities using an existing association", {
            **_ASSOCIATION_ID,
            "first_record_id": _str("ID of the first record"),
            "second_record_id": _str("ID of the second record"),
        }, ["association_id", "first_record_id", "second_record_id"]),
        _td("ghl_get_relations_by_record", "Get all relations for a specific record ID", {
            "record_id": _str("The record ID to get relations for"),
            "skip": _int("Number of records to skip for pagination"),
            "limit": _int("Maximum number of records to return"),
            "association_ids": _arr("Optional association IDs to filter by"),
        }, ["record_id"], read_only=True),
        _td("ghl_delete_relation", "Delete a specific relation between two entities", {
            "relation_id": _str("The ID of the relation to delete"),
        }, ["relation_id"]),
    ]

    def get_tools(self):
        return self._definitions()

    async def execute_association_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def ghl_get_all_associations(self, skip: int = 0, limit: int = 20) -> Any:
        params = {"locationId": self._client.location_id, "skip": skip, "limit": limit}
        return await self._client.get("/associations/", params)

    async def ghl_create_association(
        self,
        key: str,
        first_object_label: str,
        first_object_key: str,
        second_object_label: str,
        second_object_key: str,
    ) -> Any:
        payload = {
            "locationId": self._client.location_id,
            "key": key,
            "firstObjectLabel": first_object_label,
            "firstObjectKey": first_object_key,
            "secondObjectLabel": second_object_label,
            "secondObjectKey": second_object_key,
        }
        return await self._client.post("/associations/", payload)

    async def ghl_get_association_by_id(self, association_id: str) -> Any:
        return await self._client.get(f"/associations/{association_id}")

    async def ghl_update_association(
        self, association_id: str, first_object_label: str, second_object_label: str,
    ) -> Any:
        payload = {"firstObjectLabel": first_object_label, "secondObjectLabel": second_object_label}
        return await self._client.put(f"/associations/{association_id}", payload)

    async def ghl_delete_association(self, association_id: str) -> Any:
        return await self._client.delete(f"/associations/{association_id}")

    async def ghl_get_association_by_key(self, key_name: str) -> Any:
        return await self._client.get(f"/associations/key/{key_name}", {"locationId": self._client.location_id})

    async def ghl_create_relation(self, association_id: str, first_record_id: str, second_record_id: str) -> Any:
        payload = {
            "locationId": self._client.location_id,
            "associationId": association_id,
            "firstRecordId": first_record_id,
            "secondRecordId": second_record_id,
        }
        return await self._client.post("/associations/relations", payload)

    async def ghl_get_relations_by_record(
        self,
        record_id: str,
        skip: int = 0,
        limit: int = 20,
        association_ids: list[str] | None = None,
    ) -> Any:
        params = _drop_none(
            locationId=self._client.location_id, skip=skip, limit=limit, associationIds=association_ids,
        )
        return await self._client.get(f"/associations/relations/{record_id}", params)

    async def ghl_delete_relation(self, relation_id: str) -> Any:
        return await self._client.delete(
            f"/associations/relations/{relation_id}", {"locationId": self._client.location_id},
        )
