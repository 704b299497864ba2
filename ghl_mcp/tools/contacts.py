"""Contact management operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _bool, _drop_none, _int, _str, _td

_CONTACT_ID = {"contact_id": _str("Contact ID")}


class ContactTools(ToolModule):
    DEFINITIONS = [
        _td("create_contact", "Create a new contact in GoHighLevel", {
            "first_name": _str("Contact first name"),
            "last_name": _str("Contact last name"),
            "email": _str("Contact email address"),
            "phone": _str("Contact phone number"),
            "tags": _arr("Tags to assign to contact"),
            "source": _str("Source of the contact"),
        }, ["email"]),
        _td("search_contacts", "Search for contacts with advanced filtering options", {
            "query": _str("Search query string"),
            "email": _str("Filter by email address"),
            "phone": _str("Filter by phone number"),
            "limit": _int("Maximum number of results (default: 25)"),
        }, read_only=True),
        _td("get_contact", "Get detailed information about a specific contact",
            _CONTACT_ID, ["contact_id"], read_only=True),
        _td("update_contact", "Update contact information", {
            **_CONTACT_ID,
            "first_name": _str("Contact first name"),
            "last_name": _str("Contact last name"),
            "email": _str("Contact email address"),
            "phone": _str("Contact phone number"),
            "tags": _arr("Tags to assign to contact"),
        }, ["contact_id"]),
        _td("delete_contact", "Delete a contact from GoHighLevel", _CONTACT_ID, ["contact_id"]),
        _td("add_contact_tags", "Add tags to a contact", {
            **_CONTACT_ID, "tags": _arr("Tags to add"),
        }, ["contact_id", "tags"]),
        _td("remove_contact_tags", "Remove tags from a contact", {
            **_CONTACT_ID, "tags": _arr("Tags to remove"),
        }, ["contact_id", "tags"]),
        _td("get_contact_tasks", "Get all tasks for a contact", _CONTACT_ID, ["contact_id"], read_only=True),
        _td("create_contact_task", "Create a new task for a contact", {
            **_CONTACT_ID,
            "title": _str("Task title"),
            "body": _str("Task description"),
            "due_date": _str("Due date (ISO format)"),
            "completed": _bool("Task completion status"),
            "assigned_to": _str("User ID to assign task to"),
        }, ["contact_id", "title", "due_date"]),
        _td("get_contact_notes", "Get all notes for a contact", _CONTACT_ID, ["contact_id"], read_only=True),
        _td("create_contact_note", "Create a new note for a contact", {
            **_CONTACT_ID,
            "body": _str("Note content"),
            "user_id": _str("User ID creating the note"),
        }, ["contact_id", "body"]),
        _td("upsert_contact", "Create or update contact based on email/phone (smart merge)", {
            "first_name": _str("Contact first name"),
            "last_name": _str("Contact last name"),
            "email": _str("Contact email address"),
            "phone": _str("Contact phone number"),
            "tags": _arr("Tags to assign to contact"),
            "source": _str("Source of the contact"),
        }),
        _td("add_contact_to_workflow", "Add contact to a workflow", {
            **_CONTACT_ID,
            "workflow_id": _str("Workflow ID"),
            "event_start_time": _str("Event start time (ISO format)"),
        }, ["contact_id", "workflow_id"]),
        _td("remove_contact_from_workflow", "Remove contact from a workflow", {
            **_CONTACT_ID, "workflow_id": _str("Workflow ID"),
        }, ["contact_id", "workflow_id"]),
    ]

    def get_tool_definitions(self):
        return self._definitions()

    async def execute_tool(self, tool_name: str, params: dict[str, Any]) -> Any:
        return await self._dispatch(tool_name, params)

    # ------------------------------------------------------------------

    async def create_contact(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
        tags: list[str] | None = None,
        source: str | None = None,
    ) -> Any:
        payload = _drop_none(
            email=email, firstName=first_name, lastName=last_name, phone=phone, tags=tags,
            source=source, locationId=self._client.location_id,
        )
        return await self._client.post("/contacts/", payload)

    async def search_contacts(
        self,
        query: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        limit: int = 25,
    ) -> Any:
        filters = []
        if email:
            filters.append({"field": "email", "operator": "eq", "value": email})
        if phone:
            filters.append({"field": "phone", "operator": "eq", "value": phone})
        payload = _drop_none(locationId=self._client.location_id, pageLimit=limit, query=query)
        if filters:
            payload["filters"] = filters
        return await self._client.post("/contacts/search", payload)

    async def get_contact(self, contact_id: str) -> Any:
        return await self._client.get(f"/contacts/{contact_id}")

    async def update_contact(
        self,
        contact_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        tags: list[str] | None = None,
    ) -> Any:
        payload = _drop_none(firstName=first_name, lastName=last_name, email=email, phone=phone, tags=tags)
        return await self._client.put(f"/contacts/{contact_id}", payload)

    async def delete_contact(self, contact_id: str) -> Any:
        return await self._client.delete(f"/contacts/{contact_id}")

    async def add_contact_tags(self, contact_id: str, tags: list[str]) -> Any:
        return await self._client.post(f"/contacts/{contact_id}/tags", {"tags": tags})

    async def remove_contact_tags(self, contact_id: str, tags: list[str]) -> Any:
        # DELETE carries the tags in the query string.
        return await self._client.delete(f"/contacts/{contact_id}/tags", params={"tags": ",".join(tags)})

    async def get_contact_tasks(self, contact_id: str) -> Any:
        return await self._client.get(f"/contacts/{contact_id}/tasks")

    async def create_contact_task(
        self,
        contact_id: str,
        title: str,
        due_date: str,
        body: str | None = None,
        completed: bool = False,
        assigned_to: str | None = None,
    ) -> Any:
        payload = _drop_none(title=title, dueDate=due_date, body=body, completed=completed, assignedTo=assigned_to)
        return await self._client.post(f"/contacts/{contact_id}/tasks", payload)

    async def get_contact_notes(self, contact_id: str) -> Any:
        return await self._client.get(f"/contacts/{contact_id}/notes")

    async def create_contact_note(self, contact_id: str, body: str, user_id: str | None = None) -> Any:
        return await self._client.post(f"/contacts/{contact_id}/notes", _drop_none(body=body, userId=user_id))

    async def upsert_contact(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        tags: list[str] | None = None,
        source: str | None = None,
    ) -> Any:
        payload = _drop_none(
            firstName=first_name, lastName=last_name, email=email, phone=phone, tags=tags,
            source=source, locationId=self._client.location_id,
        )
        return await self._client.post("/contacts/upsert", payload)

    async def add_contact_to_workflow(
        self, contact_id: str, workflow_id: str, event_start_time: str | None = None,
    ) -> Any:
        payload = _drop_none(eventStartTime=event_start_time)
        return await self._client.post(f"/contacts/{contact_id}/workflow/{workflow_id}", payload)

    async def remove_contact_from_workflow(self, contact_id: str, workflow_id: str) -> Any:
        return await self._client.delete(f"/contacts/{contact_id}/workflow/{workflow_id}")
