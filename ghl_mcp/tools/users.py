"""User management operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _drop_none, _int, _obj, _str, _td

_ROLE = {"type": "string", "enum": ["admin", "user"], "description": "User role"}


class UsersTools(ToolModule):
    DEFINITIONS = [
        _td("get_users", "Get all users for the current location", read_only=True),
        _td("get_user", "Get a specific user by ID", {
            "user_id": _str("The user ID"),
        }, ["user_id"], read_only=True),
        _td("search_users", "Search users across the company with filters", {
            "company_id": _str("Company ID to search within"),
            "query": _str("Search by name, email or phone"),
            "role": _ROLE,
            "limit": _int("Number of results to return (default: 25)"),
            "skip": _int("Number of results to skip"),
        }, ["company_id"], read_only=True),
        _td("create_user", "Create a new user in the location", {
            "company_id": _str("Company ID"),
            "first_name": _str("User first name"),
            "last_name": _str("User last name"),
            "email": _str("User email address"),
            "password": _str("Initial password"),
            "phone": _str("User phone number"),
            "type": {"type": "string", "enum": ["account", "agency"], "description": "User type"},
            "role": _ROLE,
            "location_ids": _arr("Location IDs the user can access"),
            "permissions": _obj("Permission flags keyed by feature"),
        }, ["company_id", "first_name", "last_name", "email", "password", "type", "role"]),
        _td("update_user", "Update an existing user", {
            "user_id": _str("The user ID"),
            "first_name": _str("User first name"),
            "last_name": _str("User last name"),
            "email": _str("User email address"),
            "phone": _str("User phone number"),
            "role": _ROLE,
            "location_ids": _arr("Location IDs the user can access"),
            "permissions": _obj("Permission flags keyed by feature"),
        }, ["user_id"]),
        _td("delete_user", "Delete a user", {
            "user_id": _str("The user ID"),
        }, ["user_id"]),
    ]

    def get_tool_definitions(self):
        return self._definitions()

    async def handle_tool_call(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def get_users(self) -> Any:
        return await self._client.get("/users/", {"locationId": self._client.location_id})

    async def get_user(self, user_id: str) -> Any:
        return await self._client.get(f"/users/{user_id}")

    async def search_users(
        self,
        company_id: str,
        query: str | None = None,
        role: str | None = None,
        limit: int = 25,
        skip: int | None = None,
    ) -> Any:
        params = _drop_none(
            companyId=company_id, locationId=self._client.location_id, query=query,
            role=role, limit=limit, skip=skip,
        )
        return await self._client.get("/users/search", params)

    async def create_user(
        self,
        company_id: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        type: str,
        role: str,
        phone: str | None = None,
        location_ids: list[str] | None = None,
        permissions: dict | None = None,
    ) -> Any:
        payload = _drop_none(
            companyId=company_id, firstName=first_name, lastName=last_name, email=email,
            password=password, phone=phone, type=type, role=role,
            locationIds=location_ids or [self._client.location_id], permissions=permissions,
        )
        return await self._client.post("/users/", payload)

    async def update_user(
        self,
        user_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        role: str | None = None,
        location_ids: list[str] | None = None,
        permissions: dict | None = None,
    ) -> Any:
        payload = _drop_none(
            firstName=first_name, lastName=last_name, email=email, phone=phone, role=role,
            locationIds=location_ids, permissions=permissions,
        )
        return await self._client.put(f"/users/{user_id}", payload)

    async def delete_user(self, user_id: str) -> Any:
        return await self._client.delete(f"/users/{user_id}")
