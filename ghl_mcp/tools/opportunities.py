"""Opportunity and pipeline operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _drop_none, _int, _num, _str, _td

_STATUS = {"type": "string", "enum": ["open", "won", "lost", "abandoned"], "description": "Opportunity status"}


class OpportunityTools(ToolModule):
    DEFINITIONS = [
        _td("search_opportunities", "Search for opportunities in GoHighLevel CRM using various filters", {
            "query": _str("General search query (searches name, contact info)"),
            "pipeline_id": _str("Filter by specific pipeline ID"),
            "pipeline_stage_id": _str("Filter by specific pipeline stage ID"),
            "contact_id": _str("Filter by specific contact ID"),
            "status": {**_STATUS, "enum": ["open", "won", "lost", "abandoned", "all"]},
            "assigned_to": _str("Filter by assigned user ID"),
            "limit": _int("Maximum number of opportunities to return (default: 20)"),
        }, read_only=True),
        _td("get_pipelines", "Get all sales pipelines configured in GoHighLevel", read_only=True),
        _td("get_opportunity", "Get detailed information about a specific opportunity by ID", {
            "opportunity_id": _str("The unique ID of the opportunity to retrieve"),
        }, ["opportunity_id"], read_only=True),
        _td("create_opportunity", "Create a new opportunity in GoHighLevel CRM", {
            "name": _str("Name/title of the opportunity"),
            "pipeline_id": _str("ID of the pipeline this opportunity belongs to"),
            "contact_id": _str("ID of the contact associated with this opportunity"),
            "status": _STATUS,
            "monetary_value": _num("Monetary value of the opportunity in dollars"),
            "assigned_to": _str("User ID to assign this opportunity to"),
        }, ["name", "pipeline_id", "contact_id"]),
        _td("update_opportunity_status", "Update the status of an opportunity (won, lost, etc.)", {
            "opportunity_id": _str("The unique ID of the opportunity"),
            "status": _STATUS,
            "lost_reason_id": _str("ID of lost reason (if status is lost)"),
        }, ["opportunity_id", "status"]),
        _td("delete_opportunity", "Delete an opportunity from GoHighLevel CRM", {
            "opportunity_id": _str("The unique ID of the opportunity to delete"),
        }, ["opportunity_id"]),
        _td("update_opportunity", "Update an existing opportunity with new details", {
            "opportunity_id": _str("The unique ID of the opportunity to update"),
            "name": _str("Updated name/title of the opportunity"),
            "pipeline_stage_id": _str("Updated pipeline stage ID"),
            "status": _STATUS,
            "monetary_value": _num("Updated monetary value in dollars"),
            "assigned_to": _str("Updated assigned user ID"),
        }, ["opportunity_id"]),
        _td("add_opportunity_followers", "Add followers to an opportunity for notifications and tracking", {
            "opportunity_id": _str("ID of the opportunity"),
            "followers": _arr("Array of user IDs to add as followers"),
        }, ["opportunity_id", "followers"]),
    ]

    def get_tool_definitions(self):
        return self._definitions()

    async def execute_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def search_opportunities(
        self,
        query: str | None = None,
        pipeline_id: str | None = None,
        pipeline_stage_id: str | None = None,
        contact_id: str | None = None,
        status: str | None = None,
        assigned_to: str | None = None,
        limit: int = 20,
    ) -> Any:
        params = _drop_none(
            location_id=self._client.location_id, q=query, pipeline_id=pipeline_id,
            pipeline_stage_id=pipeline_stage_id, contact_id=contact_id, status=status,
            assigned_to=assigned_to, limit=limit,
        )
        return await self._client.get("/opportunities/search", params)

    async def get_pipelines(self) -> Any:
        return await self._client.get("/opportunities/pipelines", {"locationId": self._client.location_id})

    async def get_opportunity(self, opportunity_id: str) -> Any:
        return await self._client.get(f"/opportunities/{opportunity_id}")

    async def create_opportunity(
        self,
        name: str,
        pipeline_id: str,
        contact_id: str,
        status: str = "open",
        monetary_value: float | None = None,
        assigned_to: str | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, name=name, pipelineId=pipeline_id, contactId=contact_id,
            status=status, monetaryValue=monetary_value, assignedTo=assigned_to,
        )
        return await self._client.post("/opportunities/", payload)

    async def update_opportunity_status(
        self, opportunity_id: str, status: str, lost_reason_id: str | None = None,
    ) -> Any:
        payload = _drop_none(status=status, lostReasonId=lost_reason_id)
        return await self._client.put(f"/opportunities/{opportunity_id}/status", payload)

    async def delete_opportunity(self, opportunity_id: str) -> Any:
        return await self._client.delete(f"/opportunities/{opportunity_id}")

    async def update_opportunity(
        self,
        opportunity_id: str,
        name: str | None = None,
        pipeline_stage_id: str | None = None,
        status: str | None = None,
        monetary_value: float | None = None,
        assigned_to: str | None = None,
    ) -> Any:
        payload = _drop_none(
            name=name, pipelineStageId=pipeline_stage_id, status=status,
            monetaryValue=monetary_value, assignedTo=assigned_to,
        )
        return await self._client.put(f"/opportunities/{opportunity_id}", payload)

    async def add_opportunity_followers(self, opportunity_id: str, followers: list[str]) -> Any:
        return await self._client.post(f"/opportunities/{opportunity_id}/followers", {"followers": followers})
