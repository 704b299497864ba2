"""Workflow listing."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _str, _td


class WorkflowTools(ToolModule):
    DEFINITIONS = [
        _td("ghl_get_workflows", "Retrieve all workflows for a location, with their status and versions", {
            "location_id": _str("The location ID to get workflows for (uses default location if omitted)"),
        }, read_only=True),
    ]

    def get_tools(self):
        return self._definitions()

    async def execute_workflow_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    async def ghl_get_workflows(self, location_id: str | None = None) -> Any:
        return await self._client.get("/workflows/", {"locationId": self._client.location(location_id)})
