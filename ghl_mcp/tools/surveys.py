"""Survey and survey submission operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _drop_none, _int, _str, _td


class SurveyTools(ToolModule):
    DEFINITIONS = [
        _td("ghl_get_surveys", "Retrieve all surveys for a location", {
            "location_id": _str("The location ID (uses default location if omitted)"),
            "skip": _int("Number of records to skip for pagination"),
            "limit": _int("Maximum number of surveys to return (max 50, default 10)"),
            "type": _str("Filter surveys by type (e.g., \"folder\")"),
        }, read_only=True),
        _td("ghl_get_survey_submissions", "Retrieve survey submissions with filtering options", {
            "location_id": _str("The location ID (uses default location if omitted)"),
            "page": _int("Page number for pagination"),
            "limit": _int("Number of submissions per page (max 100, default 20)"),
            "survey_id": _str("Filter submissions by a specific survey ID"),
            "q": _str("Search by contact ID, name, email or phone"),
            "start_at": _str("Start date for filtering submissions (YYYY-MM-DD)"),
            "end_at": _str("End date for filtering submissions (YYYY-MM-DD)"),
        }, read_only=True),
    ]

    def get_tools(self):
        return self._definitions()

    async def execute_survey_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def ghl_get_surveys(
        self,
        location_id: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
        type: str | None = None,
    ) -> Any:
        params = _drop_none(locationId=self._client.location(location_id), skip=skip, limit=limit, type=type)
        return await self._client.get("/surveys/", params)

    async def ghl_get_survey_submissions(
        self,
        location_id: str | None = None,
        page: int | None = None,
        limit: int | None = None,
        survey_id: str | None = None,
        q: str | None = None,
        start_at: str | None = None,
        end_at: str | None = None,
    ) -> Any:
        params = _drop_none(
            locationId=self._client.location(location_id), page=page, limit=limit,
            surveyId=survey_id, q=q, startAt=start_at, endAt=end_at,
        )
        return await self._client.get("/surveys/submissions", params)
