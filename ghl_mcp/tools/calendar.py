"""Calendar, appointment and availability operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _drop_none, _str, _td

_CALENDAR_ID = {"calendar_id": _str("The unique ID of the calendar")}
_APPOINTMENT_ID = {"appointment_id": _str("The unique ID of the appointment")}


class CalendarTools(ToolModule):
    DEFINITIONS = [
        _td("get_calendar_groups", "Get all calendar groups in the GoHighLevel location", read_only=True),
        _td("get_calendars", "Get all calendars in the GoHighLevel location with optional filtering", {
            "group_id": _str("Filter calendars by group ID"),
        }, read_only=True),
        _td("get_calendar", "Get detailed information about a specific calendar by ID",
            _CALENDAR_ID, ["calendar_id"], read_only=True),
        _td("delete_calendar", "Delete a calendar permanently", _CALENDAR_ID, ["calendar_id"]),
        _td("get_calendar_events", "Get appointments/events from calendars within a date range", {
            "start_time": _str("Start time in milliseconds or ISO date (e.g., \"2024-01-01\")"),
            "end_time": _str("End time in milliseconds or ISO date (e.g., \"2024-01-31\")"),
            "user_id": _str("Filter events by assigned user ID"),
            "calendar_id": _str("Filter events by calendar ID"),
            "group_id": _str("Filter events by calendar group ID"),
        }, ["start_time", "end_time"], read_only=True),
        _td("get_free_slots", "Get available time slots for booking appointments on a specific calendar", {
            **_CALENDAR_ID,
            "start_date": _str("Start date for availability check (YYYY-MM-DD)"),
            "end_date": _str("End date for availability check (YYYY-MM-DD)"),
            "timezone": _str("Timezone for the results (e.g., \"America/New_York\")"),
            "user_id": _str("Specific user ID to check availability for"),
        }, ["calendar_id", "start_date", "end_date"], read_only=True),
        _td("create_appointment", "Create a new appointment/booking in GoHighLevel", {
            **_CALENDAR_ID,
            "contact_id": _str("The unique ID of the contact to book appointment for"),
            "start_time": _str("Start time in ISO format (e.g., \"2024-01-15T10:00:00-05:00\")"),
            "end_time": _str("End time in ISO format (optional, will use slot duration if not provided)"),
            "title": _str("Title/subject of the appointment"),
            "appointment_status": {"type": "string", "enum": ["new", "confirmed"],
                                   "description": "Initial status of the appointment"},
            "assigned_user_id": _str("Specific user ID to assign the appointment to"),
            "address": _str("Meeting location or address"),
        }, ["calendar_id", "contact_id", "start_time"]),
        _td("get_appointment", "Get detailed information about a specific appointment",
            _APPOINTMENT_ID, ["appointment_id"], read_only=True),
        _td("update_appointment", "Update an existing appointment", {
            **_APPOINTMENT_ID,
            "title": _str("Updated title/subject of the appointment"),
            "appointment_status": {"type": "string", "enum": ["new", "confirmed", "cancelled", "showed", "noshow"],
                                   "description": "Updated status of the appointment"},
            "start_time": _str("Updated start time in ISO format"),
            "end_time": _str("Updated end time in ISO format"),
            "address": _str("Updated meeting location or address"),
        }, ["appointment_id"]),
        _td("delete_appointment", "Cancel/delete an appointment", _APPOINTMENT_ID, ["appointment_id"]),
        _td("create_block_slot", "Create a blocked time slot to prevent bookings during specific times", {
            "start_time": _str("Start time of the block in ISO format"),
            "end_time": _str("End time of the block in ISO format"),
            "title": _str("Title/reason for the block"),
            "calendar_id": _str("Specific calendar to block (optional)"),
            "assigned_user_id": _str("User ID to apply the block for"),
        }, ["start_time", "end_time"]),
    ]

    def get_tool_definitions(self):
        return self._definitions()

    async def execute_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def get_calendar_groups(self) -> Any:
        return await self._client.get("/calendars/groups", {"locationId": self._client.location_id})

    async def get_calendars(self, group_id: str | None = None) -> Any:
        params = _drop_none(locationId=self._client.location_id, groupId=group_id)
        return await self._client.get("/calendars/", params)

    async def get_calendar(self, calendar_id: str) -> Any:
        return await self._client.get(f"/calendars/{calendar_id}")

    async def delete_calendar(self, calendar_id: str) -> Any:
        return await self._client.delete(f"/calendars/{calendar_id}")

    async def get_calendar_events(
        self,
        start_time: str,
        end_time: str,
        user_id: str | None = None,
        calendar_id: str | None = None,
        group_id: str | None = None,
    ) -> Any:
        params = _drop_none(
            locationId=self._client.location_id, startTime=start_time, endTime=end_time,
            userId=user_id, calendarId=calendar_id, groupId=group_id,
        )
        return await self._client.get("/calendars/events", params)

    async def get_free_slots(
        self,
        calendar_id: str,
        start_date: str,
        end_date: str,
        timezone: str | None = None,
        user_id: str | None = None,
    ) -> Any:
        params = _drop_none(startDate=start_date, endDate=end_date, timezone=timezone, userId=user_id)
        return await self._client.get(f"/calendars/{calendar_id}/free-slots", params)

    async def create_appointment(
        self,
        calendar_id: str,
        contact_id: str,
        start_time: str,
        end_time: str | None = None,
        title: str | None = None,
        appointment_status: str | None = None,
        assigned_user_id: str | None = None,
        address: str | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, calendarId=calendar_id, contactId=contact_id,
            startTime=start_time, endTime=end_time, title=title, appointmentStatus=appointment_status,
            assignedUserId=assigned_user_id, address=address,
        )
        return await self._client.post("/calendars/events/appointments", payload)

    async def get_appointment(self, appointment_id: str) -> Any:
        return await self._client.get(f"/calendars/events/appointments/{appointment_id}")

    async def update_appointment(
        self,
        appointment_id: str,
        title: str | None = None,
        appointment_status: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        address: str | None = None,
    ) -> Any:
        payload = _drop_none(
            title=title, appointmentStatus=appointment_status, startTime=start_time,
            endTime=end_time, address=address,
        )
        return await self._client.put(f"/calendars/events/appointments/{appointment_id}", payload)

    async def delete_appointment(self, appointment_id: str) -> Any:
        return await self._client.delete(f"/calendars/events/{appointment_id}")

    async def create_block_slot(
        self,
        start_time: str,
        end_time: str,
        title: str | None = None,
        calendar_id: str | None = None,
        assigned_user_id: str | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, startTime=start_time, endTime=end_time,
            title=title, calendarId=calendar_id, assignedUserId=assigned_user_id,
        )
        return await self._client.post("/calendars/events/block-slots", payload)
