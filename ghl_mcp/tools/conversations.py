"""Conversation and messaging operations (conversations API version 2021-04-15)."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _bool, _drop_none, _int, _str, _td


class ConversationTools(ToolModule):
    DEFINITIONS = [
        _td("send_sms", "Send an SMS message to a contact in GoHighLevel", {
            "contact_id": _str("The unique ID of the contact to send SMS to"),
            "message": _str("The SMS message content to send"),
            "from_number": _str("Optional: Phone number to send from"),
        }, ["contact_id", "message"]),
        _td("send_email", "Send an email message to a contact in GoHighLevel", {
            "contact_id": _str("The unique ID of the contact to send email to"),
            "subject": _str("Email subject line"),
            "message": _str("Plain text email content"),
            "html": _str("HTML email content (optional, takes precedence over message)"),
            "email_from": _str("Optional: Email address to send from"),
        }, ["contact_id", "subject"]),
        _td("search_conversations", "Search conversations in GoHighLevel with various filters", {
            "contact_id": _str("Filter conversations for a specific contact"),
            "query": _str("Search query to filter conversations"),
            "status": {"type": "string", "enum": ["all", "read", "unread", "starred"],
                       "description": "Filter conversations by read status"},
            "limit": _int("Maximum number of conversations to return (default: 20)"),
            "assigned_to": _str("Filter by user ID assigned to conversations"),
        }, read_only=True),
        _td("get_conversation", "Get detailed conversation information including message history", {
            "conversation_id": _str("The unique ID of the conversation to retrieve"),
        }, ["conversation_id"], read_only=True),
        _td("create_conversation", "Create a new conversation with a contact", {
            "contact_id": _str("The unique ID of the contact to create conversation with"),
        }, ["contact_id"]),
        _td("update_conversation", "Update conversation properties (star, mark read, etc.)", {
            "conversation_id": _str("The unique ID of the conversation to update"),
            "starred": _bool("Star or unstar the conversation"),
            "unread_count": _int("Set the unread message count (0 to mark as read)"),
        }, ["conversation_id"]),
        _td("get_recent_messages", "Get recent messages from a conversation", {
            "conversation_id": _str("Conversation ID"),
            "limit": _int("Number of messages to return (default: 20)"),
        }, ["conversation_id"], read_only=True),
        _td("delete_conversation", "Delete a conversation permanently", {
            "conversation_id": _str("The unique ID of the conversation to delete"),
        }, ["conversation_id"]),
        _td("get_message", "Get details of a specific message by ID", {
            "message_id": _str("The unique ID of the message to retrieve"),
        }, ["message_id"], read_only=True),
        _td("cancel_scheduled_message", "Cancel a scheduled message before it is sent", {
            "message_id": _str("The unique ID of the scheduled message to cancel"),
        }, ["message_id"]),
        _td("add_inbound_message", "Manually add an inbound message to a conversation", {
            "type": {"type": "string", "enum": ["SMS", "Email", "WhatsApp", "GMB", "IG", "FB", "Custom", "WebChat", "Live_Chat"],
                     "description": "Type of inbound message"},
            "conversation_id": _str("The conversation to add the message to"),
            "conversation_provider_id": _str("Conversation provider ID"),
            "message": _str("Message content"),
            "attachments": _arr("Attachment URLs"),
        }, ["type", "conversation_id", "conversation_provider_id"]),
    ]

    def get_tool_definitions(self):
        return self._definitions()

    async def execute_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def send_sms(self, contact_id: str, message: str, from_number: str | None = None) -> Any:
        payload = _drop_none(type="SMS", contactId=contact_id, message=message, fromNumber=from_number)
        return await self._client.conversations_post("/conversations/messages", payload)

    async def send_email(
        self,
        contact_id: str,
        subject: str,
        message: str | None = None,
        html: str | None = None,
        email_from: str | None = None,
    ) -> Any:
        payload = _drop_none(
            type="Email", contactId=contact_id, subject=subject, message=message, html=html, emailFrom=email_from,
        )
        return await self._client.conversations_post("/conversations/messages", payload)

    async def search_conversations(
        self,
        contact_id: str | None = None,
        query: str | None = None,
        status: str = "all",
        limit: int = 20,
        assigned_to: str | None = None,
    ) -> Any:
        params = _drop_none(
            locationId=self._client.location_id, contactId=contact_id, query=query,
            status=status, limit=limit, assignedTo=assigned_to,
        )
        return await self._client.conversations_get("/conversations/search", params)

    async def get_conversation(self, conversation_id: str) -> Any:
        return await self._client.conversations_get(f"/conversations/{conversation_id}")

    async def create_conversation(self, contact_id: str) -> Any:
        payload = {"locationId": self._client.location_id, "contactId": contact_id}
        return await self._client.conversations_post("/conversations/", payload)

    async def update_conversation(
        self, conversation_id: str, starred: bool | None = None, unread_count: int | None = None,
    ) -> Any:
        payload = _drop_none(locationId=self._client.location_id, starred=starred, unreadCount=unread_count)
        return await self._client.conversations_put(f"/conversations/{conversation_id}", payload)

    async def get_recent_messages(self, conversation_id: str, limit: int = 20) -> Any:
        return await self._client.conversations_get(
            f"/conversations/{conversation_id}/messages", {"limit": limit},
        )

    async def delete_conversation(self, conversation_id: str) -> Any:
        return await self._client.conversations_delete(f"/conversations/{conversation_id}")

    async def get_message(self, message_id: str) -> Any:
        return await self._client.conversations_get(f"/conversations/messages/{message_id}")

    async def cancel_scheduled_message(self, message_id: str) -> Any:
        return await self._client.conversations_delete(f"/conversations/messages/{message_id}/schedule")

    async def add_inbound_message(
        self,
        type: str,
        conversation_id: str,
        conversation_provider_id: str,
        message: str | None = None,
        attachments: list[str] | None = None,
    ) -> Any:
        payload = _drop_none(
            type=type, conversationId=conversation_id, conversationProviderId=conversation_provider_id,
            message=message, attachments=attachments,
        )
        return await self._client.conversations_post("/conversations/messages/inbound", payload)
