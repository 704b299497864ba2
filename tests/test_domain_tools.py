"""Domain modules: request shapes and adapter compatibility."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from ghl_mcp.registry import adapt_module
from ghl_mcp.tools import (
    DOMAIN_MODULES,
    ContactTools,
    ConversationTools,
    InvoicesTools,
    StoreTools,
    WorkflowTools,
)


@pytest.fixture
def client():
    c = MagicMock()
    c.location_id = "loc_1"
    c.location = MagicMock(side_effect=lambda value: value or "loc_1")
    for verb in ("get", "post", "put", "patch", "delete",
                 "conversations_get", "conversations_post", "conversations_put", "conversations_delete"):
        setattr(c, verb, AsyncMock(return_value={"ok": verb}))
    return c


# ---------------------------------------------------------------------------
# Every module through the adapter
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("key, module_cls", list(DOMAIN_MODULES.items()))
def test_module_is_adaptable(client, key, module_cls):
    ops = adapt_module(module_cls(client)).list_operations()
    assert ops, f"{key} lists no operations"
    for op in ops:
        assert op.input_schema["type"] == "object"
        assert set(op.input_schema["required"]) <= set(op.input_schema["properties"])


def test_operation_names_unique_across_modules(client):
    seen: dict[str, str] = {}
    for key, module_cls in DOMAIN_MODULES.items():
        for op in adapt_module(module_cls(client)).list_operations():
            assert op.name not in seen, f"{op.name} in both {seen.get(op.name)} and {key}"
            seen[op.name] = key


@pytest.mark.parametrize("key, module_cls", list(DOMAIN_MODULES.items()))
def test_every_operation_has_a_method(client, key, module_cls):
    module = module_cls(client)
    for op in adapt_module(module).list_operations():
        assert callable(getattr(module, op.name, None)), f"{key}.{op.name} has no method"


@pytest.mark.asyncio
@pytest.mark.parametrize("module_cls", list(DOMAIN_MODULES.values()))
async def test_unknown_name_raises(client, module_cls):
    with pytest.raises(ValueError, match="Unknown"):
        await adapt_module(module_cls(client)).invoke("not_a_tool", {})


# ---------------------------------------------------------------------------
# Request shapes
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_contact_payload(client):
    await ContactTools(client).execute_tool(
        "create_contact", {"email": "ada@example.com", "first_name": "Ada"},
    )
    client.post.assert_awaited_once_with(
        "/contacts/", {"email": "ada@example.com", "firstName": "Ada", "locationId": "loc_1"},
    )


@pytest.mark.asyncio
async def test_remove_contact_tags_uses_query_string(client):
    await ContactTools(client).execute_tool("remove_contact_tags", {"contact_id": "c_1", "tags": ["a", "b"]})
    client.delete.assert_awaited_once_with("/contacts/c_1/tags", params={"tags": "a,b"})


@pytest.mark.asyncio
async def test_send_sms_uses_conversations_version(client):
    await ConversationTools(client).execute_tool("send_sms", {"contact_id": "c_1", "message": "hi"})
    client.conversations_post.assert_awaited_once_with(
        "/conversations/messages", {"type": "SMS", "contactId": "c_1", "message": "hi"},
    )
    client.post.assert_not_awaited()


@pytest.mark.asyncio
async def test_invoice_calls_carry_alt_location(client):
    await InvoicesTools(client).handle_tool_call("get_invoice", {"invoice_id": "inv_1"})
    client.get.assert_awaited_once_with("/invoices/inv_1", {"altId": "loc_1", "altType": "location"})


@pytest.mark.asyncio
async def test_list_invoices_drops_unset_filters(client):
    await InvoicesTools(client).handle_tool_call("list_invoices", {"status": "paid"})
    _path, params = client.get.await_args.args
    assert params["status"] == "paid"
    assert "contactId" not in params
    assert params["altType"] == "location"


@pytest.mark.asyncio
async def test_workflows_default_location(client):
    module = WorkflowTools(client)
    await module.execute_workflow_tool("ghl_get_workflows", {})
    client.get.assert_awaited_with("/workflows/", {"locationId": "loc_1"})
    await module.execute_workflow_tool("ghl_get_workflows", {"location_id": "loc_9"})
    client.get.assert_awaited_with("/workflows/", {"locationId": "loc_9"})


@pytest.mark.asyncio
async def test_response_passes_through_untouched(client):
    client.get.return_value = {"error": "HTTP 404", "detail": "Not found"}
    result = await StoreTools(client).execute_store_tool("ghl_list_shipping_zones", {})
    assert result == {"error": "HTTP 404", "detail": "Not found"}
