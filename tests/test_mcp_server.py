"""MCP server: list_tools / call_tool handlers in dynamic and proxy mode."""

from __future__ import annotations

import asyncio
import json
import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from mcp import types

from ghl_mcp.mcp.registry import DYNAMIC_CATALOG, PROXY_CATALOG
from ghl_mcp.mcp.results import ToolResult, serialize
from ghl_mcp.mcp.server import create_server
from ghl_mcp.mcp.tools import DiscoveryTools
from ghl_mcp.registry import CapabilityRegistry, McpSessionNotifier, OperationDefinition


@pytest.fixture
def registry():
    reg = CapabilityRegistry(notifier=McpSessionNotifier())
    reg.register_category(
        "contacts",
        "Contact management",
        [
            OperationDefinition(name="create_contact", description="Create a new contact"),
            OperationDefinition(name="get_contact", description="Get a contact by ID"),
        ],
        AsyncMock(return_value={"id": "c_1", "firstName": "Ada"}),
    )
    reg.register_category(
        "billing",
        "Invoices",
        [OperationDefinition(name="create_invoice", description="Create a new invoice")],
        AsyncMock(return_value={"error": "HTTP 422", "detail": "Missing contact"}),
    )
    return reg


async def _list(server) -> list[types.Tool]:
    handler = server.request_handlers[types.ListToolsRequest]
    result = await handler(types.ListToolsRequest(method="tools/list"))
    return result.root.tools


async def _call_result(server, name: str, arguments: dict | None = None) -> types.CallToolResult:
    handler = server.request_handlers[types.CallToolRequest]
    result = await handler(types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments or {}),
    ))
    return result.root


async def _call(server, name: str, arguments: dict | None = None) -> str:
    content = (await _call_result(server, name, arguments)).content
    assert len(content) == 1
    return content[0].text


# ---------------------------------------------------------------------------
# Catalog integrity
# ---------------------------------------------------------------------------


def test_catalog_method_names_match_discovery_tools():
    for method_name, _td in DYNAMIC_CATALOG + PROXY_CATALOG:
        assert hasattr(DiscoveryTools, method_name), (
            f"catalog references '{method_name}' but DiscoveryTools has no such method"
        )


def test_proxy_catalog_is_three_fixed_tools():
    assert [td.name for _m, td in PROXY_CATALOG] == ["list_categories", "search_tools", "ghl_execute"]


# ---------------------------------------------------------------------------
# Dynamic mode
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_dynamic_lists_meta_tools_then_enabled(registry):
    server = create_server(registry)
    names = [t.name for t in await _list(server)]
    assert names == [td.name for _m, td in DYNAMIC_CATALOG]

    await _call(server, "enable_category", {"category": "contacts"})
    names = [t.name for t in await _list(server)]
    assert names[-2:] == ["create_contact", "get_contact"]
    assert "create_invoice" not in names


@pytest.mark.asyncio
async def test_dynamic_meta_result_is_summary_text(registry):
    server = create_server(registry)
    text = await _call(server, "enable_category", {"category": "contacts"})
    assert 'Enabled category "contacts"' in text


@pytest.mark.asyncio
async def test_dynamic_missing_argument_is_guidance(registry):
    server = create_server(registry)
    text = await _call(server, "search_tools", {})
    assert '"query" parameter is required' in text


@pytest.mark.asyncio
async def test_dynamic_unexpected_argument_is_guidance(registry):
    server = create_server(registry)
    text = await _call(server, "list_categories", {"bogus": 1})
    assert "Invalid arguments for list_categories" in text


@pytest.mark.asyncio
async def test_dynamic_disabled_operation_is_guidance(registry):
    server = create_server(registry)
    parsed = json.loads(await _call(server, "create_invoice", {}))
    assert parsed["ok"] is False
    assert parsed["error"]["type"] == "OperationDisabledError"
    assert "enable_category" in parsed["summary"]


@pytest.mark.asyncio
async def test_dynamic_enabled_operation_runs(registry):
    server = create_server(registry)
    await _call(server, "enable_category", {"category": "contacts"})
    parsed = json.loads(await _call(server, "get_contact", {"contact_id": "c_1"}))
    assert parsed["ok"] is True
    assert parsed["data"]["firstName"] == "Ada"


@pytest.mark.asyncio
async def test_dynamic_api_error_is_not_ok(registry):
    server = create_server(registry)
    await _call(server, "enable_category", {"category": "billing"})
    parsed = json.loads(await _call(server, "create_invoice", {}))
    assert parsed["ok"] is False
    assert parsed["error"]["type"] == "GHLAPIError"


@pytest.mark.asyncio
async def test_dynamic_unknown_tool(registry):
    server = create_server(registry)
    parsed = json.loads(await _call(server, "nonexistent_tool"))
    assert parsed["ok"] is False
    assert "Unknown tool" in parsed["summary"]


@pytest.mark.asyncio
async def test_toggle_outside_session_does_not_fail(registry):
    notifier = McpSessionNotifier()
    reg = CapabilityRegistry(notifier=notifier)
    reg.register_category("a", "A", [OperationDefinition(name="x", description="x")], AsyncMock())
    server = create_server(reg, notifier=notifier)
    # No request context: delivery fails inside the notifier and is logged.
    text = await _call(server, "enable_category", {"category": "a"})
    assert 'Enabled category "a"' in text


@pytest.mark.asyncio
async def test_toggle_text_names_operations(registry):
    server = create_server(registry)
    await _call(server, "enable_category", {"category": "contacts"})

    again = await _call(server, "enable_category", {"category": "contacts"})
    assert "already enabled" in again
    assert "create_contact" in again and "get_contact" in again

    disabled = await _call(server, "disable_category", {"category": "contacts"})
    assert "create_contact" in disabled and "get_contact" in disabled

    noop = await _call(server, "disable_category", {"category": "contacts"})
    assert "already disabled" in noop
    assert "create_contact" in noop and "get_contact" in noop


@pytest.mark.asyncio
@pytest.mark.parametrize("name, arguments", [
    ("search_tools", {"query": 123}),
    ("search_tools", {"query": "contact", "category": ["contacts"]}),
    ("enable_category", {"category": {"key": "contacts"}}),
    ("disable_category", {"category": 5}),
])
async def test_non_string_arguments_are_guidance_not_faults(registry, name, arguments):
    server = create_server(registry)
    result = await _call_result(server, name, arguments)
    assert not result.isError
    assert "Error:" in result.content[0].text


@pytest.mark.asyncio
async def test_proxy_execute_non_string_tool_is_guidance(registry):
    server = create_server(registry, proxy_mode=True)
    result = await _call_result(server, "ghl_execute", {"tool": 1, "arguments": {}})
    assert not result.isError
    assert json.loads(result.content[0].text)["error"]["type"] == "ValidationError"


# ---------------------------------------------------------------------------
# tools/list_changed delivery
# ---------------------------------------------------------------------------


def _bound_notifier(send: AsyncMock) -> McpSessionNotifier:
    notifier = McpSessionNotifier()
    session = SimpleNamespace(send_tool_list_changed=send)
    notifier.bind(SimpleNamespace(request_context=SimpleNamespace(session=session)))
    return notifier


async def _drain() -> None:
    # Let the scheduled send run, then its done-callback.
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_enable_sends_tools_list_changed():
    send = AsyncMock()
    reg = CapabilityRegistry(notifier=_bound_notifier(send))
    reg.register_category("a", "A", [OperationDefinition(name="x", description="x")], AsyncMock())

    reg.enable_category("a")
    await _drain()
    send.assert_awaited_once()

    reg.enable_category("a")
    await _drain()
    send.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_send_is_logged_not_raised(caplog):
    send = AsyncMock(side_effect=RuntimeError("session closed"))
    reg = CapabilityRegistry(notifier=_bound_notifier(send))
    reg.register_category("a", "A", [OperationDefinition(name="x", description="x")], AsyncMock())

    with caplog.at_level(logging.WARNING, logger="ghl_mcp.registry.notifier"):
        result = reg.enable_category("a")
        await _drain()

    assert result.changed is True
    assert reg.is_enabled("x")
    send.assert_awaited_once()
    assert "session closed" in caplog.text


# ---------------------------------------------------------------------------
# Proxy mode
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_proxy_lists_exactly_three_tools(registry):
    server = create_server(registry, proxy_mode=True)
    registry.enable_all()
    tools = await _list(server)
    assert [t.name for t in tools] == ["list_categories", "search_tools", "ghl_execute"]
    assert all(isinstance(t, types.Tool) for t in tools)


@pytest.mark.asyncio
async def test_proxy_execute_disabled_operation(registry):
    server = create_server(registry, proxy_mode=True)
    parsed = json.loads(await _call(
        server, "ghl_execute", {"tool": "get_contact", "arguments": {"contact_id": "c_1"}},
    ))
    assert parsed["ok"] is True
    assert parsed["data"]["firstName"] == "Ada"
    assert not registry.is_enabled("get_contact")


@pytest.mark.asyncio
async def test_proxy_rejects_direct_operation_call(registry):
    server = create_server(registry, proxy_mode=True)
    parsed = json.loads(await _call(server, "get_contact", {}))
    assert parsed["ok"] is False
    assert "ghl_execute" in parsed["summary"]


@pytest.mark.asyncio
async def test_proxy_enable_category_is_not_exposed(registry):
    server = create_server(registry, proxy_mode=True)
    parsed = json.loads(await _call(server, "enable_category", {"category": "contacts"}))
    assert parsed["ok"] is False
    assert not registry.is_enabled("get_contact")


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def test_serialize_ok_result():
    r = ToolResult(ok=True, summary="Listed 5 contacts", facts={}, data=[1, 2, 3], error=None)
    parsed = json.loads(serialize(r))
    assert parsed == {"ok": True, "summary": "Listed 5 contacts", "data": [1, 2, 3], "error": None}


def test_serialize_error_result():
    r = ToolResult(ok=False, summary="Failed", facts={}, data=None, error={"type": "GHLAPIError", "detail": "gone"})
    parsed = json.loads(serialize(r))
    assert parsed["ok"] is False
    assert parsed["error"]["type"] == "GHLAPIError"


def test_entrypoint_importable():
    import ghl_mcp.mcp.__main__  # noqa: F401
