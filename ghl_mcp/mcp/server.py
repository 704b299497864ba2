"""MCP server exposing the capability registry.

Uses the low-level ``mcp.server.Server`` with one ``list_tools`` and one
``call_tool`` handler. Meta-operations are dispatched through the catalog in
``ghl_mcp.mcp.registry``; everything else is a CRM operation routed through
the registry.

Dynamic mode lists the meta-operations followed by every enabled operation
and sends ``tools/list_changed`` after toggles. Proxy mode lists exactly the
three proxy meta-operations.

Discovery results go back as their summary text; CRM responses, including
those reached through ``ghl_execute``, go back as the JSON envelope.

Input validation is left to the handlers (``validate_input=False``) so a
missing parameter comes back as guidance text instead of a protocol error.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp import types
from mcp.server import Server

from ghl_mcp.mcp.proxy import ProxyExecutor
from ghl_mcp.mcp.registry import catalog_for
from ghl_mcp.mcp.results import (
    ToolResult,
    _guidance,
    exception_result,
    serialize,
    wrap_operation_result,
)
from ghl_mcp.mcp.tools import DiscoveryTools
from ghl_mcp.registry import (
    CapabilityRegistry,
    McpSessionNotifier,
    OperationDisabledError,
    UnknownOperationError,
)

logger = logging.getLogger("ghl_mcp.mcp.server")

SERVER_NAME = "ghl-mcp-server"

# Meta-tools whose result is a CRM response; these go out as JSON, not summary text.
_OPERATION_RESULT_METHODS = frozenset({"ghl_execute"})


def create_server(
    registry: CapabilityRegistry,
    proxy_mode: bool = False,
    notifier: McpSessionNotifier | None = None,
) -> Server:
    """Create an MCP Server over *registry*.

    *notifier* is the ``McpSessionNotifier`` the registry was built with; it
    is bound to the new server so enable/disable can reach the session.
    """
    server = Server(SERVER_NAME)
    if notifier is not None:
        notifier.bind(server)

    tools = DiscoveryTools(registry, ProxyExecutor(registry), proxy_mode=proxy_mode)
    catalog = catalog_for(proxy_mode)
    dispatch: dict[str, str] = {td.name: method_name for method_name, td in catalog}

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        listed = [td.to_mcp_tool() for _method_name, td in catalog]
        if not proxy_mode:
            listed += [d.to_mcp_tool() for d in registry.list_visible_operations()]
        return listed

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None = None) -> list[types.TextContent]:
        args = arguments or {}
        method_name = dispatch.get(name)
        if method_name is not None:
            result = await _call_meta(tools, method_name, args)
            text = serialize(result) if method_name in _OPERATION_RESULT_METHODS else result.summary
            return [types.TextContent(type="text", text=text)]

        if proxy_mode:
            result = _guidance(
                f'Unknown tool: "{name}". In this mode CRM tools are run through '
                f'ghl_execute({{tool: "{name}", arguments: {{...}}}}).',
                "UnknownOperationError",
            )
        else:
            result = await _call_operation(registry, name, args)
        return [types.TextContent(type="text", text=serialize(result))]

    return server


async def _call_meta(tools: DiscoveryTools, method_name: str, args: dict[str, Any]) -> ToolResult:
    try:
        return await getattr(tools, method_name)(**args)
    except TypeError as e:
        # Unexpected argument names never reach the method body.
        return _guidance(f"Invalid arguments for {method_name}: {e}", "ValidationError")


async def _call_operation(registry: CapabilityRegistry, name: str, args: dict[str, Any]) -> ToolResult:
    try:
        raw = await registry.invoke(name, args)
    except OperationDisabledError as e:
        return _guidance(str(e), "OperationDisabledError", category=e.category)
    except UnknownOperationError as e:
        return _guidance(str(e), "UnknownOperationError")
    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e)
        return exception_result(name, e)
    return wrap_operation_result(name, raw)
