"""MCP surface: discovery meta-operations, proxy execution and the server."""

from ghl_mcp.mcp.proxy import ProxyExecutor
from ghl_mcp.mcp.results import ToolResult
from ghl_mcp.mcp.server import create_server
from ghl_mcp.mcp.tools import DiscoveryTools

__all__ = ["DiscoveryTools", "ProxyExecutor", "ToolResult", "create_server"]
