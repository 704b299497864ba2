"""Entry point: ``python -m ghl_mcp.mcp`` (also installed as ``ghl-mcp``)

Starts the GoHighLevel MCP server over stdio for Claude Desktop, Cursor and
other MCP clients that keep one session open.

Environment variables
---------------------
GHL_API_KEY          Private integration / OAuth token (required for API calls).
GHL_LOCATION_ID      Default sub-account id.
GHL_BASE_URL         API root (default ``https://services.leadconnectorhq.com``).
GHL_TIMEOUT          Request timeout in seconds (default ``30``).
GHL_LOG_LEVEL        Python log level (default ``WARNING``).
MCP_MODE             ``dynamic`` (default) or ``proxy``.
MCP_TRANSPORT        ``stdio`` (default). Use ``ghl-mcp-http`` for HTTP.
"""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.environ.get("GHL_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

from ghl_mcp.client import Settings  # noqa: E402
from ghl_mcp.mcp.server import create_server  # noqa: E402
from ghl_mcp.registry import McpSessionNotifier  # noqa: E402
from ghl_mcp.runtime import ServerRuntime  # noqa: E402

logger = logging.getLogger("ghl_mcp.mcp")


async def main() -> None:
    settings = Settings.from_env()
    notifier = McpSessionNotifier()
    runtime = ServerRuntime(settings, notifier=notifier)
    try:
        runtime.initialize_once()
        server = create_server(runtime.registry, proxy_mode=settings.proxy_mode, notifier=notifier)

        transport = os.environ.get("MCP_TRANSPORT", "stdio")
        if transport != "stdio":
            raise NotImplementedError(f"Transport {transport!r} is not served here; use ghl-mcp-http")

        from mcp.server.lowlevel import NotificationOptions
        from mcp.server.stdio import stdio_server

        logger.info("Serving over stdio (mode=%s)", settings.mode)
        async with stdio_server() as (read_stream, write_stream):
            init_options = server.create_initialization_options(
                notification_options=NotificationOptions(tools_changed=not settings.proxy_mode),
            )
            await server.run(read_stream, write_stream, init_options)
    finally:
        await runtime.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
