"""FastAPI host for stateless deployments.

Serves the MCP endpoint over streamable HTTP at ``/mcp/`` plus a few JSON
endpoints for monitoring:

  GET /health         liveness and tool counts
  GET /capabilities   categories with their tool counts
  GET /tools          the tools an MCP client will see

The MCP endpoint runs the SDK session manager in stateless mode: every request
gets a fresh transport and no session outlives it, so no client can receive a
later ``tools/list_changed``. The server therefore always runs in proxy mode
here (three fixed tools, ``ghl_execute`` reaching everything).

The registry is built once at startup through ``ServerRuntime.initialize_once``
and reused by every request.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from ghl_mcp.client import Settings
from ghl_mcp.mcp.registry import PROXY_CATALOG
from ghl_mcp.mcp.server import SERVER_NAME, create_server
from ghl_mcp.runtime import ServerRuntime

logger = logging.getLogger("ghl_mcp.api")

# ---------------------------------------------------------------------------
# API key authentication (optional, enabled when MCP_API_KEY is set)
# ---------------------------------------------------------------------------

_bearer = HTTPBearer(auto_error=False)


def _verify_api_key(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> None:
    """Verify the Bearer token matches MCP_API_KEY.

    If MCP_API_KEY is not set, all requests are allowed (open dev mode).
    """
    api_key = os.getenv("MCP_API_KEY")
    if not api_key:
        return
    if not credentials or credentials.credentials != api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


# ---------------------------------------------------------------------------
# Lifespan: build the registry once, run the MCP session manager
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the runtime on startup, close the HTTP client on shutdown."""
    load_dotenv()

    settings = Settings.from_env(default_mode="proxy")
    if not settings.proxy_mode:
        logger.warning("MCP_MODE=%s ignored: the HTTP host always runs in proxy mode", settings.mode)

    runtime = getattr(app.state, "runtime", None) or ServerRuntime(settings)
    runtime.initialize_once()

    server = create_server(runtime.registry, proxy_mode=True)
    manager = StreamableHTTPSessionManager(app=server, json_response=True, stateless=True)

    app.state.runtime = runtime
    app.state.mcp_manager = manager

    logger.info(
        "Starting %s | %d tools in %d categories",
        SERVER_NAME,
        runtime.registry.total_operation_count(),
        len(runtime.registry.get_categories()),
    )
    try:
        async with manager.run():
            yield
    finally:
        await runtime.close()
        app.state.runtime = None
        logger.info("Shutting down %s", SERVER_NAME)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

_rate_limit = os.getenv("RATE_LIMIT_PER_MIN", "120")
limiter = Limiter(key_func=get_remote_address, default_limits=[f"{_rate_limit}/minute"])

app = FastAPI(
    title="GoHighLevel MCP Server",
    description=(
        "MCP server for the GoHighLevel CRM. Tools are organized into categories "
        "and reached through list_categories, search_tools and ghl_execute."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _get_runtime(request: Request) -> ServerRuntime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Server is not initialized")
    return runtime


async def _handle_mcp(scope, receive, send) -> None:
    manager: StreamableHTTPSessionManager = app.state.mcp_manager
    await manager.handle_request(scope, receive, send)


app.mount("/mcp", app=_handle_mcp)


@app.get("/health", tags=["system"], dependencies=[Depends(_verify_api_key)])
@limiter.limit(f"{_rate_limit}/minute")
async def health(request: Request) -> dict:
    """Liveness check with registry counts."""
    runtime = _get_runtime(request)
    return {
        "status": "ok",
        "server": SERVER_NAME,
        "mode": "proxy",
        "categories": len(runtime.registry.get_categories()),
        "tools": runtime.registry.total_operation_count(),
    }


@app.get("/capabilities", tags=["system"], dependencies=[Depends(_verify_api_key)])
@limiter.limit(f"{_rate_limit}/minute")
async def capabilities(request: Request) -> dict:
    """Every category with its description, state and tool count."""
    runtime = _get_runtime(request)
    categories = runtime.registry.get_categories()
    return {
        "total_tools": runtime.registry.total_operation_count(),
        "categories": [
            {
                "key": c.key,
                "description": c.description,
                "enabled": c.enabled,
                "tool_count": c.operation_count,
            }
            for c in categories
        ],
    }


@app.get("/tools", tags=["system"], dependencies=[Depends(_verify_api_key)])
@limiter.limit(f"{_rate_limit}/minute")
async def tools(request: Request) -> dict:
    """The fixed tool list an MCP client sees on this host."""
    _get_runtime(request)
    return {
        "tools": [
            {"name": td.name, "description": td.description, "inputSchema": td.input_schema}
            for _method_name, td in PROXY_CATALOG
        ],
    }


# ---------------------------------------------------------------------------
# Entry point (for uvicorn programmatic launch)
# ---------------------------------------------------------------------------


def serve(host: str = "0.0.0.0", port: int | None = None, reload: bool = False) -> None:
    """Launch the FastAPI server via uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=os.environ.get("GHL_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    uvicorn.run(
        "ghl_mcp.api:app",
        host=host,
        port=port or int(os.getenv("PORT", "8000")),
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    serve()
