"""Async GoHighLevel REST API client using httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ghl_mcp.client.config import Settings

logger = logging.getLogger("ghl_mcp.client")

# The conversations API is pinned to an older version than the rest.
CONVERSATIONS_API_VERSION = "2021-04-15"


class GHLClient:
    """Thin async wrapper around the GoHighLevel REST API.

    Every call is one HTTP request. Failures are logged and returned as
    ``{"error": ..., "detail": ...}`` dicts rather than raised, so domain
    modules can pass results straight through.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers=settings.headers,
            timeout=httpx.Timeout(settings.timeout, connect=10.0),
            transport=transport,
        )

    @property
    def location_id(self) -> str:
        return self._settings.location_id

    def location(self, value: str | None) -> str:
        """Explicit location id, else the configured default."""
        return value or self._settings.location_id

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        payload: dict | None = None,
        version: str | None = None,
    ) -> Any:
        headers = {"Version": version} if version else None
        try:
            r = await self._client.request(
                method,
                path,
                params=_compact(params),
                json=payload if method in ("POST", "PUT", "PATCH") else None,
                headers=headers,
            )
            r.raise_for_status()
            return r.json() if r.text.strip() else {"success": True}
        except httpx.HTTPStatusError as e:
            logger.error("%s %s -> %s", method, path, e.response.status_code)
            return {
                "error": f"HTTP {e.response.status_code}",
                "detail": _error_message(e.response),
            }
        except Exception as e:
            logger.error("%s %s failed: %s", method, path, e)
            return {"error": str(e)}

    # ------------------------------------------------------------------
    # Verbs used by the domain modules
    # ------------------------------------------------------------------

    async def get(self, path: str, params: dict | None = None, version: str | None = None) -> Any:
        return await self._request("GET", path, params=params, version=version)

    async def post(
        self, path: str, payload: dict | None = None, params: dict | None = None, version: str | None = None,
    ) -> Any:
        return await self._request("POST", path, params=params, payload=payload or {}, version=version)

    async def put(
        self, path: str, payload: dict | None = None, params: dict | None = None, version: str | None = None,
    ) -> Any:
        return await self._request("PUT", path, params=params, payload=payload or {}, version=version)

    async def patch(self, path: str, payload: dict | None = None, params: dict | None = None) -> Any:
        return await self._request("PATCH", path, params=params, payload=payload or {})

    async def delete(self, path: str, params: dict | None = None, version: str | None = None) -> Any:
        return await self._request("DELETE", path, params=params, version=version)

    # Conversations endpoints need the older API version header.

    async def conversations_get(self, path: str, params: dict | None = None) -> Any:
        return await self.get(path, params, version=CONVERSATIONS_API_VERSION)

    async def conversations_post(self, path: str, payload: dict | None = None) -> Any:
        return await self.post(path, payload, version=CONVERSATIONS_API_VERSION)

    async def conversations_put(self, path: str, payload: dict | None = None) -> Any:
        return await self.put(path, payload, version=CONVERSATIONS_API_VERSION)

    async def conversations_delete(self, path: str) -> Any:
        return await self.delete(path, version=CONVERSATIONS_API_VERSION)


def _compact(params: dict | None) -> dict | None:
    """Drop None values so optional filters are not sent as empty strings."""
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    message = body.get("message", response.text) if isinstance(body, dict) else response.text
    if isinstance(message, list):
        return ", ".join(str(m) for m in message)
    return str(message)
