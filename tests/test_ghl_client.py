"""Settings loading and GHLClient request/error handling."""

from __future__ import annotations

import dataclasses
import json
import os
from unittest.mock import patch

import httpx
import pytest

from ghl_mcp.client import GHLClient, Settings
from ghl_mcp.client.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL
from ghl_mcp.client.ghl_client import CONVERSATIONS_API_VERSION


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_defaults():
    with patch.dict(os.environ, {}, clear=True):
        s = Settings.from_env()
    assert s.base_url == DEFAULT_BASE_URL
    assert s.api_version == DEFAULT_API_VERSION
    assert s.mode == "dynamic"
    assert s.timeout == 30
    assert not s.proxy_mode


def test_settings_env_override():
    env = {
        "GHL_API_KEY": "pit-123",
        "GHL_BASE_URL": "https://example.test/",
        "GHL_LOCATION_ID": "loc_1",
        "GHL_TIMEOUT": "5",
        "GHL_LOG_LEVEL": "debug",
        "MCP_MODE": " Proxy ",
    }
    with patch.dict(os.environ, env, clear=True):
        s = Settings.from_env()
    assert s.base_url == "https://example.test"
    assert s.location_id == "loc_1"
    assert s.timeout == 5
    assert s.log_level == "DEBUG"
    assert s.proxy_mode


def test_settings_default_mode_argument():
    with patch.dict(os.environ, {}, clear=True):
        assert Settings.from_env(default_mode="proxy").proxy_mode


def test_settings_invalid_mode():
    with patch.dict(os.environ, {"MCP_MODE": "static"}, clear=True):
        with pytest.raises(ValueError, match="MCP_MODE"):
            Settings.from_env()


def test_settings_headers():
    s = Settings(api_key="pit-123")
    assert s.headers["Authorization"] == "Bearer pit-123"
    assert s.headers["Version"] == DEFAULT_API_VERSION
    assert "Authorization" not in Settings(api_key="").headers


def test_settings_frozen_and_key_hidden():
    s = Settings(api_key="secret")
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.mode = "proxy"
    assert "secret" not in repr(s)


# ---------------------------------------------------------------------------
# GHLClient
# ---------------------------------------------------------------------------


def _client(handler, **settings) -> GHLClient:
    s = Settings(api_key="pit-123", base_url="https://ghl.test", location_id="loc_1", **settings)
    return GHLClient(s, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_returns_json_and_drops_none_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json={"contacts": [{"id": "c_1"}]})

    client = _client(handler)
    result = await client.get("/contacts/", {"locationId": "loc_1", "query": None})
    await client.close()

    assert result == {"contacts": [{"id": "c_1"}]}
    assert seen["url"] == "https://ghl.test/contacts/?locationId=loc_1"
    assert seen["auth"] == "Bearer pit-123"


@pytest.mark.asyncio
async def test_post_sends_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": "c_2"})

    client = _client(handler)
    result = await client.post("/contacts/", {"firstName": "Ada"})
    await client.close()

    assert result == {"id": "c_2"}
    assert seen == {"method": "POST", "body": {"firstName": "Ada"}}


@pytest.mark.asyncio
async def test_empty_body_is_success():
    client = _client(lambda request: httpx.Response(204))
    assert await client.delete("/contacts/c_1") == {"success": True}
    await client.close()


@pytest.mark.asyncio
async def test_http_error_becomes_error_dict():
    client = _client(lambda request: httpx.Response(404, json={"message": "Contact not found"}))
    result = await client.get("/contacts/missing")
    await client.close()
    assert result == {"error": "HTTP 404", "detail": "Contact not found"}


@pytest.mark.asyncio
async def test_http_error_with_message_list():
    client = _client(lambda request: httpx.Response(422, json={"message": ["name required", "email invalid"]}))
    result = await client.post("/contacts/", {})
    await client.close()
    assert result["detail"] == "name required, email invalid"


@pytest.mark.asyncio
async def test_transport_error_becomes_error_dict():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    client = _client(handler)
    result = await client.get("/contacts/")
    await client.close()
    assert "connection refused" in result["error"]


@pytest.mark.asyncio
async def test_conversations_use_pinned_version():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["version"] = request.headers["Version"]
        return httpx.Response(200, json={"messageId": "m_1"})

    client = _client(handler)
    await client.conversations_post("/conversations/messages", {"type": "SMS"})
    assert seen["version"] == CONVERSATIONS_API_VERSION
    await client.get("/contacts/")
    assert seen["version"] == DEFAULT_API_VERSION
    await client.close()


def test_location_falls_back_to_configured_id():
    client = _client(lambda request: httpx.Response(200))
    assert client.location(None) == "loc_1"
    assert client.location("loc_2") == "loc_2"
    assert client.location_id == "loc_1"
