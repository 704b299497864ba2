"""ServerRuntime: one-time registration of every domain module."""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from ghl_mcp.client import Settings
from ghl_mcp.registry.manifest import get_category_definition
from ghl_mcp.runtime import ServerRuntime
from ghl_mcp.tools import DOMAIN_MODULES


@pytest.fixture
def runtime():
    return ServerRuntime(Settings(api_key="pit-test", location_id="loc_1"), client=MagicMock())


def test_initialize_registers_all_categories(runtime):
    assert not runtime.initialized
    assert runtime.initialize_once() is True
    assert runtime.initialized

    keys = [c.key for c in runtime.registry.get_categories()]
    assert keys == list(DOMAIN_MODULES)
    assert runtime.registry.total_operation_count() > 100
    assert runtime.registry.enabled_operation_count() == 0


def test_categories_carry_manifest_descriptions(runtime):
    runtime.initialize_once()
    for c in runtime.registry.get_categories():
        assert c.description == get_category_definition(c.key).description


def test_second_call_is_noop(runtime):
    runtime.initialize_once()
    total = runtime.registry.total_operation_count()
    assert runtime.initialize_once() is False
    assert runtime.registry.total_operation_count() == total


def test_concurrent_initialize_registers_once(runtime):
    results: list[bool] = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(runtime.initialize_once())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(runtime.registry.get_categories()) == len(DOMAIN_MODULES)


def test_custom_module_set():
    class Tiny:
        def __init__(self, client):
            self.client = client

        def get_tools(self):
            from ghl_mcp.registry import OperationDefinition
            return [OperationDefinition(name="ping", description="Ping")]

        async def execute_tool(self, name, args):
            return "pong"

    rt = ServerRuntime(Settings(api_key=""), client=MagicMock(), modules={"tiny": Tiny})
    rt.initialize_once()
    assert rt.registry.has_operation("ping")
    assert rt.registry.get_categories()[0].description == "tiny"
