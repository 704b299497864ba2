"""Proxy execution mode for hosts that cannot receive tools/list_changed.

Stateless hosts (one fresh server per HTTP request) fetch the tool list once
and never see a later change, so revealing tools by enabling categories does
nothing for them. In proxy mode the host only ever sees three fixed tools
(``list_categories``, ``search_tools``, ``ghl_execute``) and ``ghl_execute``
reaches every registered operation through ``ProxyExecutor``.

This deliberately drops the enablement gate: category state is reported by
the listings as advice to the caller but is not enforced here. Enforcing it
would leave stateless hosts with no way to reach any CRM operation.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.registry import CapabilityRegistry

logger = logging.getLogger("ghl_mcp.mcp.proxy")


class ProxyExecutor:
    """Runs any registered operation by name, ignoring category enablement."""

    def __init__(self, registry: CapabilityRegistry) -> None:
        self._registry = registry

    async def execute(self, name: str, args: dict[str, Any]) -> Any:
        """Invoke *name* through ``CapabilityRegistry.invoke_direct``.

        Raises ``UnknownOperationError`` if *name* was never registered.
        Whatever the underlying module raises propagates unchanged.
        """
        if not self._registry.is_enabled(name) and self._registry.has_operation(name):
            logger.debug("Proxy executing %s from disabled category %r", name, self._registry.category_of(name))
        return await self._registry.invoke_direct(name, args)
