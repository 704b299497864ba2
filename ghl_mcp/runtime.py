"""Process-level wiring: client, registry and domain modules.

``ServerRuntime`` owns the one ``CapabilityRegistry`` of a process. Hosts
build it at startup and call ``initialize_once()`` before serving; warm-reuse
hosts may call it from every request, concurrent calls included, and the
registration pass still runs exactly once.
"""

from __future__ import annotations

import logging
import threading

from ghl_mcp.client import GHLClient, Settings
from ghl_mcp.registry import BestEffortNotifier, CapabilityRegistry, register_module
from ghl_mcp.registry.manifest import category_description
from ghl_mcp.tools import DOMAIN_MODULES

logger = logging.getLogger("ghl_mcp.runtime")


class ServerRuntime:
    """Owns the GHL client and the capability registry for one process."""

    def __init__(
        self,
        settings: Settings,
        client: GHLClient | None = None,
        notifier: BestEffortNotifier | None = None,
        modules: dict[str, type] | None = None,
    ) -> None:
        self.settings = settings
        self.client = client or GHLClient(settings)
        self.registry = CapabilityRegistry(notifier=notifier)
        self._modules = modules if modules is not None else DOMAIN_MODULES
        self._initialized = False
        self._init_lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize_once(self) -> bool:
        """Register every domain module, once per runtime.

        Returns True if this call performed the registration, False if it had
        already happened.
        """
        if self._initialized:
            return False
        with self._init_lock:
            if self._initialized:
                return False
            for key, module_cls in self._modules.items():
                register_module(self.registry, key, module_cls(self.client), category_description(key))
            self._initialized = True

        logger.info(
            "Registered %d tools in %d categories (mode=%s)",
            self.registry.total_operation_count(),
            len(self.registry.get_categories()),
            self.settings.mode,
        )
        return True

    async def close(self) -> None:
        await self.client.close()
