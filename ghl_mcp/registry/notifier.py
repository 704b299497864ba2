"""Visibility-changed notifiers.

The registry signals "the visible operation list changed" through an injected
``BestEffortNotifier``. Delivery is best-effort by contract: ``notify()`` never
raises, whatever the concrete transport does. Subclasses implement
``_deliver()`` and are free to raise from it.

Notifications carry no payload. A consumer must re-read
``CapabilityRegistry.list_visible_operations()`` instead of assuming one
notification equals one delta.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

logger = logging.getLogger("ghl_mcp.registry.notifier")


class BestEffortNotifier(ABC):
    """Notifier whose delivery errors are swallowed and logged."""

    def notify(self) -> None:
        try:
            self._deliver()
        except Exception as e:
            logger.warning("Could not send tools/list_changed notification: %s", e)

    @abstractmethod
    def _deliver(self) -> None:
        ...


class NullNotifier(BestEffortNotifier):
    """Drops every notification. Used by stateless hosts and tests."""

    def _deliver(self) -> None:
        return None


class CallbackNotifier(BestEffortNotifier):
    """Calls a plain function on every change."""

    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    def _deliver(self) -> None:
        self._callback()


class McpSessionNotifier(BestEffortNotifier):
    """Sends ``notifications/tools/list_changed`` on the current MCP session.

    The session is read from the low-level server's request context, so a
    toggle made outside an MCP request (no connected client yet) fails to
    deliver, which is fine. The send itself is scheduled on the running loop;
    a failure there is logged from the task's done-callback.
    """

    def __init__(self) -> None:
        self._server: Any = None
        self._pending: set[asyncio.Task] = set()

    def bind(self, server: Any) -> None:
        """Attach the ``mcp.server.Server`` whose sessions receive notifications."""
        self._server = server

    def _deliver(self) -> None:
        if self._server is None:
            raise RuntimeError("notifier is not bound to an MCP server")
        session = self._server.request_context.session
        task = asyncio.get_running_loop().create_task(session.send_tool_list_changed())
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("tools/list_changed delivery failed: %s", exc)
