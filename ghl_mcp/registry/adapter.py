"""Module adapters: one uniform shape for every domain module.

Domain modules grew several naming conventions for "list my operations" and
"dispatch by name":

    get_tool_definitions() / get_tools()
    execute_tool() / handle_tool_call() / execute_<module>_tool()

``OperationModule`` is the uniform interface the registry works with.
``adapt_module()`` decides once per module, at wrap time, which of the module's
methods fill that interface; nothing is re-resolved per call.

Usage:
    adapter = adapt_module(ContactTools(client))
    definitions = adapter.list_operations()
    result = await adapter.invoke("get_contact", {"contactId": "abc"})

Or in one step:
    register_module(registry, "contacts", ContactTools(client), "Contact management")
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ghl_mcp.registry.errors import AdapterContractError
from ghl_mcp.registry.models import OperationDefinition

if TYPE_CHECKING:
    from ghl_mcp.registry.registry import CapabilityRegistry

logger = logging.getLogger("ghl_mcp.registry.adapter")

# Probe order matters: the first name found wins.
LIST_METHOD_NAMES: tuple[str, ...] = (
    "get_tool_definitions",
    "get_tools",
)

GENERIC_DISPATCH_NAMES: tuple[str, ...] = (
    "execute_tool",
    "handle_tool_call",
)

MODULE_DISPATCH_NAMES: tuple[str, ...] = (
    "execute_association_tool",
    "execute_custom_field_v2_tool",
    "execute_workflow_tool",
    "execute_survey_tool",
    "execute_store_tool",
    "execute_products_tool",
)

DISPATCH_METHOD_NAMES: tuple[str, ...] = GENERIC_DISPATCH_NAMES + MODULE_DISPATCH_NAMES


class OperationModule(ABC):
    """Uniform capability interface: list operations, invoke one by name."""

    @abstractmethod
    def list_operations(self) -> list[OperationDefinition]:
        ...

    @abstractmethod
    async def invoke(self, name: str, args: dict[str, Any]) -> Any:
        ...


class ModuleAdapter(OperationModule):
    """Binds a module's own list/dispatch methods to ``OperationModule``.

    Either callable may be None when the module has no recognized method; the
    matching call then raises ``AdapterContractError``.
    """

    def __init__(
        self,
        module: Any,
        list_fn: Callable[[], list[OperationDefinition]] | None,
        dispatch_fn: Callable[[str, dict[str, Any]], Any] | None,
    ) -> None:
        self._module = module
        self._list_fn = list_fn
        self._dispatch_fn = dispatch_fn

    @property
    def module_name(self) -> str:
        return type(self._module).__name__

    @property
    def can_dispatch(self) -> bool:
        return self._dispatch_fn is not None

    def list_operations(self) -> list[OperationDefinition]:
        if self._list_fn is None:
            raise AdapterContractError(
                f"{self.module_name} has no {' or '.join(n + '()' for n in LIST_METHOD_NAMES)} method"
            )
        return list(self._list_fn())

    async def invoke(self, name: str, args: dict[str, Any]) -> Any:
        if self._dispatch_fn is None:
            raise AdapterContractError(
                f"{self.module_name} has no known execute method for tool: {name}"
            )
        result = self._dispatch_fn(name, args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        list_name = getattr(self._list_fn, "__name__", None)
        dispatch_name = getattr(self._dispatch_fn, "__name__", None)
        return f"ModuleAdapter({self.module_name}, list={list_name!r}, dispatch={dispatch_name!r})"


def _resolve(module: Any, names: tuple[str, ...]) -> Callable[..., Any] | None:
    for name in names:
        fn = getattr(module, name, None)
        if callable(fn):
            return fn
    return None


def adapt_module(module: Any) -> OperationModule:
    """Return an ``OperationModule`` view of *module*.

    Modules that already implement the interface are returned unchanged.
    """
    if isinstance(module, OperationModule):
        return module
    return ModuleAdapter(
        module,
        list_fn=_resolve(module, LIST_METHOD_NAMES),
        dispatch_fn=_resolve(module, DISPATCH_METHOD_NAMES),
    )


def register_module(
    registry: "CapabilityRegistry",
    key: str,
    module: Any,
    description: str = "",
) -> int:
    """Adapt *module* and register its operations under category *key*.

    Returns the number of operations accepted. A module that breaks the
    adapter contract is skipped with an error log; the registry keeps going.
    """
    adapter = adapt_module(module)
    try:
        definitions = adapter.list_operations()
    except AdapterContractError as e:
        logger.error("Skipping category %r: %s", key, e)
        return 0
    if isinstance(adapter, ModuleAdapter) and not adapter.can_dispatch:
        logger.error("Skipping category %r: %s has no known execute method", key, adapter.module_name)
        return 0
    return registry.register_category(key, description, definitions, adapter.invoke)
