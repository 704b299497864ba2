"""Records held by the CapabilityRegistry.

OperationDefinition is what a domain module produces; CategoryRecord and
OperationRecord are the registry's own bookkeeping around it. Only the
``enabled`` flags are mutable, and only CapabilityRegistry flips them.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

# (operation_name, arguments) -> awaitable raw result
Invoker = Callable[[str, dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class OperationDefinition:
    """Definition of one invocable operation.

    input_schema follows JSON Schema format:
        {"type": "object", "properties": {...}, "required": [...]}
    """

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_mcp_tool(self):
        """Return the ``mcp.types.Tool`` the host sees for this operation."""
        from mcp import types

        return types.Tool(
            name=self.name,
            description=self.description or "",
            inputSchema=self.input_schema,
        )


@dataclass
class CategoryRecord:
    key: str
    description: str
    enabled: bool = False


@dataclass
class OperationRecord:
    """One registered operation.

    Fields:
        definition: The immutable OperationDefinition.
        category:   Key of the owning CategoryRecord (non-owning back-reference).
        enabled:    Mirrors the category flag; flipped in the same locked toggle.
        invoke:     Dispatcher bound from the owning module's adapter.
    """

    definition: OperationDefinition
    category: str
    enabled: bool
    invoke: Invoker

    @property
    def name(self) -> str:
        return self.definition.name


# ---------------------------------------------------------------------------
# Read-side views returned by the registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryInfo:
    key: str
    description: str
    enabled: bool
    operation_count: int
    operation_names: list[str]


@dataclass(frozen=True)
class SearchMatch:
    name: str
    description: str
    category: str
    enabled: bool
    definition: OperationDefinition


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of enable_category / disable_category.

    names holds every operation in the category, whether or not the call
    actually changed anything (changed=False means the call was a no-op).
    """

    category: str
    names: list[str]
    changed: bool

    @property
    def count(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class EnableAllResult:
    total_enabled: int
    categories: list[str]
