"""CapabilityRegistry: categories, operations and their visibility.

Single source of truth for which operations exist and which ones the caller
currently sees. Every category starts disabled; the caller enables categories
on demand through the discovery meta-operations so only a handful of
definitions occupy its context at a time.

Lifecycle:
    registry = CapabilityRegistry(notifier=McpSessionNotifier())
    registry.register_category("contacts", "Contact management", defs, adapter.invoke)
    ...                                  # registration pass, once, at startup
    registry.enable_category("contacts") # notify host: tools/list_changed
    await registry.invoke("get_contact", {"contactId": "abc"})

Ordering: operations are kept in registration order everywhere (visible list,
search results, per-category name lists). Nothing is re-sorted.

Mutation: only register_category (startup) and the enable/disable methods
mutate records, all under ``self._lock``. A category flag and its members'
flags are flipped inside the same critical section, so a half-toggled
category is never observable from outside.
"""

from __future__ import annotations

import logging
import threading
import warnings
from typing import Any

from ghl_mcp.registry.errors import (
    DuplicateRegistrationWarning,
    OperationDisabledError,
    UnknownCategoryError,
    UnknownOperationError,
)
from ghl_mcp.registry.models import (
    CategoryInfo,
    CategoryRecord,
    EnableAllResult,
    Invoker,
    OperationDefinition,
    OperationRecord,
    SearchMatch,
    ToggleResult,
)
from ghl_mcp.registry.notifier import BestEffortNotifier, NullNotifier

logger = logging.getLogger("ghl_mcp.registry")


class CapabilityRegistry:
    """Category-gated registry of CRM operations."""

    def __init__(self, notifier: BestEffortNotifier | None = None) -> None:
        self._categories: dict[str, CategoryRecord] = {}
        self._operations: dict[str, OperationRecord] = {}
        self._notifier: BestEffortNotifier = notifier or NullNotifier()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_category(
        self,
        key: str,
        description: str,
        definitions: list[OperationDefinition],
        invoker: Invoker,
    ) -> int:
        """Register *definitions* under category *key*, bound to *invoker*.

        Returns the number of operations accepted.

        A new category starts disabled. Registering an existing key again
        overwrites its description and adds any new operations (they take the
        category's current flag). An operation name that is already
        registered, in this or any other category, is rejected with a
        DuplicateRegistrationWarning; the first registration stays.

        A category is only created if at least one operation is accepted.
        """
        with self._lock:
            existing = self._categories.get(key)
            enabled = existing.enabled if existing is not None else False

            accepted: list[OperationRecord] = []
            seen: set[str] = set()
            for definition in definitions:
                name = definition.name
                if name in self._operations or name in seen:
                    owner = self._operations[name].category if name in self._operations else key
                    msg = (
                        f'duplicate tool name "{name}" in category "{key}" '
                        f'(already registered in "{owner}")'
                    )
                    logger.warning(msg)
                    warnings.warn(msg, DuplicateRegistrationWarning, stacklevel=2)
                    continue
                seen.add(name)
                accepted.append(OperationRecord(
                    definition=definition,
                    category=key,
                    enabled=enabled,
                    invoke=invoker,
                ))

            if existing is None and not accepted:
                logger.warning("Category %r registered no operations; not created", key)
                return 0

            if existing is None:
                self._categories[key] = CategoryRecord(key=key, description=description, enabled=False)
            else:
                existing.description = description

            for record in accepted:
                self._operations[record.name] = record

        logger.info("Registered category %r with %d tool(s)", key, len(accepted))
        return len(accepted)

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def enable_category(self, key: str) -> ToggleResult:
        """Make every operation in *key* visible. Idempotent."""
        return self._set_category(key, True)

    def disable_category(self, key: str) -> ToggleResult:
        """Hide every operation in *key*. Idempotent."""
        return self._set_category(key, False)

    def _set_category(self, key: str, enabled: bool) -> ToggleResult:
        with self._lock:
            category = self._categories.get(key)
            if category is None:
                raise UnknownCategoryError(key)

            names = self._names_for(key)
            if category.enabled == enabled:
                return ToggleResult(category=key, names=names, changed=False)

            category.enabled = enabled
            for record in self._operations.values():
                if record.category == key:
                    record.enabled = enabled

        logger.info("%s category %r (%d tools)", "Enabled" if enabled else "Disabled", key, len(names))
        self._notifier.notify()
        return ToggleResult(category=key, names=names, changed=True)

    def enable_all(self) -> EnableAllResult:
        """Enable every disabled category in one batch, with at most one notification."""
        with self._lock:
            newly_enabled: list[str] = []
            for key, category in self._categories.items():
                if not category.enabled:
                    category.enabled = True
                    newly_enabled.append(key)
            for record in self._operations.values():
                record.enabled = True
            total = len(self._operations)

        if newly_enabled:
            logger.info("Enabled all categories (%d newly enabled, %d tools)", len(newly_enabled), total)
            self._notifier.notify()
        return EnableAllResult(total_enabled=total, categories=newly_enabled)

    def list_visible_operations(self) -> list[OperationDefinition]:
        """Definitions of every enabled operation, in registration order."""
        with self._lock:
            return [r.definition for r in self._operations.values() if r.enabled]

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def invoke(self, name: str, args: dict[str, Any]) -> Any:
        """Invoke an enabled operation.

        Raises:
            UnknownOperationError:  name was never registered.
            OperationDisabledError: the owning category is disabled.
        """
        with self._lock:
            record = self._operations.get(name)
            if record is None:
                raise UnknownOperationError(name)
            if not record.enabled:
                raise OperationDisabledError(name, record.category)
            invoke = record.invoke
        return await invoke(name, args)

    async def invoke_direct(self, name: str, args: dict[str, Any]) -> Any:
        """Invoke any registered operation, ignoring category enablement.

        Only the proxy execution mode calls this; it cannot raise
        OperationDisabledError.
        """
        with self._lock:
            record = self._operations.get(name)
            if record is None:
                raise UnknownOperationError(name)
            invoke = record.invoke
        return await invoke(name, args)

    # ------------------------------------------------------------------
    # Search & read accessors
    # ------------------------------------------------------------------

    def search(self, query: str, category: str | None = None) -> list[SearchMatch]:
        """Case-insensitive substring search over names and descriptions.

        Enabled and disabled operations alike; registration order; optional
        exact *category* filter.
        """
        q = query.lower()
        with self._lock:
            results: list[SearchMatch] = []
            for name, record in self._operations.items():
                if category is not None and record.category != category:
                    continue
                description = record.definition.description or ""
                if q in name.lower() or q in description.lower():
                    results.append(SearchMatch(
                        name=name,
                        description=description,
                        category=record.category,
                        enabled=record.enabled,
                        definition=record.definition,
                    ))
            return results

    def get_categories(self) -> list[CategoryInfo]:
        with self._lock:
            result: list[CategoryInfo] = []
            for key, category in self._categories.items():
                names = self._names_for(key)
                result.append(CategoryInfo(
                    key=key,
                    description=category.description,
                    enabled=category.enabled,
                    operation_count=len(names),
                    operation_names=names,
                ))
            return result

    def has_category(self, key: str) -> bool:
        return key in self._categories

    def has_operation(self, name: str) -> bool:
        return name in self._operations

    def is_enabled(self, name: str) -> bool:
        record = self._operations.get(name)
        return record.enabled if record is not None else False

    def get_definition(self, name: str) -> OperationDefinition | None:
        record = self._operations.get(name)
        return record.definition if record is not None else None

    def category_of(self, name: str) -> str | None:
        record = self._operations.get(name)
        return record.category if record is not None else None

    def total_operation_count(self) -> int:
        return len(self._operations)

    def enabled_operation_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._operations.values() if r.enabled)

    def _names_for(self, key: str) -> list[str]:
        return [name for name, r in self._operations.items() if r.category == key]

    def __repr__(self) -> str:
        return (
            f"CapabilityRegistry(categories={list(self._categories)!r}, "
            f"tools={self.total_operation_count()}, enabled={self.enabled_operation_count()})"
        )
