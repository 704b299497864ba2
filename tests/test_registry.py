"""CapabilityRegistry: registration, toggling, invocation and search."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from ghl_mcp.registry import (
    CallbackNotifier,
    CapabilityRegistry,
    DuplicateRegistrationWarning,
    OperationDefinition,
    OperationDisabledError,
    UnknownCategoryError,
    UnknownOperationError,
)


def _op(name: str, description: str = "") -> OperationDefinition:
    return OperationDefinition(name=name, description=description or f"Run {name}")


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def registry(notify):
    reg = CapabilityRegistry(notifier=CallbackNotifier(notify))
    reg.register_category(
        "contacts",
        "Contact management",
        [_op("create_contact", "Create a new contact"), _op("get_contact", "Get a contact by ID")],
        AsyncMock(return_value={"id": "c1"}),
    )
    reg.register_category(
        "billing",
        "Invoices",
        [_op("create_invoice", "Create a new invoice")],
        AsyncMock(return_value={"id": "inv1"}),
    )
    return reg


def _assert_flags_in_sync(reg: CapabilityRegistry) -> None:
    for c in reg.get_categories():
        for name in c.operation_names:
            assert reg.is_enabled(name) == c.enabled, f"{name} out of sync with {c.key}"


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegistration:
    def test_categories_start_disabled(self, registry):
        cats = registry.get_categories()
        assert [c.key for c in cats] == ["contacts", "billing"]
        assert all(not c.enabled for c in cats)
        assert registry.total_operation_count() == 3
        assert registry.enabled_operation_count() == 0
        assert registry.list_visible_operations() == []

    def test_register_returns_accepted_count(self):
        reg = CapabilityRegistry()
        assert reg.register_category("a", "A", [_op("x"), _op("y")], AsyncMock()) == 2

    def test_duplicate_name_across_categories_keeps_first(self, registry):
        with pytest.warns(DuplicateRegistrationWarning):
            accepted = registry.register_category("other", "Other", [_op("get_contact"), _op("ping")], AsyncMock())
        assert accepted == 1
        assert registry.category_of("get_contact") == "contacts"
        assert registry.category_of("ping") == "other"

    def test_duplicate_name_within_one_call(self):
        reg = CapabilityRegistry()
        with pytest.warns(DuplicateRegistrationWarning):
            accepted = reg.register_category("a", "A", [_op("x"), _op("x")], AsyncMock())
        assert accepted == 1
        assert reg.total_operation_count() == 1

    def test_category_not_created_without_operations(self, registry):
        with pytest.warns(DuplicateRegistrationWarning):
            accepted = registry.register_category("ghost", "Ghost", [_op("get_contact")], AsyncMock())
        assert accepted == 0
        assert not registry.has_category("ghost")
        assert registry.register_category("empty", "Empty", [], AsyncMock()) == 0
        assert not registry.has_category("empty")

    def test_reregistration_overwrites_description_and_adds_new(self, registry):
        registry.enable_category("contacts")
        invoker = AsyncMock()
        with pytest.warns(DuplicateRegistrationWarning):
            accepted = registry.register_category(
                "contacts", "People", [_op("get_contact"), _op("delete_contact")], invoker,
            )
        assert accepted == 1
        info = next(c for c in registry.get_categories() if c.key == "contacts")
        assert info.description == "People"
        assert info.operation_names == ["create_contact", "get_contact", "delete_contact"]
        # New operation inherits the category's current flag.
        assert registry.is_enabled("delete_contact")
        _assert_flags_in_sync(registry)


# ---------------------------------------------------------------------------
# Toggling
# ---------------------------------------------------------------------------


class TestToggle:
    def test_enable_reveals_operations_in_order(self, registry, notify):
        result = registry.enable_category("contacts")
        assert result.changed is True
        assert result.names == ["create_contact", "get_contact"]
        assert result.count == 2
        assert [d.name for d in registry.list_visible_operations()] == ["create_contact", "get_contact"]
        notify.assert_called_once()

    def test_enable_is_idempotent(self, registry, notify):
        registry.enable_category("contacts")
        before = registry.list_visible_operations()
        again = registry.enable_category("contacts")
        assert again.changed is False
        assert again.names == ["create_contact", "get_contact"]
        assert registry.list_visible_operations() == before
        notify.assert_called_once()

    def test_disable_when_disabled_is_noop(self, registry, notify):
        result = registry.disable_category("billing")
        assert result.changed is False
        assert result.names == ["create_invoice"]
        notify.assert_not_called()

    def test_enable_then_disable_restores_visible_set(self, registry):
        registry.enable_category("billing")
        before = [d.name for d in registry.list_visible_operations()]
        registry.enable_category("contacts")
        registry.disable_category("contacts")
        assert [d.name for d in registry.list_visible_operations()] == before
        _assert_flags_in_sync(registry)

    def test_unknown_category(self, registry):
        with pytest.raises(UnknownCategoryError) as exc:
            registry.enable_category("nonexistent")
        assert exc.value.key == "nonexistent"
        assert "list_categories" in str(exc.value)
        with pytest.raises(UnknownCategoryError):
            registry.disable_category("nonexistent")

    def test_enable_all_notifies_once(self, registry, notify):
        registry.enable_category("contacts")
        notify.reset_mock()
        result = registry.enable_all()
        assert result.total_enabled == 3
        assert result.categories == ["billing"]
        notify.assert_called_once()
        _assert_flags_in_sync(registry)

    def test_enable_all_without_changes_does_not_notify(self, registry, notify):
        registry.enable_all()
        notify.reset_mock()
        result = registry.enable_all()
        assert result.categories == []
        notify.assert_not_called()

    def test_notifier_failure_is_swallowed(self):
        reg = CapabilityRegistry(notifier=CallbackNotifier(MagicMock(side_effect=RuntimeError("no session"))))
        reg.register_category("a", "A", [_op("x")], AsyncMock())
        result = reg.enable_category("a")
        assert result.changed is True
        assert reg.is_enabled("x")


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TestInvoke:
    @pytest.mark.asyncio
    async def test_invoke_disabled_raises_with_category(self, registry):
        with pytest.raises(OperationDisabledError) as exc:
            await registry.invoke("create_invoice", {})
        assert exc.value.category == "billing"
        assert "enable_category" in str(exc.value)

    @pytest.mark.asyncio
    async def test_invoke_enabled_delegates(self, registry):
        registry.enable_category("billing")
        result = await registry.invoke("create_invoice", {"amount": 5})
        assert result == {"id": "inv1"}

    @pytest.mark.asyncio
    async def test_invoke_passes_name_and_args_to_invoker(self):
        invoker = AsyncMock(return_value="ok")
        reg = CapabilityRegistry()
        reg.register_category("a", "A", [_op("x")], invoker)
        reg.enable_category("a")
        await reg.invoke("x", {"k": 1})
        invoker.assert_awaited_once_with("x", {"k": 1})

    @pytest.mark.asyncio
    async def test_invoke_direct_ignores_enablement(self, registry):
        assert not registry.is_enabled("create_invoice")
        assert await registry.invoke_direct("create_invoice", {}) == {"id": "inv1"}

    @pytest.mark.asyncio
    async def test_unknown_operation(self, registry):
        with pytest.raises(UnknownOperationError):
            await registry.invoke("nope", {})
        with pytest.raises(UnknownOperationError) as exc:
            await registry.invoke_direct("nope", {})
        assert exc.value.name == "nope"


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearch:
    def test_case_insensitive_over_name_and_description(self, registry):
        assert [m.name for m in registry.search("INVOICE")] == ["create_invoice"]
        assert [m.name for m in registry.search("by id")] == ["get_contact"]

    def test_search_covers_disabled_operations(self, registry):
        registry.enable_category("contacts")
        matches = registry.search("create")
        assert [(m.name, m.category, m.enabled) for m in matches] == [
            ("create_contact", "contacts", True),
            ("create_invoice", "billing", False),
        ]

    def test_search_category_filter(self, registry):
        assert [m.name for m in registry.search("create", category="billing")] == ["create_invoice"]

    def test_search_no_match(self, registry):
        assert registry.search("zzz") == []


class TestAccessors:
    def test_get_definition_and_category_of(self, registry):
        assert registry.get_definition("get_contact").description == "Get a contact by ID"
        assert registry.get_definition("nope") is None
        assert registry.category_of("create_invoice") == "billing"
        assert registry.category_of("nope") is None

    def test_repr(self, registry):
        assert "tools=3" in repr(registry)
