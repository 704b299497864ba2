"""Capability registry: categories, operations, visibility and dispatch."""

from ghl_mcp.registry.adapter import OperationModule, adapt_module, register_module
from ghl_mcp.registry.errors import (
    AdapterContractError,
    DuplicateRegistrationWarning,
    OperationDisabledError,
    RegistryError,
    UnknownCategoryError,
    UnknownOperationError,
)
from ghl_mcp.registry.models import OperationDefinition
from ghl_mcp.registry.notifier import BestEffortNotifier, CallbackNotifier, McpSessionNotifier, NullNotifier
from ghl_mcp.registry.registry import CapabilityRegistry

__all__ = [
    "AdapterContractError",
    "BestEffortNotifier",
    "CallbackNotifier",
    "CapabilityRegistry",
    "DuplicateRegistrationWarning",
    "McpSessionNotifier",
    "NullNotifier",
    "OperationDefinition",
    "OperationDisabledError",
    "OperationModule",
    "RegistryError",
    "UnknownCategoryError",
    "UnknownOperationError",
    "adapt_module",
    "register_module",
]
