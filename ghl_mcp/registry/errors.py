"""Error taxonomy for the capability registry.

Discovery meta-operations convert every one of these into guidance text.
Programmatic callers of ``invoke`` / ``invoke_direct`` receive them as typed
exceptions and map them to whatever fault representation their transport uses.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base exception for registry errors."""


class UnknownCategoryError(RegistryError):
    """Category key was never registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f'Unknown category: "{key}". Use list_categories to see available categories.'
        )


class UnknownOperationError(RegistryError):
    """Operation name was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Unknown tool: "{name}". Use search_tools to find available tools.')


class OperationDisabledError(RegistryError):
    """Operation exists but its category is currently disabled.

    ``category`` names the exact toggle the caller has to flip.
    """

    def __init__(self, name: str, category: str) -> None:
        self.name = name
        self.category = category
        super().__init__(
            f'Tool "{name}" belongs to the "{category}" category which is not currently enabled. '
            f'Call enable_category with category "{category}" to enable it.'
        )


class AdapterContractError(RegistryError):
    """A domain module exposes no recognized list or dispatch method.

    An integration bug, not a user error: the offending module is skipped at
    registration instead of taking the whole registry down.
    """


class DuplicateRegistrationWarning(UserWarning):
    """An operation name was registered twice; the first registration wins."""
