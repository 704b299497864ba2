"""Catalogs of the meta-operations the MCP server always exposes.

Each entry is ``(method_name_on_DiscoveryTools, OperationDefinition)``.
``DYNAMIC_CATALOG`` is the dynamic-mode surface (enabled CRM operations are
listed after it); ``PROXY_CATALOG`` is the complete proxy-mode surface.

Adding a meta-operation: append it here and add the method to
``DiscoveryTools``.
"""

from __future__ import annotations

from ghl_mcp.registry.models import OperationDefinition
from ghl_mcp.tools.base import _obj, _str, _td

_CATEGORY = {"category": _str('Category key from list_categories (e.g. "contacts", "calendar")')}

LIST_CATEGORIES = _td(
    "list_categories",
    "List all available GoHighLevel tool categories with descriptions, tool counts and whether "
    "each is enabled. Call this first to understand what capabilities are available.",
    read_only=True,
)

SEARCH_TOOLS = _td(
    "search_tools",
    "Search GoHighLevel tools by keyword across all categories, enabled or not. "
    'Example: search_tools({query: "contact"}) to find contact-related tools.',
    {
        "query": _str('Search keyword (e.g. "invoice", "appointment", "send sms", "contact")'),
        "category": _str('Optional: filter results to a specific category (e.g. "contacts", "calendar")'),
    },
    ["query"],
    read_only=True,
)

PROXY_SEARCH_TOOLS = _td(
    "search_tools",
    "Search GoHighLevel tools by keyword. Returns matching tool names, descriptions, and full input "
    "schemas. Use the returned tool name and input schema to call ghl_execute. "
    'Example: search_tools({query: "contact"}) to find contact-related tools.',
    SEARCH_TOOLS.input_schema["properties"],
    ["query"],
    read_only=True,
)

GHL_EXECUTE = _td(
    "ghl_execute",
    "Execute any GoHighLevel tool by name. Use search_tools first to discover the tool name and "
    "required arguments. Pass the tool name and its arguments object. "
    'Example: ghl_execute({tool: "create_contact", arguments: {email: "john@example.com"}})',
    {
        "tool": _str("The exact tool name to execute (from search_tools results)"),
        "arguments": _obj("The arguments to pass to the tool (see input schema from search_tools)"),
    },
    ["tool", "arguments"],
)

DYNAMIC_CATALOG: list[tuple[str, OperationDefinition]] = [
    ("list_categories", LIST_CATEGORIES),
    ("enable_category", _td(
        "enable_category",
        "Enable a tool category so its tools appear in your tool list. "
        "Only enable what the current task needs.",
        _CATEGORY,
        ["category"],
    )),
    ("disable_category", _td(
        "disable_category",
        "Disable a tool category to remove its tools from your tool list and free up context.",
        _CATEGORY,
        ["category"],
    )),
    ("enable_all_categories", _td(
        "enable_all_categories",
        "Enable every tool category at once. This adds a very large number of tools to your "
        "context; prefer enable_category.",
    )),
    ("search_tools", SEARCH_TOOLS),
    ("get_enabled_tools", _td(
        "get_enabled_tools",
        "List the tools that are currently enabled, grouped by category.",
        read_only=True,
    )),
]

PROXY_CATALOG: list[tuple[str, OperationDefinition]] = [
    ("list_categories", LIST_CATEGORIES),
    ("search_tools", PROXY_SEARCH_TOOLS),
    ("ghl_execute", GHL_EXECUTE),
]


def catalog_for(proxy_mode: bool) -> list[tuple[str, OperationDefinition]]:
    return PROXY_CATALOG if proxy_mode else DYNAMIC_CATALOG
