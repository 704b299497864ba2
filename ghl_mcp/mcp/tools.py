"""Discovery meta-operations over the CapabilityRegistry.

Each method returns a ``ToolResult`` whose ``summary`` is the human-readable
text shown to the caller and whose ``facts`` carry the machine-usable part
(newly visible names, match lists, counts). No method raises: missing
parameters and unknown keys become guidance text so the calling agent gets
something it can act on.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ghl_mcp.mcp.proxy import ProxyExecutor
from ghl_mcp.mcp.results import ToolResult, _guidance, _ok, exception_result, wrap_operation_result
from ghl_mcp.registry import CapabilityRegistry, UnknownCategoryError, UnknownOperationError
from ghl_mcp.registry.models import SearchMatch

logger = logging.getLogger("ghl_mcp.mcp.tools")

# search_tools output is capped so one broad query cannot flood the context.
MAX_SEARCH_RESULTS = 15
MAX_SUGGESTIONS = 5


class DiscoveryTools:
    """The always-visible meta-operations, returning ``ToolResult`` envelopes.

    In proxy mode (``proxy_mode=True``) the enable/disable state is advisory
    only: listings still report it, but ``ghl_execute`` runs any registered
    operation through ``ProxyExecutor``.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        executor: ProxyExecutor | None = None,
        proxy_mode: bool = False,
    ) -> None:
        self._registry = registry
        self._executor = executor or ProxyExecutor(registry)
        self._proxy_mode = proxy_mode

    @property
    def proxy_mode(self) -> bool:
        return self._proxy_mode

    # ==================================================================
    # CATEGORIES
    # ==================================================================

    async def list_categories(self) -> ToolResult:
        categories = self._registry.get_categories()
        total = self._registry.total_operation_count()
        enabled = self._registry.enabled_operation_count()

        lines = [
            f"## GoHighLevel Tool Categories ({len(categories)} categories, "
            f"{total} total tools, {enabled} enabled)",
            "",
        ]
        if self._proxy_mode:
            lines.append("Use `search_tools` to find specific tools by keyword, then `ghl_execute` to run them.")
        else:
            lines.append("Use `enable_category` to load a category's tools, or `search_tools` to find one by keyword.")
        lines.append("")
        for c in categories:
            state = "enabled" if c.enabled else "disabled"
            lines.append(f"**{c.key}** [{state}]: {c.description} ({c.operation_count} tools)")

        if self._proxy_mode:
            lines += [
                "",
                "---",
                'Workflow: search_tools({query: "keyword"}) -> ghl_execute({tool: "tool_name", arguments: {...}})',
            ]

        facts = {
            "categories": [
                {"key": c.key, "enabled": c.enabled, "count": c.operation_count} for c in categories
            ],
            "total": total,
            "enabled": enabled,
        }
        return _ok("\n".join(lines), None, **facts)

    async def enable_category(self, category: str | None = None) -> ToolResult:
        invalid = _check_category(category, required=True)
        if invalid is not None:
            return invalid
        try:
            result = self._registry.enable_category(category)
        except UnknownCategoryError as e:
            return _guidance(str(e), "UnknownCategoryError", category=category)

        if result.changed:
            summary = (
                f'Enabled category "{category}" ({result.count} tools): {", ".join(result.names)}. '
                "These tools are now available in your tool list."
            )
        else:
            summary = f'Category "{category}" is already enabled ({result.count} tools): {", ".join(result.names)}.'
        return _ok(summary, None, enabled=list(result.names), count=result.count)

    async def disable_category(self, category: str | None = None) -> ToolResult:
        invalid = _check_category(category, required=True)
        if invalid is not None:
            return invalid
        try:
            result = self._registry.disable_category(category)
        except UnknownCategoryError as e:
            return _guidance(str(e), "UnknownCategoryError", category=category)

        if result.changed:
            summary = (
                f'Disabled category "{category}" ({result.count} tools removed from your tool list): '
                f'{", ".join(result.names)}.'
            )
        else:
            summary = f'Category "{category}" is already disabled ({result.count} tools): {", ".join(result.names)}.'
        return _ok(summary, None, disabled=list(result.names), count=result.count)

    async def enable_all_categories(self) -> ToolResult:
        result = self._registry.enable_all()
        summary = (
            f"Enabled all categories: {result.total_enabled} tools are now visible "
            f"({len(result.categories)} categories newly enabled).\n"
            f"WARNING: {result.total_enabled} tool definitions will be loaded into your context. "
            "This can exhaust the context budget; disable categories you do not need "
            "with disable_category."
        )
        return _ok(summary, None, count=result.total_enabled, categories=list(result.categories))

    # ==================================================================
    # SEARCH & LISTING
    # ==================================================================

    async def search_tools(self, query: str | None = None, category: str | None = None) -> ToolResult:
        if not isinstance(query, str) or not query.strip():
            return _guidance(
                'Error: "query" parameter is required. Example: search_tools({query: "contact"})',
                "ValidationError",
            )
        invalid = _check_category(category, required=False)
        if invalid is not None:
            return invalid

        matches = self._registry.search(query.strip(), category=category or None)
        if not matches:
            where = f' in category "{category}"' if category else ""
            return _ok(
                f'No tools found matching "{query}"{where}. Try a broader search term.',
                None,
                matches=[],
                count=0,
            )

        shown = matches[:MAX_SEARCH_RESULTS]
        header = f'## Search results for "{query}" ({len(matches)} match{"es" if len(matches) != 1 else ""}'
        if len(matches) > MAX_SEARCH_RESULTS:
            header += f", showing first {MAX_SEARCH_RESULTS}"
        lines = [header + ")", ""]

        groups: dict[str, list[SearchMatch]] = {}
        for m in shown:
            groups.setdefault(m.category, []).append(m)

        for key, group in groups.items():
            enabled = group[0].enabled
            lines.append(f"### {key} [{'enabled' if enabled else 'disabled'}]")
            if not enabled and not self._proxy_mode:
                lines.append(f'To use these tools, call enable_category("{key}").')
            for m in group:
                lines += self._format_match(m)
            lines.append("")

        if len(matches) > MAX_SEARCH_RESULTS:
            lines.append(
                f"... and {len(matches) - MAX_SEARCH_RESULTS} more results. Narrow your search "
                "with a more specific query or add a category filter."
            )

        facts = {
            "matches": [{"name": m.name, "category": m.category, "enabled": m.enabled} for m in matches],
            "count": len(matches),
        }
        return _ok("\n".join(lines).rstrip(), None, **facts)

    def _format_match(self, m: SearchMatch) -> list[str]:
        if not self._proxy_mode:
            return [f"- **{m.name}**: {m.description}"]
        return [
            f"- **{m.name}**: {m.description}",
            f"  Input Schema: {json.dumps(m.definition.input_schema)}",
            f'  Execute: ghl_execute({{tool: "{m.name}", arguments: {{...}}}})',
        ]

    async def get_enabled_tools(self) -> ToolResult:
        enabled = [c for c in self._registry.get_categories() if c.enabled]
        if not enabled:
            return _ok(
                "No tool categories are enabled yet.\n"
                "1. Call list_categories to see what is available.\n"
                '2. Call enable_category("<key>") for the category your task needs.\n'
                "3. Or use search_tools to find a tool by keyword.",
                None,
                categories={},
                count=0,
            )

        lines = [f"## Enabled tools ({self._registry.enabled_operation_count()})", ""]
        grouped: dict[str, list[str]] = {}
        for c in enabled:
            grouped[c.key] = list(c.operation_names)
            lines.append(f"### {c.key} ({c.operation_count} tools)")
            lines += [f"- {name}" for name in c.operation_names]
            lines.append("")
        return _ok(
            "\n".join(lines).rstrip(),
            None,
            categories=grouped,
            count=sum(len(v) for v in grouped.values()),
        )

    # ==================================================================
    # PROXY
    # ==================================================================

    async def ghl_execute(self, tool: str | None = None, arguments: dict[str, Any] | None = None) -> ToolResult:
        if not isinstance(tool, str) or not tool:
            return _guidance(
                'Error: "tool" parameter is required and must be a tool name. '
                "Use search_tools to find available tools.",
                "ValidationError",
            )
        if arguments is not None and not isinstance(arguments, dict):
            return _guidance(
                'Error: "arguments" must be an object, e.g. ghl_execute({tool: "get_contact", arguments: {...}}).',
                "ValidationError",
            )
        try:
            raw = await self._executor.execute(tool, arguments or {})
        except UnknownOperationError:
            suggestions = [m.name for m in self._registry.search(tool)[:MAX_SUGGESTIONS]]
            hint = (
                f" Did you mean: {', '.join(suggestions)}?"
                if suggestions
                else " Use search_tools to find available tools."
            )
            return _guidance(
                f'Error: Unknown tool "{tool}".{hint}', "UnknownOperationError", suggestions=suggestions,
            )
        except Exception as e:
            logger.warning("ghl_execute %s failed: %s", tool, e)
            return exception_result(tool, e)
        return wrap_operation_result(tool, raw)


def _check_category(category: Any, required: bool) -> ToolResult | None:
    if category is None or category == "":
        if not required:
            return None
        return _guidance(
            'Error: "category" parameter is required. Use list_categories to see available categories.',
            "ValidationError",
        )
    if not isinstance(category, str):
        return _guidance(
            'Error: "category" must be a category key string. Use list_categories to see available categories.',
            "ValidationError",
        )
    return None
