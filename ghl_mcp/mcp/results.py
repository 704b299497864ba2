"""ToolResult envelope shared by the discovery layer and the MCP server.

Every meta-operation and every proxied CRM call ends up as a ``ToolResult``
so the server has one serialization path.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass
class ToolResult:
    """Normalized envelope for one tool execution.

    ok:        True if the tool completed without error.
    summary:   Human-readable text for the caller. Discovery results are
               returned to the host as this text alone.
    facts:     Structured key/value data extracted from the result
               (e.g. ``{"enabled": [...], "count": 14}``).
    data:      Raw output of the underlying call.
    error:     Present when ok=False. Dict with keys ``type``, ``message``
               and ``detail``.
    artifacts: Optional references produced by the tool.
    """

    ok: bool
    summary: str
    facts: dict
    data: Any
    error: dict | None
    artifacts: dict | None = None


def _ok(summary: str, data: Any = None, **facts: Any) -> ToolResult:
    return ToolResult(ok=True, summary=summary, facts=facts, data=data, error=None)


def _fail(raw: dict) -> ToolResult:
    msg = str(raw.get("error", "Unknown error"))
    detail = raw.get("detail", "")
    return ToolResult(
        ok=False,
        summary=f"Failed: {msg}",
        facts={},
        data=raw,
        error={"type": "GHLAPIError", "message": msg, "detail": detail},
    )


def _guidance(summary: str, error_type: str, detail: str = "", **facts: Any) -> ToolResult:
    """ok=False result whose summary tells the caller what to do next."""
    return ToolResult(
        ok=False,
        summary=summary,
        facts=facts,
        data=None,
        error={"type": error_type, "message": summary, "detail": detail},
    )


def _is_error(raw: Any) -> bool:
    return isinstance(raw, dict) and "error" in raw


def wrap_operation_result(name: str, raw: Any) -> ToolResult:
    """Wrap the raw response of a CRM operation into a ToolResult.

    Rules, in order:
      1. ToolResult            -> passthrough
      2. dict with "error"     -> ok=False, GHLAPIError
      3. list                  -> count summary
      4. dict with "id"        -> id in facts
      5. anything else         -> generic success
    """
    if isinstance(raw, ToolResult):
        return raw
    if _is_error(raw):
        return _fail(raw)
    if isinstance(raw, list):
        return _ok(f"{name} returned {len(raw)} item(s)", raw, count=len(raw))
    if isinstance(raw, dict) and "id" in raw:
        return _ok(f"{name} succeeded (id={raw['id']})", raw, id=raw["id"])
    return _ok(f"{name} succeeded", raw)


def exception_result(name: str, exc: Exception) -> ToolResult:
    """ok=False result for an exception raised while executing *name*."""
    return ToolResult(
        ok=False,
        summary=f"{name} failed: {exc}",
        facts={},
        data=None,
        error={"type": type(exc).__name__, "message": str(exc), "detail": repr(exc)},
    )


def serialize(r: ToolResult) -> str:
    """Serialize a ToolResult to JSON for MCP transport."""
    return json.dumps(
        {"ok": r.ok, "summary": r.summary, "data": r.data, "error": r.error},
        default=str,
    )
