"""Shared helpers for GoHighLevel domain modules.

Each domain module is one category: a list of OperationDefinitions plus a
dispatcher. Every operation is a thin async method that maps its arguments
to one GHLClient call and passes the response through untouched.

Modules keep their own historical list/dispatch method names
(``get_tools`` vs ``get_tool_definitions``, ``execute_tool`` vs
``handle_tool_call`` vs ``execute_<module>_tool``); the registry's
ModuleAdapter normalizes them.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.client import GHLClient
from ghl_mcp.registry.models import OperationDefinition


def _td(
    name: str,
    desc: str,
    props: dict[str, Any] | None = None,
    req: list[str] | None = None,
    read_only: bool = False,
) -> OperationDefinition:
    return OperationDefinition(
        name=name,
        description=desc,
        input_schema={"type": "object", "properties": props or {}, "required": req or []},
        metadata={"access": "read" if read_only else "write"},
    )


def _str(description: str) -> dict:
    return {"type": "string", "description": description}


def _int(description: str) -> dict:
    return {"type": "integer", "description": description}


def _num(description: str) -> dict:
    return {"type": "number", "description": description}


def _bool(description: str) -> dict:
    return {"type": "boolean", "description": description}


def _arr(description: str, item_type: str = "string") -> dict:
    return {"type": "array", "items": {"type": item_type}, "description": description}


def _obj(description: str) -> dict:
    return {"type": "object", "description": description, "additionalProperties": True}


def _drop_none(**fields: Any) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


class ToolModule:
    """Base for domain modules: holds the client and dispatches by name.

    Subclasses set ``DEFINITIONS`` and implement one async method per
    operation, named exactly like the operation.
    """

    DEFINITIONS: list[OperationDefinition] = []

    def __init__(self, client: GHLClient) -> None:
        self._client = client
        self._names = frozenset(d.name for d in self.DEFINITIONS)

    def _definitions(self) -> list[OperationDefinition]:
        return list(self.DEFINITIONS)

    async def _dispatch(self, name: str, args: dict[str, Any] | None) -> Any:
        if name not in self._names:
            raise ValueError(f"Unknown {type(self).__name__} tool: {name}")
        return await getattr(self, name)(**(args or {}))
