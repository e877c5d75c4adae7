"""Serialization of pipeline artifacts to JSON-compatible structures."""

from __future__ import annotations

from dataclasses import fields, is_dataclass

from .frontend.names import NameViolation, SymbolTable
from .frontend.parse import ParseError
from .frontend.tokens import Token


def camel(name: str) -> str:
    """then_branch -> thenBranch."""
    parts = name.split("_")
    return parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])


def serialize(obj: object) -> object:
    """Recursively serialize an AST node or value to a JSON-compatible structure."""
    if obj is None:
        return None
    if isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [serialize(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): serialize(v) for k, v in obj.items()}
    if is_dataclass(obj) and not isinstance(obj, type):
        d: dict[str, object] = {"type": type(obj).__name__}
        for f in fields(obj):
            d[camel(f.name)] = serialize(getattr(obj, f.name))
        return d
    raise TypeError("cannot serialize " + type(obj).__name__)


def ast_to_dict(program: object) -> object:
    """Program -> nested dicts; node ``type`` is the class name, keys are camelCase."""
    return serialize(program)


def tokens_to_list(tokens: list[Token]) -> list[dict[str, object]]:
    return [{"type": t.type, "value": t.value, "line": t.line} for t in tokens]


def symbols_to_dict(table: SymbolTable) -> dict[str, object]:
    result: dict[str, object] = {}
    for name, info in table.symbols.items():
        result[name] = {
            "type": info.type,
            "line": info.line,
            "initialized": info.initialized,
        }
    return result


def errors_to_list(errors: list[ParseError] | list[NameViolation]) -> list[dict[str, object]]:
    return [{"line": e.line, "message": e.message} for e in errors]
