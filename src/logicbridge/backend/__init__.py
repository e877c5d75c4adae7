"""Backend package - emits target source from a checked AST."""

from __future__ import annotations

from ..frontend.ast import Program
from .base import Backend
from .c import CBackend
from .cpp import CppBackend
from .java import JavaBackend
from .javascript import JavaScriptBackend
from .python import PythonBackend

BACKENDS: dict[str, type[Backend]] = {
    "c": CBackend,
    "cpp": CppBackend,
    "java": JavaBackend,
    "javascript": JavaScriptBackend,
    "python": PythonBackend,
}


def generate(program: Program, target: str) -> str:
    """Emit source for target. Raises KeyError for an unknown target."""
    return BACKENDS[target]().emit(program)


__all__ = [
    "BACKENDS",
    "Backend",
    "CBackend",
    "CppBackend",
    "JavaBackend",
    "JavaScriptBackend",
    "PythonBackend",
    "generate",
]
