"""Shared utilities for backend code emitters."""

from __future__ import annotations

from ..frontend.ast import (
    ArrayCreate,
    AssignmentStatement,
    DSCreate,
    ForStatement,
    IfStatement,
    InputStatement,
    Program,
    Stmt,
    StructCreate,
    WhileStatement,
)

# Operation keyword -> template verb, shared by every target
VERBS: dict[str, str] = {
    "PUSH": "push",
    "ENQUEUE": "push",
    "VECTOR_PUSH": "push",
    "POP": "pop",
    "DEQUEUE": "pop",
    "VECTOR_POP": "pop",
    "TOP": "peek",
    "FRONT": "peek",
    "MAP_INSERT": "insert",
    "MAP_GET": "get",
    "MAP_REMOVE": "remove",
    "SET_ADD": "add",
    "TREE_INSERT": "add",
    "SET_REMOVE": "remove",
    "CONTAINS": "contains",
    "LL_PUSH_FRONT": "push_front",
    "DEQUE_PUSH_FRONT": "push_front",
    "LL_PUSH_BACK": "push_back",
    "DEQUE_PUSH_BACK": "push_back",
    "LL_POP_FRONT": "pop_front",
    "DEQUE_POP_FRONT": "pop_front",
    "LL_POP_BACK": "pop_back",
    "DEQUE_POP_BACK": "pop_back",
    "GRAPH_ADD_EDGE": "add_edge",
    "SIZE": "size",
    "EMPTY": "empty",
    "PAIR_FIRST": "first",
    "PAIR_SECOND": "second",
}

# Kind assumed for a query whose target is not a known structure
QUERY_KINDS: dict[str, str] = {
    "TOP": "stack",
    "FRONT": "queue",
    "SIZE": "vector",
    "EMPTY": "vector",
    "PAIR_FIRST": "pair",
    "PAIR_SECOND": "pair",
    "MAP_GET": "map",
    "CONTAINS": "set",
}

# Queries that yield a boolean
BOOL_QUERIES: frozenset[str] = frozenset({"EMPTY", "CONTAINS"})


def escape_string(value: str) -> str:
    """Escape a string for use in a double-quoted literal (without quotes)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


def is_identifier(text: str) -> bool:
    if text == "":
        return False
    c = text[0]
    if not (c.isascii() and (c.isalpha() or c == "_")):
        return False
    return all(ch.isascii() and (ch.isalnum() or ch == "_") for ch in text)


class Emitter:
    """Base class for code emitters with indentation tracking."""

    def __init__(self, indent_str: str = "    ") -> None:
        self.indent: int = 0
        self.lines: list[str] = []
        self._indent_str = indent_str

    def line(self, text: str = "") -> None:
        """Emit a line with current indentation."""
        if text:
            self.lines.append(self._indent_str * self.indent + text)
        else:
            self.lines.append("")

    def output(self) -> str:
        return "\n".join(self.lines) + "\n"


class Collection:
    """What the first backend walk learns about a program."""

    def __init__(self) -> None:
        # Scalar variables in first-binding order
        self.scalars: list[str] = []
        # Scalars first bound inside a nested block, plus loop variables
        self.hoisted: set[str] = set()
        # Data-structure and array names -> kind
        self.kinds: dict[str, str] = {}
        self.structs: list[StructCreate] = []
        self.has_input: bool = False

    def kinds_in_order(self) -> list[str]:
        seen: list[str] = []
        for kind in self.kinds.values():
            if kind not in seen:
                seen.append(kind)
        return seen


def collect(program: Program) -> Collection:
    """Collect scalars, structure kinds and struct definitions."""
    info = Collection()
    bound: set[str] = set()

    def bind(name: str, depth: int, loop_var: bool) -> None:
        if name in bound:
            return
        bound.add(name)
        info.scalars.append(name)
        if depth > 0 or loop_var:
            info.hoisted.add(name)

    def walk(stmts: list[Stmt], depth: int) -> None:
        for stmt in stmts:
            match stmt:
                case InputStatement(variable=var):
                    info.has_input = True
                    bind(var, depth, False)
                case AssignmentStatement(variable=var):
                    bind(var, depth, False)
                case ForStatement(variable=var, body=body):
                    bind(var, depth, True)
                    walk(body, depth + 1)
                case IfStatement(then_branch=then_b, else_branch=else_b):
                    walk(then_b, depth + 1)
                    if else_b is not None:
                        walk(else_b, depth + 1)
                case WhileStatement(body=body):
                    walk(body, depth + 1)
                case ArrayCreate(name=name):
                    info.kinds.setdefault(name, "array")
                case StructCreate(name=name):
                    if name not in info.kinds:
                        info.kinds[name] = "struct"
                        info.structs.append(stmt)
                case DSCreate(name=name):
                    info.kinds.setdefault(name, stmt.kind)

    walk(program.body, 0)
    info.scalars = [name for name in info.scalars if name not in info.kinds]
    info.hoisted = {name for name in info.hoisted if name not in info.kinds}
    return info
