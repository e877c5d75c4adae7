"""Pseudo-code AST: parse-time node definitions.

Nodes are frozen: built once by the parser and never changed afterwards.
Data-structure creates and operations share base classes whose class-level
``kind`` and ``keyword`` describe them; backends dispatch on those.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Expr:
    """Base for all expression nodes."""


@dataclass(frozen=True)
class Literal(Expr):
    """Number or string literal."""

    value: int | float | str


@dataclass(frozen=True)
class Identifier(Expr):
    name: str


@dataclass(frozen=True)
class ArrayAccess(Expr):
    """name[index]."""

    name: str
    index: Expr


@dataclass(frozen=True)
class BinaryExpression(Expr):
    """Arithmetic or comparison, left-associative."""

    operator: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnaryExpression(Expr):
    """Prefix minus."""

    operator: str
    expression: Expr


# Operation arguments are raw token text unless the position held an expression.
Arg = Union[str, Expr]


@dataclass(frozen=True)
class DSQueryExpression(Expr):
    """A value-returning data-structure operation used inside an expression."""

    operation: str
    args: list[Arg]


# ============================================================
# STATEMENTS
# ============================================================


@dataclass(frozen=True)
class Stmt:
    """Base for all statement nodes."""

    line: int


@dataclass(frozen=True)
class InputStatement(Stmt):
    variable: str


@dataclass(frozen=True)
class AssignmentStatement(Stmt):
    variable: str
    expression: Expr


@dataclass(frozen=True)
class PrintStatement(Stmt):
    expression: Expr


@dataclass(frozen=True)
class IfStatement(Stmt):
    condition: Expr
    then_branch: list[Stmt]
    else_branch: list[Stmt] | None


@dataclass(frozen=True)
class WhileStatement(Stmt):
    condition: Expr
    body: list[Stmt]


@dataclass(frozen=True)
class ForStatement(Stmt):
    """Inclusive counting loop: FOR v = start TO end."""

    variable: str
    start: Expr
    end: Expr
    body: list[Stmt]


@dataclass(frozen=True)
class ArrayCreate(Stmt):
    name: str
    size: Expr


@dataclass(frozen=True)
class ArraySetStatement(Stmt):
    """SET array[index] = expression."""

    array: str
    index: Expr
    expression: Expr


# ============================================================
# DATA STRUCTURE CREATION
# ============================================================


@dataclass(frozen=True)
class DSCreate(Stmt):
    """Declares a named data structure of class-level ``kind``."""

    name: str

    kind: ClassVar[str] = ""


@dataclass(frozen=True)
class StackCreate(DSCreate):
    kind: ClassVar[str] = "stack"


@dataclass(frozen=True)
class QueueCreate(DSCreate):
    kind: ClassVar[str] = "queue"


@dataclass(frozen=True)
class MapCreate(DSCreate):
    kind: ClassVar[str] = "map"


@dataclass(frozen=True)
class SetCreate(DSCreate):
    kind: ClassVar[str] = "set"


@dataclass(frozen=True)
class VectorCreate(DSCreate):
    kind: ClassVar[str] = "vector"


@dataclass(frozen=True)
class LinkedListCreate(DSCreate):
    kind: ClassVar[str] = "linked_list"


@dataclass(frozen=True)
class TreeCreate(DSCreate):
    """Binary search tree of integers."""

    kind: ClassVar[str] = "tree"


@dataclass(frozen=True)
class PriorityQueueCreate(DSCreate):
    """Max-heap of integers."""

    kind: ClassVar[str] = "priority_queue"


@dataclass(frozen=True)
class DequeCreate(DSCreate):
    kind: ClassVar[str] = "deque"


@dataclass(frozen=True)
class GraphCreate(DSCreate):
    """Adjacency structure; node_count is raw token text or None."""

    node_count: str | None = None

    kind: ClassVar[str] = "graph"


@dataclass(frozen=True)
class PairCreate(DSCreate):
    first: str | None = None
    second: str | None = None

    kind: ClassVar[str] = "pair"


@dataclass(frozen=True)
class StructCreate(DSCreate):
    """Record type with integer fields; also declares one instance."""

    fields: list[str] | None = None

    kind: ClassVar[str] = "struct"


# ============================================================
# DATA STRUCTURE OPERATIONS
# ============================================================


@dataclass(frozen=True)
class DSOperation(Stmt):
    """Keyword-led operation; args[0] names the target structure."""

    args: list[Arg]

    keyword: ClassVar[str] = ""
    kind: ClassVar[str] = ""
    arity: ClassVar[int] = 1


@dataclass(frozen=True)
class StackPush(DSOperation):
    keyword: ClassVar[str] = "PUSH"
    kind: ClassVar[str] = "stack"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class StackPop(DSOperation):
    keyword: ClassVar[str] = "POP"
    kind: ClassVar[str] = "stack"


@dataclass(frozen=True)
class StackTop(DSOperation):
    keyword: ClassVar[str] = "TOP"
    kind: ClassVar[str] = "stack"


@dataclass(frozen=True)
class QueueEnqueue(DSOperation):
    keyword: ClassVar[str] = "ENQUEUE"
    kind: ClassVar[str] = "queue"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class QueueDequeue(DSOperation):
    keyword: ClassVar[str] = "DEQUEUE"
    kind: ClassVar[str] = "queue"


@dataclass(frozen=True)
class QueueFront(DSOperation):
    keyword: ClassVar[str] = "FRONT"
    kind: ClassVar[str] = "queue"


@dataclass(frozen=True)
class MapInsert(DSOperation):
    keyword: ClassVar[str] = "MAP_INSERT"
    kind: ClassVar[str] = "map"
    arity: ClassVar[int] = 3


@dataclass(frozen=True)
class MapGet(DSOperation):
    keyword: ClassVar[str] = "MAP_GET"
    kind: ClassVar[str] = "map"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class MapRemove(DSOperation):
    keyword: ClassVar[str] = "MAP_REMOVE"
    kind: ClassVar[str] = "map"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class SetAdd(DSOperation):
    keyword: ClassVar[str] = "SET_ADD"
    kind: ClassVar[str] = "set"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class SetRemove(DSOperation):
    keyword: ClassVar[str] = "SET_REMOVE"
    kind: ClassVar[str] = "set"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class Contains(DSOperation):
    keyword: ClassVar[str] = "CONTAINS"
    kind: ClassVar[str] = "set"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class VectorPush(DSOperation):
    keyword: ClassVar[str] = "VECTOR_PUSH"
    kind: ClassVar[str] = "vector"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class VectorPop(DSOperation):
    keyword: ClassVar[str] = "VECTOR_POP"
    kind: ClassVar[str] = "vector"


@dataclass(frozen=True)
class LLPushFront(DSOperation):
    keyword: ClassVar[str] = "LL_PUSH_FRONT"
    kind: ClassVar[str] = "linked_list"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class LLPushBack(DSOperation):
    keyword: ClassVar[str] = "LL_PUSH_BACK"
    kind: ClassVar[str] = "linked_list"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class LLPopFront(DSOperation):
    keyword: ClassVar[str] = "LL_POP_FRONT"
    kind: ClassVar[str] = "linked_list"


@dataclass(frozen=True)
class LLPopBack(DSOperation):
    keyword: ClassVar[str] = "LL_POP_BACK"
    kind: ClassVar[str] = "linked_list"


@dataclass(frozen=True)
class TreeInsert(DSOperation):
    keyword: ClassVar[str] = "TREE_INSERT"
    kind: ClassVar[str] = "tree"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class GraphAddEdge(DSOperation):
    """args: graph, from, to."""

    keyword: ClassVar[str] = "GRAPH_ADD_EDGE"
    kind: ClassVar[str] = "graph"
    arity: ClassVar[int] = 3


@dataclass(frozen=True)
class Size(DSOperation):
    keyword: ClassVar[str] = "SIZE"
    kind: ClassVar[str] = "vector"


@dataclass(frozen=True)
class Empty(DSOperation):
    keyword: ClassVar[str] = "EMPTY"
    kind: ClassVar[str] = "vector"


@dataclass(frozen=True)
class PairFirst(DSOperation):
    keyword: ClassVar[str] = "PAIR_FIRST"
    kind: ClassVar[str] = "pair"


@dataclass(frozen=True)
class PairSecond(DSOperation):
    keyword: ClassVar[str] = "PAIR_SECOND"
    kind: ClassVar[str] = "pair"


@dataclass(frozen=True)
class DequePushFront(DSOperation):
    keyword: ClassVar[str] = "DEQUE_PUSH_FRONT"
    kind: ClassVar[str] = "deque"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class DequePushBack(DSOperation):
    keyword: ClassVar[str] = "DEQUE_PUSH_BACK"
    kind: ClassVar[str] = "deque"
    arity: ClassVar[int] = 2


@dataclass(frozen=True)
class DequePopFront(DSOperation):
    keyword: ClassVar[str] = "DEQUE_POP_FRONT"
    kind: ClassVar[str] = "deque"


@dataclass(frozen=True)
class DequePopBack(DSOperation):
    keyword: ClassVar[str] = "DEQUE_POP_BACK"
    kind: ClassVar[str] = "deque"


# ============================================================
# PROGRAM
# ============================================================


@dataclass(frozen=True)
class Program:
    body: list[Stmt]


CREATE_NODES: dict[str, type[DSCreate]] = {
    "STACK": StackCreate,
    "QUEUE": QueueCreate,
    "MAP": MapCreate,
    "SET_DS": SetCreate,
    "VECTOR": VectorCreate,
    "LINKED_LIST": LinkedListCreate,
    "TREE": TreeCreate,
    "PRIORITY_QUEUE": PriorityQueueCreate,
    "DEQUE": DequeCreate,
    "GRAPH": GraphCreate,
    "PAIR": PairCreate,
    "STRUCT": StructCreate,
}

OPERATION_NODES: dict[str, type[DSOperation]] = {
    cls.keyword: cls
    for cls in (
        StackPush,
        StackPop,
        StackTop,
        QueueEnqueue,
        QueueDequeue,
        QueueFront,
        MapInsert,
        MapGet,
        MapRemove,
        SetAdd,
        SetRemove,
        Contains,
        VectorPush,
        VectorPop,
        LLPushFront,
        LLPushBack,
        LLPopFront,
        LLPopBack,
        TreeInsert,
        GraphAddEdge,
        Size,
        Empty,
        PairFirst,
        PairSecond,
        DequePushFront,
        DequePushBack,
        DequePopFront,
        DequePopBack,
    )
}

# Operations usable as expressions, with their argument counts
QUERY_ARITY: dict[str, int] = {
    "TOP": 1,
    "FRONT": 1,
    "SIZE": 1,
    "EMPTY": 1,
    "PAIR_FIRST": 1,
    "PAIR_SECOND": 1,
    "MAP_GET": 2,
    "CONTAINS": 2,
}
