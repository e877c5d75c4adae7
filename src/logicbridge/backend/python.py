"""Python backend: pseudo-code AST -> Python 3 script.

Output is wrapped in ``main()``. Variables need no declarations. Queues,
linked lists and deques use ``collections.deque``. The priority queue is a
max-heap stored negated in a ``heapq`` list. The tree is a sorted list kept
with ``bisect.insort``. Structs become dataclasses. Division and remainder
truncate toward zero, matching the C-family targets.
"""

from __future__ import annotations

import keyword

from ..frontend.ast import DSQueryExpression, Expr, Program, StructCreate
from .base import Backend
from .util import BOOL_QUERIES

# Python builtins and skeleton names that shouldn't be shadowed
_PYTHON_BUILTINS = frozenset(
    {
        "abs",
        "all",
        "any",
        "bisect",
        "bool",
        "dataclass",
        "deque",
        "dict",
        "float",
        "heapq",
        "input",
        "int",
        "len",
        "list",
        "main",
        "math",
        "max",
        "min",
        "print",
        "range",
        "round",
        "set",
        "str",
        "sum",
        "tuple",
    }
)


class PythonBackend(Backend):
    name = "python"
    extension = "py"
    comment = "#"
    terminator = ""
    null_value = "None"
    reserved = frozenset(keyword.kwlist) | _PYTHON_BUILTINS
    uses_math: bool = False
    requires = {
        "queue": ["from collections import deque"],
        "linked_list": ["from collections import deque"],
        "deque": ["from collections import deque"],
        "priority_queue": ["import heapq"],
        "tree": ["import bisect"],
        "struct": ["from dataclasses import dataclass"],
    }
    templates = {
        "stack": {
            "create": "$name = []",
            "push": "$ds.append($a)",
            "pop": "$ds.pop()",
            "peek": "$ds[-1]",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "queue": {
            "create": "$name = deque()",
            "push": "$ds.append($a)",
            "pop": "$ds.popleft()",
            "peek": "$ds[0]",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "priority_queue": {
            "create": "$name = []",
            "push": "heapq.heappush($ds, -($a))",
            "pop": "heapq.heappop($ds)",
            "peek": "(-$ds[0])",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "vector": {
            "create": "$name = []",
            "push": "$ds.append($a)",
            "pop": "$ds.pop()",
            "peek": "$ds[-1]",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "linked_list": {
            "create": "$name = deque()",
            "push_front": "$ds.appendleft($a)",
            "push_back": "$ds.append($a)",
            "pop_front": "$ds.popleft()",
            "pop_back": "$ds.pop()",
            "peek": "$ds[0]",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "deque": {
            "create": "$name = deque()",
            "push_front": "$ds.appendleft($a)",
            "push_back": "$ds.append($a)",
            "pop_front": "$ds.popleft()",
            "pop_back": "$ds.pop()",
            "peek": "$ds[0]",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "map": {
            "create": "$name = {}",
            "insert": "$ds[$a] = $b",
            "get": "$ds.get($a)",
            "remove": "$ds.pop($a, None)",
            "contains": "($a in $ds)",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "set": {
            "create": "$name = set()",
            "add": "$ds.add($a)",
            "remove": "$ds.discard($a)",
            "contains": "($a in $ds)",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "tree": {
            "create": "$name = []",
            "add": "bisect.insort($ds, $a)",
            "contains": "($a in $ds)",
            "size": "len($ds)",
            "empty": "(len($ds) == 0)",
        },
        "graph": {
            "create": "$name = [[] for _ in range($n)]",
            "add_edge": "$ds[$a].append($b)\n$ds[$b].append($a)",
            "size": "len($ds)",
        },
        "pair": {
            "create": "$name = ($first, $second)",
            "first": "$ds[0]",
            "second": "$ds[1]",
        },
        "array": {
            "create": "$name = [0] * $size",
            "size": "len($ds)",
        },
    }

    def emit_program(self, program: Program) -> None:
        self.uses_math = False
        self.line("# Generated Python Code")
        mark = len(self.lines)
        for struct in self.info.structs:
            self._emit_dataclass(struct)
        self.line()
        self.line()
        self.line("def main():")
        self.emit_body(program.body)
        self.line()
        self.line()
        self.line('if __name__ == "__main__":')
        self.indent += 1
        self.line("main()")
        self.indent -= 1
        # Arithmetic decides whether math is needed, so imports go in last
        imports = self.required()
        if self.uses_math:
            imports.insert(0, "import math")
        if imports:
            self.lines[mark:mark] = [""] + imports

    def binary(self, op: str, left: str, right: str) -> str | None:
        # Truncate toward zero like C, C++ and Java
        if op == "/":
            return f"int({left} / {right})"
        if op == "%":
            self.uses_math = True
            return f"int(math.fmod({left}, {right}))"
        return None

    def _emit_dataclass(self, struct: StructCreate) -> None:
        self.line()
        self.line()
        self.line("@dataclass")
        self.line(f"class {self._name(struct.name)}:")
        self.indent += 1
        fields = struct.fields or []
        if not fields:
            self.line("pass")
        for field in fields:
            self.line(f"{self._name(field)}: int = 0")
        self.indent -= 1

    def emit_input(self, name: str) -> None:
        self.line(f'{self._name(name)} = int(input("Enter {name}: "))')

    def emit_print(self, expr: Expr) -> None:
        if isinstance(expr, DSQueryExpression) and expr.operation in BOOL_QUERIES:
            self.line(f'print("true" if {self._expr(expr)} else "false")')
            return
        self.line(f"print({self._bare(expr)})")

    def emit_struct_instance(self, stmt: StructCreate) -> None:
        name = self._name(stmt.name)
        self.line(f"obj_{stmt.name} = {name}()")

    def _redeclared(self, name: str) -> bool:
        # Re-creating rebinds the name to a fresh structure
        return False

    def if_open(self, cond: Expr) -> str:
        return f"if {self._bare(cond)}:"

    def else_line(self) -> str:
        return "else:"

    def while_open(self, cond: Expr) -> str:
        return f"while {self._bare(cond)}:"

    def for_open(self, var: str, start: Expr, end: Expr) -> str:
        return f"for {var} in range({self._expr(start)}, {self._expr(end)} + 1):"

    def block_close(self) -> str | None:
        return None

    def empty_body(self) -> None:
        self.line("pass")


def emit_python(program: Program) -> str:
    """Emit Python source for a program."""
    return PythonBackend().emit(program)
