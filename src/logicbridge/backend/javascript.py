"""JavaScript backend: pseudo-code AST -> Node.js script.

Input goes through ``readline`` inside an ``async function main()``. A scalar
is declared with ``let`` where it is first assigned at the top level; scalars
first bound inside a block, and loop variables, are declared together at the
top of ``main``.
"""

from __future__ import annotations

from ..frontend.ast import Expr, Program, StructCreate
from .base import Backend

JS_RESERVED = frozenset(
    {
        "arguments",
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "eval",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "undefined",
        "var",
        "void",
        "while",
        "with",
        "yield",
        # Skeleton names
        "console",
        "main",
        "process",
        "readline",
        "require",
        "rl",
    }
)


class JavaScriptBackend(Backend):
    name = "javascript"
    extension = "js"
    null_value = "undefined"
    reserved = JS_RESERVED
    operators = {"==": "===", "!=": "!=="}
    templates = {
        "stack": {
            "create": "const $name = [];",
            "push": "$ds.push($a);",
            "pop": "$ds.pop();",
            "peek": "$ds[$ds.length - 1]",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "queue": {
            "create": "const $name = [];",
            "push": "$ds.push($a);",
            "pop": "$ds.shift();",
            "peek": "$ds[0]",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "priority_queue": {
            "create": "const $name = [];",
            "push": "$ds.push($a);\n$ds.sort((x, y) => y - x);",
            "pop": "$ds.shift();",
            "peek": "$ds[0]",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "vector": {
            "create": "const $name = [];",
            "push": "$ds.push($a);",
            "pop": "$ds.pop();",
            "peek": "$ds[$ds.length - 1]",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "linked_list": {
            "create": "const $name = [];",
            "push_front": "$ds.unshift($a);",
            "push_back": "$ds.push($a);",
            "pop_front": "$ds.shift();",
            "pop_back": "$ds.pop();",
            "peek": "$ds[0]",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "deque": {
            "create": "const $name = [];",
            "push_front": "$ds.unshift($a);",
            "push_back": "$ds.push($a);",
            "pop_front": "$ds.shift();",
            "pop_back": "$ds.pop();",
            "peek": "$ds[0]",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "map": {
            "create": "const $name = new Map();",
            "insert": "$ds.set($a, $b);",
            "get": "$ds.get($a)",
            "remove": "$ds.delete($a);",
            "contains": "$ds.has($a)",
            "size": "$ds.size",
            "empty": "($ds.size === 0)",
        },
        "set": {
            "create": "const $name = new Set();",
            "add": "$ds.add($a);",
            "remove": "$ds.delete($a);",
            "contains": "$ds.has($a)",
            "size": "$ds.size",
            "empty": "($ds.size === 0)",
        },
        "tree": {
            "create": "const $name = [];",
            "add": "$ds.push($a);\n$ds.sort((x, y) => x - y);",
            "contains": "$ds.includes($a)",
            "size": "$ds.length",
            "empty": "($ds.length === 0)",
        },
        "graph": {
            "create": "const $name = Array.from({ length: $n }, () => []);",
            "add_edge": "$ds[$a].push($b);\n$ds[$b].push($a);",
            "size": "$ds.length",
        },
        "pair": {
            "create": "const $name = [$first, $second];",
            "first": "$ds[0]",
            "second": "$ds[1]",
        },
        "array": {
            "create": "const $name = new Array($size).fill(0);",
            "size": "$ds.length",
        },
    }

    def emit_program(self, program: Program) -> None:
        self.line("// Generated JavaScript Code")
        self.line('const readline = require("readline");')
        self.line("const rl = readline.createInterface({")
        self.indent += 1
        self.line("input: process.stdin,")
        self.line("output: process.stdout")
        self.indent -= 1
        self.line("});")
        for struct in self.info.structs:
            self._emit_class(struct)
        self.line()
        self.line("async function main() {")
        self.indent += 1
        hoisted = [v for v in self.info.scalars if v in self.info.hoisted]
        if hoisted:
            self.line("let " + ", ".join(self._name(v) for v in hoisted) + ";")
            self.declared.update(hoisted)
        self.emit_block(program.body)
        self.line("rl.close();")
        self.indent -= 1
        self.line("}")
        self.line()
        self.line("main();")

    def _emit_class(self, struct: StructCreate) -> None:
        self.line()
        self.line(f"class {self._name(struct.name)} {{")
        self.indent += 1
        self.line("constructor() {")
        self.indent += 1
        for field in struct.fields or []:
            self.line(f"this.{field} = 0;")
        self.indent -= 1
        self.line("}")
        self.indent -= 1
        self.line("}")

    def _declare(self, name: str) -> str:
        """``let `` on the first binding of a top-level scalar."""
        if name in self.declared:
            return ""
        self.declared.add(name)
        return "let "

    def emit_assign(self, name: str, value: str) -> None:
        self.line(f"{self._declare(name)}{self._name(name)} = {value};")

    def emit_input(self, name: str) -> None:
        target = self._declare(name) + self._name(name)
        self.line(f"{target} = await new Promise(resolve => {{")
        self.indent += 1
        self.line(f'rl.question("Enter {name}: ", answer => resolve(parseInt(answer)));')
        self.indent -= 1
        self.line("});")

    def binary(self, op: str, left: str, right: str) -> str | None:
        if op == "/":
            return f"Math.trunc({left} / {right})"
        return None

    def emit_print(self, expr: Expr) -> None:
        self.line(f"console.log({self._bare(expr)});")

    def emit_struct_instance(self, stmt: StructCreate) -> None:
        self.line(f"const obj_{stmt.name} = new {self._name(stmt.name)}();")


def emit_javascript(program: Program) -> str:
    """Emit JavaScript source for a program."""
    return JavaScriptBackend().emit(program)
