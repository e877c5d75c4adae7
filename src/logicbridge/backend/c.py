"""C backend: pseudo-code AST -> C99 program.

C has no containers, so every kind is simulated with fixed-capacity arrays
of ``MAX_SIZE`` ints and counters named after the structure (``s_top``,
``q_front``/``q_rear``, ``v_size``). Lookups and front operations go
through small ``lb_*`` helper functions emitted only when a kind that
needs them is in use.
"""

from __future__ import annotations

from ..frontend.ast import DSQueryExpression, Expr, Literal, Program, StructCreate
from .base import Backend
from .util import BOOL_QUERIES

C_RESERVED = frozenset(
    {
        "auto",
        "break",
        "case",
        "char",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extern",
        "float",
        "for",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "register",
        "restrict",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "struct",
        "switch",
        "typedef",
        "union",
        "unsigned",
        "void",
        "volatile",
        "while",
        # Skeleton names
        "MAX_SIZE",
        "main",
        "memset",
        "printf",
        "scanf",
    }
)

# Kinds backed by MAX_SIZE arrays
_BOUNDED_KINDS = (
    "stack",
    "queue",
    "priority_queue",
    "vector",
    "linked_list",
    "deque",
    "map",
    "set",
    "tree",
)

HELPERS: dict[str, str] = {
    "lb_find": """\
int lb_find(int items[], int size, int value) {
    for (int i = 0; i < size; i++) {
        if (items[i] == value) return i;
    }
    return -1;
}""",
    "lb_map_get": """\
int lb_map_get(int keys[], int values[], int size, int key) {
    int i = lb_find(keys, size, key);
    return i < 0 ? 0 : values[i];
}""",
    "lb_pq_push": """\
void lb_pq_push(int items[], int *size, int value) {
    int i = *size - 1;
    while (i >= 0 && items[i] > value) {
        items[i + 1] = items[i];
        i--;
    }
    items[i + 1] = value;
    (*size)++;
}""",
    "lb_push_front": """\
void lb_push_front(int items[], int *size, int value) {
    for (int i = *size; i > 0; i--) items[i] = items[i - 1];
    items[0] = value;
    (*size)++;
}""",
    "lb_pop_front": """\
void lb_pop_front(int items[], int *size) {
    for (int i = 1; i < *size; i++) items[i - 1] = items[i];
    (*size)--;
}""",
    "lb_tree_insert": """\
void lb_tree_insert(int values[], int left[], int right[], int *size, int value) {
    int node = *size;
    values[node] = value;
    left[node] = -1;
    right[node] = -1;
    (*size)++;
    if (node == 0) return;
    int cur = 0;
    while (1) {
        if (value < values[cur]) {
            if (left[cur] < 0) { left[cur] = node; return; }
            cur = left[cur];
        } else {
            if (right[cur] < 0) { right[cur] = node; return; }
            cur = right[cur];
        }
    }
}""",
    "lb_tree_contains": """\
int lb_tree_contains(int values[], int left[], int right[], int size, int value) {
    int cur = size > 0 ? 0 : -1;
    while (cur >= 0) {
        if (values[cur] == value) return 1;
        cur = value < values[cur] ? left[cur] : right[cur];
    }
    return 0;
}""",
}

# Kind -> helper functions it needs, in definition order
HELPER_KINDS: dict[str, list[str]] = {
    "map": ["lb_find", "lb_map_get"],
    "set": ["lb_find"],
    "priority_queue": ["lb_pq_push"],
    "linked_list": ["lb_push_front", "lb_pop_front"],
    "deque": ["lb_push_front", "lb_pop_front"],
    "tree": ["lb_tree_insert", "lb_tree_contains"],
}

_SEQUENCE = {
    "create": "int $name[MAX_SIZE];\nint ${name}_size = 0;",
    "size": "${ds}_size",
    "empty": "(${ds}_size == 0)",
}

_DOUBLE_ENDED = {
    **_SEQUENCE,
    "push_front": "lb_push_front($ds, &${ds}_size, $a);",
    "push_back": "${ds}[${ds}_size++] = $a;",
    "pop_front": "lb_pop_front($ds, &${ds}_size);",
    "pop_back": "${ds}_size--;",
    "peek": "${ds}[0]",
}


class CBackend(Backend):
    name = "c"
    extension = "c"
    null_value = "0"
    reserved = C_RESERVED
    requires = {"graph": ["<string.h>"]}
    templates = {
        "stack": {
            "create": "int $name[MAX_SIZE];\nint ${name}_top = -1;",
            "push": "${ds}[++${ds}_top] = $a;",
            "pop": "${ds}_top--;",
            "peek": "${ds}[${ds}_top]",
            "size": "(${ds}_top + 1)",
            "empty": "(${ds}_top == -1)",
        },
        "queue": {
            "create": "int $name[MAX_SIZE];\nint ${name}_front = 0, ${name}_rear = 0;",
            "push": "${ds}[${ds}_rear++] = $a;",
            "pop": "${ds}_front++;",
            "peek": "${ds}[${ds}_front]",
            "size": "(${ds}_rear - ${ds}_front)",
            "empty": "(${ds}_front == ${ds}_rear)",
        },
        # Sorted ascending, largest at the end
        "priority_queue": {
            **_SEQUENCE,
            "push": "lb_pq_push($ds, &${ds}_size, $a);",
            "pop": "${ds}_size--;",
            "peek": "${ds}[${ds}_size - 1]",
        },
        "vector": {
            **_SEQUENCE,
            "push": "${ds}[${ds}_size++] = $a;",
            "pop": "${ds}_size--;",
            "peek": "${ds}[${ds}_size - 1]",
        },
        "linked_list": _DOUBLE_ENDED,
        "deque": _DOUBLE_ENDED,
        "map": {
            "create": "int ${name}_keys[MAX_SIZE];\nint ${name}_values[MAX_SIZE];\nint ${name}_size = 0;",
            "insert": (
                "{\n"
                "    int lb_i = lb_find(${ds}_keys, ${ds}_size, $a);\n"
                "    if (lb_i < 0) {\n"
                "        lb_i = ${ds}_size++;\n"
                "        ${ds}_keys[lb_i] = $a;\n"
                "    }\n"
                "    ${ds}_values[lb_i] = $b;\n"
                "}"
            ),
            "get": "lb_map_get(${ds}_keys, ${ds}_values, ${ds}_size, $a)",
            "remove": "// MAP_REMOVE($ds, $a) not available for fixed arrays",
            "contains": "(lb_find(${ds}_keys, ${ds}_size, $a) >= 0)",
            "size": "${ds}_size",
            "empty": "(${ds}_size == 0)",
        },
        "set": {
            **_SEQUENCE,
            "add": "if (lb_find($ds, ${ds}_size, $a) < 0) ${ds}[${ds}_size++] = $a;",
            "remove": "// SET_REMOVE($ds, $a) not available for fixed arrays",
            "contains": "(lb_find($ds, ${ds}_size, $a) >= 0)",
        },
        "tree": {
            "create": (
                "int ${name}_values[MAX_SIZE];\n"
                "int ${name}_left[MAX_SIZE];\n"
                "int ${name}_right[MAX_SIZE];\n"
                "int ${name}_size = 0;"
            ),
            "add": "lb_tree_insert(${ds}_values, ${ds}_left, ${ds}_right, &${ds}_size, $a);",
            "contains": "lb_tree_contains(${ds}_values, ${ds}_left, ${ds}_right, ${ds}_size, $a)",
            "size": "${ds}_size",
            "empty": "(${ds}_size == 0)",
        },
        # Adjacency matrix
        "graph": {
            "create": "int $name[$n][$n];\nmemset($name, 0, sizeof($name));\nint ${name}_nodes = $n;",
            "add_edge": "${ds}[$a][$b] = 1;\n${ds}[$b][$a] = 1;",
            "size": "${ds}_nodes",
        },
        "pair": {
            "create": "struct { int first; int second; } $name = {$first, $second};",
            "first": "${ds}.first",
            "second": "${ds}.second",
        },
        "array": {
            "create": "int $name[$size];",
            "size": "(int)(sizeof($ds) / sizeof(${ds}[0]))",
        },
    }

    def helpers(self) -> list[str]:
        """Helper function names needed by the kinds in use."""
        result: list[str] = []
        for kind in self.info.kinds_in_order():
            for helper in HELPER_KINDS.get(kind, []):
                if helper not in result:
                    result.append(helper)
        # Definition order matters: lb_map_get calls lb_find
        return [h for h in HELPERS if h in result]

    def emit_program(self, program: Program) -> None:
        self.line("// Generated C Code")
        self.line("#include <stdio.h>")
        for inc in self.required():
            self.line("#include " + inc)
        if self.uses_kind(*_BOUNDED_KINDS):
            self.line()
            self.line("#define MAX_SIZE 100")
        for struct in self.info.structs:
            self.line()
            self.line(f"struct {self._name(struct.name)} {{")
            fields = struct.fields or []
            if not fields:
                self.line("    int _unused;")
            for field in fields:
                self.line(f"    int {self._name(field)};")
            self.line("};")
        for helper in self.helpers():
            self.line()
            for text in HELPERS[helper].split("\n"):
                self.line(text)
        self.line()
        self.line("int main() {")
        self.indent += 1
        if self.info.scalars:
            self.line("int " + ", ".join(self._name(v) for v in self.info.scalars) + ";")
            self.line()
            self.declared.update(self.info.scalars)
        self.emit_block(program.body)
        self.line("return 0;")
        self.indent -= 1
        self.line("}")

    def emit_input(self, name: str) -> None:
        self.line(f'printf("Enter {name}: ");')
        self.line(f'scanf("%d", &{self._name(name)});')

    def emit_print(self, expr: Expr) -> None:
        if isinstance(expr, Literal) and isinstance(expr.value, str):
            self.line(f'printf("%s\\n", {self._expr(expr)});')
        elif isinstance(expr, DSQueryExpression) and expr.operation in BOOL_QUERIES:
            self.line(f'printf("%s\\n", {self._expr(expr)} ? "true" : "false");')
        else:
            self.line(f'printf("%d\\n", {self._bare(expr)});')

    def emit_struct_instance(self, stmt: StructCreate) -> None:
        self.line(f"struct {self._name(stmt.name)} obj_{stmt.name} = {{0}};")


def emit_c(program: Program) -> str:
    """Emit C source for a program."""
    return CBackend().emit(program)
