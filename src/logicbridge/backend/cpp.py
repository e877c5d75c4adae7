"""C++ backend: pseudo-code AST -> C++ program using the STL."""

from __future__ import annotations

from ..frontend.ast import DSQueryExpression, Expr, Program, StructCreate
from .base import Backend
from .util import BOOL_QUERIES

CPP_RESERVED = frozenset(
    {
        "auto",
        "bool",
        "break",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "delete",
        "do",
        "double",
        "else",
        "enum",
        "explicit",
        "extern",
        "false",
        "float",
        "for",
        "friend",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "namespace",
        "new",
        "nullptr",
        "operator",
        "private",
        "protected",
        "public",
        "register",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "struct",
        "switch",
        "template",
        "this",
        "throw",
        "true",
        "try",
        "typedef",
        "typename",
        "union",
        "unsigned",
        "using",
        "virtual",
        "void",
        "volatile",
        "while",
        # Names pulled in by the skeleton
        "cin",
        "cout",
        "deque",
        "endl",
        "list",
        "main",
        "map",
        "pair",
        "priority_queue",
        "queue",
        "set",
        "stack",
        "std",
        "vector",
    }
)


class CppBackend(Backend):
    name = "cpp"
    extension = "cpp"
    null_value = "0"
    reserved = CPP_RESERVED
    requires = {
        "stack": ["<stack>"],
        "queue": ["<queue>"],
        "priority_queue": ["<queue>"],
        "map": ["<map>"],
        "set": ["<set>"],
        "tree": ["<set>"],
        "vector": ["<vector>"],
        "graph": ["<vector>"],
        "linked_list": ["<list>"],
        "deque": ["<deque>"],
        "pair": ["<utility>"],
    }
    templates = {
        "stack": {
            "create": "stack<int> $name;",
            "push": "$ds.push($a);",
            "pop": "$ds.pop();",
            "peek": "$ds.top()",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "queue": {
            "create": "queue<int> $name;",
            "push": "$ds.push($a);",
            "pop": "$ds.pop();",
            "peek": "$ds.front()",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "priority_queue": {
            "create": "priority_queue<int> $name;",
            "push": "$ds.push($a);",
            "pop": "$ds.pop();",
            "peek": "$ds.top()",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "vector": {
            "create": "vector<int> $name;",
            "push": "$ds.push_back($a);",
            "pop": "$ds.pop_back();",
            "peek": "$ds.back()",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "linked_list": {
            "create": "list<int> $name;",
            "push_front": "$ds.push_front($a);",
            "push_back": "$ds.push_back($a);",
            "pop_front": "$ds.pop_front();",
            "pop_back": "$ds.pop_back();",
            "peek": "$ds.front()",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "deque": {
            "create": "deque<int> $name;",
            "push_front": "$ds.push_front($a);",
            "push_back": "$ds.push_back($a);",
            "pop_front": "$ds.pop_front();",
            "pop_back": "$ds.pop_back();",
            "peek": "$ds.front()",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "map": {
            "create": "map<int, int> $name;",
            "insert": "$ds[$a] = $b;",
            "get": "$ds[$a]",
            "remove": "$ds.erase($a);",
            "contains": "($ds.count($a) > 0)",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "set": {
            "create": "set<int> $name;",
            "add": "$ds.insert($a);",
            "remove": "$ds.erase($a);",
            "contains": "($ds.count($a) > 0)",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "tree": {
            "create": "set<int> $name;  // BST using ordered set",
            "add": "$ds.insert($a);",
            "contains": "($ds.count($a) > 0)",
            "size": "(int)$ds.size()",
            "empty": "$ds.empty()",
        },
        "graph": {
            "create": "vector<vector<int>> $name($n);",
            "add_edge": "$ds[$a].push_back($b);\n$ds[$b].push_back($a);  // undirected",
            "size": "(int)$ds.size()",
        },
        "pair": {
            "create": "pair<int, int> $name = make_pair($first, $second);",
            "first": "$ds.first",
            "second": "$ds.second",
        },
        "array": {
            "create": "int $name[$size];",
            "size": "(int)(sizeof($ds) / sizeof(${ds}[0]))",
        },
    }

    def emit_program(self, program: Program) -> None:
        self.line("// Generated C++ Code")
        self.line("#include <iostream>")
        for inc in self.required():
            self.line("#include " + inc)
        self.line("using namespace std;")
        self.line()
        for struct in self.info.structs:
            self.line(f"struct {self._name(struct.name)} {{")
            for field in struct.fields or []:
                self.line(f"    int {self._name(field)};")
            self.line("};")
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
        self.line(f'cout << "Enter {name}: ";')
        self.line(f"cin >> {self._name(name)};")

    def emit_print(self, expr: Expr) -> None:
        if isinstance(expr, DSQueryExpression) and expr.operation in BOOL_QUERIES:
            self.line(f'cout << ({self._expr(expr)} ? "true" : "false") << endl;')
            return
        self.line(f"cout << {self._expr(expr)} << endl;")

    def emit_struct_instance(self, stmt: StructCreate) -> None:
        name = self._name(stmt.name)
        self.line(f"{name} obj_{stmt.name} = {{}};")


def emit_cpp(program: Program) -> str:
    """Emit C++ source for a program."""
    return CppBackend().emit(program)
