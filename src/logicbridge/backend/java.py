"""Java backend: pseudo-code AST -> single-file Java program.

The program body lives in ``GeneratedCode.main``. Scalars are ``int`` and are
declared zero-initialized at the top of ``main``. Structs become
package-private classes ahead of the public class.
"""

from __future__ import annotations

from ..frontend.ast import Expr, Program, StructCreate
from .base import Backend

JAVA_RESERVED = frozenset(
    {
        "abstract",
        "assert",
        "boolean",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extends",
        "false",
        "final",
        "finally",
        "float",
        "for",
        "goto",
        "if",
        "implements",
        "import",
        "instanceof",
        "int",
        "interface",
        "long",
        "native",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "short",
        "static",
        "strictfp",
        "super",
        "switch",
        "synchronized",
        "this",
        "throw",
        "throws",
        "transient",
        "true",
        "try",
        "var",
        "void",
        "volatile",
        "while",
        # Skeleton names
        "GeneratedCode",
        "Math",
        "String",
        "System",
        "args",
        "scanner",
    }
)


class JavaBackend(Backend):
    name = "java"
    extension = "java"
    null_value = "0"
    reserved = JAVA_RESERVED
    requires = {
        "stack": ["java.util.Stack"],
        "queue": ["java.util.Queue", "java.util.LinkedList"],
        "priority_queue": ["java.util.PriorityQueue", "java.util.Collections"],
        "map": ["java.util.HashMap"],
        "set": ["java.util.HashSet"],
        "vector": ["java.util.ArrayList"],
        "linked_list": ["java.util.LinkedList"],
        "deque": ["java.util.ArrayDeque"],
        "tree": ["java.util.TreeSet"],
        "graph": ["java.util.ArrayList", "java.util.List"],
    }
    templates = {
        "stack": {
            "create": "Stack<Integer> $name = new Stack<>();",
            "push": "$ds.push($a);",
            "pop": "$ds.pop();",
            "peek": "$ds.peek()",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "queue": {
            "create": "Queue<Integer> $name = new LinkedList<>();",
            "push": "$ds.add($a);",
            "pop": "$ds.poll();",
            "peek": "$ds.peek()",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "priority_queue": {
            "create": "PriorityQueue<Integer> $name = new PriorityQueue<>(Collections.reverseOrder());",
            "push": "$ds.add($a);",
            "pop": "$ds.poll();",
            "peek": "$ds.peek()",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "vector": {
            "create": "ArrayList<Integer> $name = new ArrayList<>();",
            "push": "$ds.add($a);",
            "pop": "$ds.remove($ds.size() - 1);",
            "peek": "$ds.get($ds.size() - 1)",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "linked_list": {
            "create": "LinkedList<Integer> $name = new LinkedList<>();",
            "push_front": "$ds.addFirst($a);",
            "push_back": "$ds.addLast($a);",
            "pop_front": "$ds.removeFirst();",
            "pop_back": "$ds.removeLast();",
            "peek": "$ds.peekFirst()",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "deque": {
            "create": "ArrayDeque<Integer> $name = new ArrayDeque<>();",
            "push_front": "$ds.addFirst($a);",
            "push_back": "$ds.addLast($a);",
            "pop_front": "$ds.removeFirst();",
            "pop_back": "$ds.removeLast();",
            "peek": "$ds.peekFirst()",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "map": {
            "create": "HashMap<Integer, Integer> $name = new HashMap<>();",
            "insert": "$ds.put($a, $b);",
            "get": "$ds.get($a)",
            "remove": "$ds.remove($a);",
            "contains": "$ds.containsKey($a)",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "set": {
            "create": "HashSet<Integer> $name = new HashSet<>();",
            "add": "$ds.add($a);",
            "remove": "$ds.remove($a);",
            "contains": "$ds.contains($a)",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "tree": {
            "create": "TreeSet<Integer> $name = new TreeSet<>();",
            "add": "$ds.add($a);",
            "contains": "$ds.contains($a)",
            "size": "$ds.size()",
            "empty": "$ds.isEmpty()",
        },
        "graph": {
            "create": (
                "List<List<Integer>> $name = new ArrayList<>();\n"
                "for (int _i = 0; _i < $n; _i++) $name.add(new ArrayList<>());"
            ),
            "add_edge": "$ds.get($a).add($b);\n$ds.get($b).add($a);",
            "size": "$ds.size()",
        },
        "pair": {
            "create": "int[] $name = new int[] {$first, $second};",
            "first": "$ds[0]",
            "second": "$ds[1]",
        },
        "array": {
            "create": "int[] $name = new int[$size];",
            "size": "$ds.length",
        },
    }

    def emit_program(self, program: Program) -> None:
        self.line("// Generated Java Code")
        imports = ["java.util.Scanner"]
        for imp in self.required():
            if imp not in imports:
                imports.append(imp)
        for imp in imports:
            self.line(f"import {imp};")
        self.line()
        for struct in self.info.structs:
            self.line(f"class {self._name(struct.name)} {{")
            for field in struct.fields or []:
                self.line(f"    int {self._name(field)};")
            self.line("}")
            self.line()
        self.line("public class GeneratedCode {")
        self.indent += 1
        self.line("public static void main(String[] args) {")
        self.indent += 1
        self.line("Scanner scanner = new Scanner(System.in);")
        if self.info.scalars:
            self.line("int " + ", ".join(self._name(v) + " = 0" for v in self.info.scalars) + ";")
            self.declared.update(self.info.scalars)
        self.emit_block(program.body)
        self.line("scanner.close();")
        self.indent -= 1
        self.line("}")
        self.indent -= 1
        self.line("}")

    def emit_input(self, name: str) -> None:
        self.line(f'System.out.print("Enter {name}: ");')
        self.line(f"{self._name(name)} = scanner.nextInt();")

    def emit_print(self, expr: Expr) -> None:
        self.line(f"System.out.println({self._bare(expr)});")

    def emit_struct_instance(self, stmt: StructCreate) -> None:
        name = self._name(stmt.name)
        self.line(f"{name} obj_{stmt.name} = new {name}();")


def emit_java(program: Program) -> str:
    """Emit Java source for a program."""
    return JavaBackend().emit(program)
