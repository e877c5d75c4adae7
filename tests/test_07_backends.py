"""Backend tests: collection pass, registry and generated-program behavior."""

import subprocess
import sys

import pytest

from logicbridge.backend import BACKENDS, generate
from logicbridge.backend.c import CBackend
from logicbridge.backend.python import PythonBackend
from logicbridge.backend.util import Emitter, collect, escape_string, is_identifier
from logicbridge.compiler import TARGETS
from logicbridge.frontend.ast import Program
from logicbridge.frontend.parse import parse
from logicbridge.frontend.tokens import KEYWORDS, tokenize


def program(source: str) -> Program:
    result = parse(tokenize(source, KEYWORDS))
    assert result.ok(), result.errors
    return result.ast


STACK_PROGRAM = """\
START
STACK s
PUSH s 10
PUSH s 20
PRINT TOP s
POP s
PRINT TOP s
END"""


def test_registry_matches_targets():
    assert sorted(BACKENDS) == sorted(TARGETS)
    for name, cls in BACKENDS.items():
        assert cls.name == name


def test_generate_unknown_target():
    with pytest.raises(KeyError):
        generate(program("START\nEND"), "cobol")


@pytest.mark.parametrize(
    "target,header",
    [
        ("c", "// Generated C Code"),
        ("cpp", "// Generated C++ Code"),
        ("java", "// Generated Java Code"),
        ("javascript", "// Generated JavaScript Code"),
        ("python", "# Generated Python Code"),
    ],
)
def test_header_and_trailing_newline(target, header):
    code = generate(program(STACK_PROGRAM), target)
    assert code.split("\n")[0] == header
    assert code.endswith("\n")
    assert not code.endswith("\n\n")


def test_backends_are_reusable():
    backend = PythonBackend()
    first = backend.emit(program(STACK_PROGRAM))
    second = backend.emit(program(STACK_PROGRAM))
    assert first == second


def test_python_stack_program_runs(tmp_path):
    path = tmp_path / "stack.py"
    path.write_text(generate(program(STACK_PROGRAM), "python"))
    ran = subprocess.run([sys.executable, str(path)], capture_output=True, text=True)
    assert ran.returncode == 0, ran.stderr
    assert ran.stdout == "20\n10\n"


def test_python_priority_queue_is_max_first(tmp_path):
    source = "START\nPRIORITY_QUEUE pq\nPUSH pq 3\nPUSH pq 9\nPUSH pq 5\nPRINT TOP pq\nPOP pq\nPRINT TOP pq\nEND"
    path = tmp_path / "pq.py"
    path.write_text(generate(program(source), "python"))
    ran = subprocess.run([sys.executable, str(path)], capture_output=True, text=True)
    assert ran.returncode == 0, ran.stderr
    assert ran.stdout == "9\n5\n"


def test_python_structures_run(tmp_path):
    source = """\
START
MAP m
MAP_INSERT m 1 100
PRINT MAP_GET m 1
TREE t
TREE_INSERT t 8
TREE_INSERT t 2
PRINT CONTAINS t 2
GRAPH g 3
GRAPH_ADD_EDGE g 0 2
PRINT SIZE g
DEQUE d
DEQUE_PUSH_FRONT d 1
DEQUE_PUSH_BACK d 2
PRINT FRONT d
STRUCT point x y
PAIR p 3 4
PRINT PAIR_FIRST p * PAIR_SECOND p
END"""
    path = tmp_path / "ds.py"
    path.write_text(generate(program(source), "python"))
    ran = subprocess.run([sys.executable, str(path)], capture_output=True, text=True)
    assert ran.returncode == 0, ran.stderr
    assert ran.stdout.split() == ["100", "true", "3", "1", "12"]


def test_collect_scalars_and_kinds():
    info = collect(
        program(
            """\
START
INPUT n
SET total = 0
FOR i = 1 TO n
SET total = total + i
SET inner = i
END FOR
STACK s
ARRAY arr 5
STRUCT point x y
STRUCT point z
END"""
        )
    )
    assert info.scalars == ["n", "total", "i", "inner"]
    assert info.hoisted == {"i", "inner"}
    assert info.kinds == {"s": "stack", "arr": "array", "point": "struct"}
    assert [s.fields for s in info.structs] == [["x", "y"]]
    assert info.has_input
    assert info.kinds_in_order() == ["stack", "array", "struct"]


def test_collect_drops_scalars_shadowed_by_structures():
    info = collect(program("START\nSET s = 1\nSTACK s\nEND"))
    assert info.scalars == []
    assert info.kinds == {"s": "stack"}


def test_c_helpers_in_definition_order():
    backend = CBackend()
    backend.emit(program("START\nTREE t\nMAP m\nSET_DS u\nEND"))
    assert backend.helpers() == ["lb_find", "lb_map_get", "lb_tree_insert", "lb_tree_contains"]


def test_c_scalars_only_has_no_max_size():
    code = generate(program("START\nSET x = 1\nPRINT x\nEND"), "c")
    assert "MAX_SIZE" not in code
    assert "lb_" not in code


def test_query_on_unknown_name_uses_default_kind():
    code = generate(program("START\nSET x = 1\nPRINT TOP x\nEND"), "python")
    assert "print(x[-1])" in code


def test_query_without_template_is_null():
    code = generate(program("START\nGRAPH g\nPRINT EMPTY g\nEND"), "java")
    assert "System.out.println(0);" in code


def test_unknown_expression_node():
    with pytest.raises(TypeError):
        PythonBackend()._expr(object())


def test_reserved_names_are_renamed_per_target():
    source = "START\nSET print = 1\nSET int = 2\nPRINT print + int\nEND"
    assert "print_ = 1" in generate(program(source), "python")
    assert "int_ = 2;" in generate(program(source), "c")
    assert "int_ = 2;" in generate(program(source), "java")
    assert "printf_ = 1;" in generate(program("START\nSET printf = 1\nEND"), "c")


def test_escape_string():
    assert escape_string('say "hi"\n') == 'say \\"hi\\"\\n'
    assert escape_string("a\\b\tc") == "a\\\\b\\tc"


def test_is_identifier():
    assert is_identifier("total_2")
    assert is_identifier("_x")
    assert not is_identifier("2x")
    assert not is_identifier("")
    assert not is_identifier("x-y")


def test_emitter_indentation():
    e = Emitter("  ")
    e.line("a")
    e.indent += 1
    e.line("b")
    e.line()
    assert e.output() == "a\n  b\n\n"


def test_emit_helpers_match_generate():
    from logicbridge.backend.c import emit_c
    from logicbridge.backend.cpp import emit_cpp
    from logicbridge.backend.java import emit_java
    from logicbridge.backend.javascript import emit_javascript
    from logicbridge.backend.python import emit_python

    helpers = {"c": emit_c, "cpp": emit_cpp, "java": emit_java, "javascript": emit_javascript, "python": emit_python}
    for target, emit in helpers.items():
        assert emit(program(STACK_PROGRAM)) == generate(program(STACK_PROGRAM), target)


def test_python_math_import_only_for_remainder():
    assert "import math" not in generate(program("START\nSET x = 7 / 2\nEND"), "python")
    code = generate(program("START\nQUEUE q\nSET x = 7 % 2\nEND"), "python")
    assert code.split("\n")[:4] == ["# Generated Python Code", "", "import math", "from collections import deque"]


def test_python_division_matches_c_on_negatives(tmp_path):
    source = "START\nSET a = -7\nSET b = 2\nPRINT a / b\nPRINT a % b\nPRINT 7 % -2\nEND"
    path = tmp_path / "div.py"
    path.write_text(generate(program(source), "python"))
    ran = subprocess.run([sys.executable, str(path)], capture_output=True, text=True)
    assert ran.returncode == 0, ran.stderr
    assert ran.stdout.split() == ["-3", "-1", "1"]
