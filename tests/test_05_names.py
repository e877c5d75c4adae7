"""Semantic analysis tests: declaration before use."""

from pathlib import Path

import pytest

from conftest import discover_tests
from logicbridge.frontend.names import SemanticAnalyzer, SymbolTable, analyze
from logicbridge.frontend.parse import parse
from logicbridge.frontend.tokens import tokenize

NAMES_DIR = Path(__file__).parent / "05_names"


def analyze_source(source: str):
    parsed = parse(tokenize(source))
    assert parsed.ok(), parsed.errors
    return analyze(parsed.ast)


def format_result(result) -> str:
    if result.ok():
        return "ok"
    return "\n".join(repr(v) for v in result.errors())


def pytest_generate_tests(metafunc):
    """Parametrize tests over names test files."""
    if "names_input" in metafunc.fixturenames:
        params = [
            pytest.param(test_input, expected, id=test_id)
            for test_id, test_input, expected in discover_tests(NAMES_DIR)
        ]
        metafunc.parametrize("names_input,names_expected", params)


def test_names(names_input: str, names_expected: str) -> None:
    """Verify semantic analysis produces expected result."""
    assert format_result(analyze_source(names_input)) == names_expected


def test_symbol_types_and_lines() -> None:
    result = analyze_source(
        "START\nINPUT n\nx = n\nFOR i = 1 TO n\nPRINT i\nEND FOR\nARRAY a 3\nSTACK s\nEND"
    )
    table = result.table
    assert [(s.name, s.type, s.line) for s in table.symbols.values()] == [
        ("n", "number", 2),
        ("x", "any", 3),
        ("i", "number", 4),
        ("a", "array", 7),
        ("s", "stack", 8),
    ]


def test_first_declaration_wins() -> None:
    result = analyze_source("START\nSTACK s\nQUEUE s\nEND")
    assert result.table.lookup("s").type == "stack"
    assert result.table.lookup("s").line == 2
    assert len(result.table) == 1


def test_struct_declares_its_name() -> None:
    result = analyze_source("START\nSTRUCT point x y\nEND")
    assert "point" in result.table
    assert result.table.lookup("point").type == "struct"


def test_declaration_order_matters() -> None:
    ok = analyze_source("START\nINPUT x\nPRINT x\nEND")
    bad = analyze_source("START\nPRINT x\nINPUT x\nEND")
    assert ok.ok()
    assert not bad.ok()


def test_analyze_without_program() -> None:
    with pytest.raises(ValueError):
        analyze(None)


def test_analyzer_is_reusable() -> None:
    analyzer = SemanticAnalyzer()
    first = analyzer.analyze(parse(tokenize("START\nPRINT y\nEND")).ast)
    second = analyzer.analyze(parse(tokenize("START\nx = 1\nEND")).ast)
    assert not first.ok()
    assert second.ok()
    assert "y" not in second.table


def test_symbol_table_lookup_missing() -> None:
    assert SymbolTable().lookup("nope") is None
