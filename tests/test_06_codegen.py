"""Codegen tests: compile pseudo-code and look for expected target snippets.

Format of tests/06_codegen/*.tests:

    === test name
    pseudo-code lines
    --- python
    expected snippet
    --- c
    expected snippet
    ---

A language may repeat; every snippet must appear in the output. Snippets are
compared line by line with surrounding whitespace and blank lines ignored.
"""

from pathlib import Path

import pytest

from conftest import TESTS_DIR, contains_normalized
from logicbridge import compile_source

CODEGEN_DIR = TESTS_DIR / "06_codegen"


def parse_codegen_file(path: Path) -> list[tuple[str, str, dict[str, list[str]]]]:
    """Parse a codegen .tests file into (name, input, {lang: [snippets]}) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, dict[str, list[str]]]] = []
    i = 0
    while i < len(lines):
        if not lines[i].startswith("=== "):
            i += 1
            continue
        name = lines[i][4:].strip()
        i += 1
        input_lines: list[str] = []
        while i < len(lines) and not lines[i].startswith("---"):
            input_lines.append(lines[i])
            i += 1
        expected: dict[str, list[str]] = {}
        while i < len(lines) and lines[i].startswith("--- "):
            lang = lines[i][4:].strip()
            i += 1
            snippet: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                snippet.append(lines[i])
                i += 1
            expected.setdefault(lang, []).append("\n".join(snippet).strip())
        if i < len(lines) and lines[i] == "---":
            i += 1
        result.append((name, "\n".join(input_lines), expected))
    return result


def discover_codegen_tests() -> list[tuple[str, str, str, list[str]]]:
    results = []
    for test_file in sorted(CODEGEN_DIR.glob("*.tests")):
        for name, source, expected in parse_codegen_file(test_file):
            for lang, snippets in expected.items():
                results.append((f"{test_file.stem}/{name}[{lang}]", source, lang, snippets))
    return results


def pytest_generate_tests(metafunc):
    if "codegen_lang" in metafunc.fixturenames:
        tests = discover_codegen_tests()
        metafunc.parametrize(
            "codegen_input,codegen_lang,codegen_expected",
            [(source, lang, snippets) for _, source, lang, snippets in tests],
            ids=[t[0] for t in tests],
        )


def test_codegen(codegen_input: str, codegen_lang: str, codegen_expected: list[str]):
    result = compile_source(codegen_input, codegen_lang)
    assert result.ok(), result.errors
    for snippet in codegen_expected:
        if not contains_normalized(result.generated_code, snippet):
            pytest.fail(
                f"Expected not found in output:\n--- expected ---\n{snippet}\n--- got ---\n{result.generated_code}"
            )


def test_every_case_has_a_target():
    for test_file in sorted(CODEGEN_DIR.glob("*.tests")):
        for name, _, expected in parse_codegen_file(test_file):
            assert expected, f"{test_file.stem}/{name} has no expected output"


def test_parse_codegen_file_groups_repeated_languages(tmp_path):
    path = tmp_path / "x.tests"
    path.write_text("=== one\nSTART\nEND\n--- c\nfirst\n--- c\nsecond\n--- python\nthird\n---\n")
    [(name, source, expected)] = parse_codegen_file(path)
    assert name == "one"
    assert source == "START\nEND"
    assert expected == {"c": ["first", "second"], "python": ["third"]}


def test_contains_normalized_ignores_indentation_and_blank_lines():
    haystack = "int main() {\n\n    int a;\n    return 0;\n}\n"
    assert contains_normalized(haystack, "int a;\nreturn 0;")
    assert not contains_normalized(haystack, "int a;\n}")
