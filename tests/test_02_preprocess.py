"""Preprocessor tests: structured English to canonical keyword syntax."""

from pathlib import Path

import pytest

from conftest import discover_tests
from logicbridge.frontend.preprocess import Preprocessor, preprocess
from logicbridge.frontend.tokens import KEYWORDS, tokenize

PREPROCESS_DIR = Path(__file__).parent / "02_preprocess"


def pytest_generate_tests(metafunc):
    """Parametrize tests over preprocess test files."""
    if "pre_input" in metafunc.fixturenames:
        params = [
            pytest.param(test_input, expected, id=test_id)
            for test_id, test_input, expected in discover_tests(PREPROCESS_DIR)
        ]
        metafunc.parametrize("pre_input,pre_expected", params)


def test_preprocess(pre_input: str, pre_expected: str) -> None:
    """Verify preprocessor produces expected canonical text."""
    assert preprocess(pre_input).strip() == pre_expected


def test_line_count_preserved() -> None:
    source = "begin\n\n// note\nshow 1\nfinish"
    assert preprocess(source).count("\n") == source.count("\n")


def test_natural_and_canonical_tokens_match() -> None:
    natural = preprocess("begin\nask for x\nshow x\nfinish")
    canonical = preprocess("START\nINPUT x\nPRINT x\nEND")
    assert tokenize(natural) == tokenize(canonical)


def test_custom_keyword_set() -> None:
    pre = Preprocessor(("PRINT", "SHOUT"))
    assert pre.process_line("shout x") == "SHOUT x"
    # START is not in this keyword set
    assert pre.process_line("begin") == "START"
    assert pre.process_line("start now") == "start now"


def test_default_keywords_are_used() -> None:
    assert Preprocessor().keyword_patterns[0][1] == max(KEYWORDS, key=len)
