"""Lexer tests. Expected tokens are written one per line as LINE TYPE VALUE."""

from pathlib import Path

import pytest

from conftest import discover_tests
from logicbridge.frontend.tokens import TK_IDENTIFIER, TK_KEYWORD, Lexer, Token, tokenize

TOKENS_DIR = Path(__file__).parent / "03_tokens"


def format_tokens(tokens: list[Token]) -> str:
    return "\n".join(f"{t.line} {t.type} {t.value}" for t in tokens)


def pytest_generate_tests(metafunc):
    """Parametrize tests over token test files."""
    if "tok_input" in metafunc.fixturenames:
        params = [
            pytest.param(test_input, expected, id=test_id)
            for test_id, test_input, expected in discover_tests(TOKENS_DIR)
        ]
        metafunc.parametrize("tok_input,tok_expected", params)


def test_tokens(tok_input: str, tok_expected: str) -> None:
    """Verify lexer produces expected tokens."""
    assert format_tokens(tokenize(tok_input)) == tok_expected


def test_empty_source() -> None:
    assert tokenize("") == []
    assert tokenize("\n\n// only a comment\n") == []


def test_keywords_are_case_sensitive() -> None:
    tokens = tokenize("print x")
    assert [t.type for t in tokens] == [TK_IDENTIFIER, TK_IDENTIFIER]


def test_alternative_keyword_set() -> None:
    lexer = Lexer("SHOUT x\nPRINT x", keywords=["SHOUT"])
    tokens = lexer.tokenize()
    assert tokens[0] == Token(TK_KEYWORD, "SHOUT", 1)
    assert tokens[2] == Token(TK_IDENTIFIER, "PRINT", 2)


def test_indentation_is_ignored() -> None:
    assert tokenize("    PRINT 1") == tokenize("PRINT 1")
