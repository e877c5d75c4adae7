"""Compilation pipeline: preprocess, tokenize, parse, analyze, generate."""

from __future__ import annotations

import logging

from .backend import BACKENDS, generate
from .frontend.ast import Program
from .frontend.names import SymbolTable, analyze
from .frontend.parse import parse
from .frontend.preprocess import preprocess
from .frontend.tokens import KEYWORDS, Token, tokenize
from .serialize import ast_to_dict, errors_to_list, symbols_to_dict, tokens_to_list

logger = logging.getLogger(__name__)

TARGETS: list[str] = ["c", "cpp", "java", "javascript", "python"]

PHASES: list[str] = ["preprocess", "tokens", "parse", "names"]

EXTENSIONS: dict[str, str] = {name: cls.extension for name, cls in BACKENDS.items()}

# CompileResult.status values
OK = "ok"
FAILED = "failed"
INVALID = "invalid"
INTERNAL = "internal"


class CompileResult:
    """Outcome of one compilation, convertible to the response dict."""

    def __init__(self, status: str) -> None:
        self.status: str = status
        self.message: str = ""
        self.normalized_code: str | None = None
        self.tokens: list[Token] | None = None
        self.ast: Program | None = None
        self.symbols: SymbolTable | None = None
        self.generated_code: str = ""
        self.errors: list[dict[str, object]] = []

    def ok(self) -> bool:
        return self.status == OK

    def to_dict(self) -> dict[str, object]:
        if self.status in (INVALID, INTERNAL):
            return {"success": False, "message": self.message, "errors": self.errors}
        d: dict[str, object] = {"success": self.ok()}
        if self.ok():
            d["generatedCode"] = self.generated_code
        else:
            d["errors"] = self.errors
        if self.tokens is not None:
            d["tokens"] = tokens_to_list(self.tokens)
        if self.ast is not None:
            d["ast"] = ast_to_dict(self.ast)
        if self.symbols is not None:
            d["symbolTable"] = symbols_to_dict(self.symbols)
        d["normalizedCode"] = self.normalized_code
        if self.ok():
            d["errors"] = []
        return d


def _invalid(message: str) -> CompileResult:
    result = CompileResult(INVALID)
    result.message = message
    result.errors = [{"line": 0, "message": message}]
    return result


def compile_source(code: str, language: str) -> CompileResult:
    """Compile pseudo-code to the named target language."""
    if not code or not language:
        return _invalid("Code and language are required")
    if language not in BACKENDS:
        return _invalid("Unsupported language: " + language)
    try:
        return _compile(code, language)
    except Exception as e:
        logger.exception("compilation of %s target failed", language)
        result = CompileResult(INTERNAL)
        result.message = "Compilation failed"
        result.errors = [{"line": 0, "message": str(e)}]
        return result


def _compile(code: str, language: str) -> CompileResult:
    result = CompileResult(FAILED)
    result.normalized_code = preprocess(code, KEYWORDS)
    logger.debug("preprocessed %d lines", result.normalized_code.count("\n") + 1)
    result.tokens = tokenize(result.normalized_code, KEYWORDS)
    logger.debug("lexed %d tokens", len(result.tokens))
    parsed = parse(result.tokens)
    result.ast = parsed.ast
    if not parsed.ok():
        logger.debug("parse failed with %d errors", len(parsed.errors))
        result.errors = errors_to_list(parsed.errors)
        return result
    assert parsed.ast is not None
    names = analyze(parsed.ast)
    result.symbols = names.table
    if not names.ok():
        logger.debug("name check failed with %d errors", len(names.errors()))
        result.errors = errors_to_list(names.errors())
        return result
    result.generated_code = generate(parsed.ast, language)
    logger.debug("generated %s code", language)
    result.status = OK
    return result
