"""Frontend package - converts pseudo-code text to a checked AST."""

from .names import NameResult, NameViolation, SemanticAnalyzer, SymbolInfo, SymbolTable, analyze
from .parse import ParseError, ParseResult, Parser, parse
from .preprocess import Preprocessor, preprocess
from .tokens import KEYWORDS, Lexer, Token, tokenize

__all__ = [
    "KEYWORDS",
    "Lexer",
    "NameResult",
    "NameViolation",
    "ParseError",
    "ParseResult",
    "Parser",
    "Preprocessor",
    "SemanticAnalyzer",
    "SymbolInfo",
    "SymbolTable",
    "Token",
    "analyze",
    "parse",
    "preprocess",
    "tokenize",
]
