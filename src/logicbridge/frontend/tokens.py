"""Canonical pseudo-code tokenizer: lexes normalized text into a flat token list."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Token type constants
TK_KEYWORD = "KEYWORD"
TK_IDENTIFIER = "IDENTIFIER"
TK_NUMBER = "NUMBER"
TK_STRING = "STRING"
TK_OPERATOR = "OPERATOR"

KEYWORDS: tuple[str, ...] = (
    # Program structure and core statements
    "START",
    "END",
    "INPUT",
    "PRINT",
    "SET",
    "ARRAY",
    "IF",
    "THEN",
    "ELSE",
    "END IF",
    "WHILE",
    "DO",
    "END WHILE",
    "FOR",
    "TO",
    "END FOR",
    # Stack
    "STACK",
    "PUSH",
    "POP",
    "TOP",
    # Queue
    "QUEUE",
    "ENQUEUE",
    "DEQUEUE",
    "FRONT",
    # Map
    "MAP",
    "MAP_INSERT",
    "MAP_GET",
    "MAP_REMOVE",
    # Set
    "SET_DS",
    "SET_ADD",
    "SET_REMOVE",
    "CONTAINS",
    # Vector
    "VECTOR",
    "VECTOR_PUSH",
    "VECTOR_POP",
    # Linked list
    "LINKED_LIST",
    "LL_PUSH_FRONT",
    "LL_PUSH_BACK",
    "LL_POP_FRONT",
    "LL_POP_BACK",
    # Tree and graph
    "TREE",
    "TREE_INSERT",
    "GRAPH",
    "GRAPH_ADD_EDGE",
    # Common queries
    "SIZE",
    "EMPTY",
    # Pair
    "PAIR",
    "PAIR_FIRST",
    "PAIR_SECOND",
    # Priority queue and deque
    "PRIORITY_QUEUE",
    "DEQUE",
    "DEQUE_PUSH_FRONT",
    "DEQUE_PUSH_BACK",
    "DEQUE_POP_FRONT",
    "DEQUE_POP_BACK",
    # Struct
    "STRUCT",
)

# Checked before SINGLE_OPS
DOUBLE_OPS: tuple[str, ...] = ("==", "!=", "<=", ">=")

SINGLE_OPS: set[str] = {
    "+",
    "-",
    "*",
    "/",
    "%",
    "<",
    ">",
    "=",
    "(",
    ")",
    ",",
    "[",
    "]",
}

# Characters allowed right after a keyword
KEYWORD_BOUNDARY: set[str] = {" ", "\t", "[", "]", "(", ","}


class Token:
    """A token with type, value, and 1-based source line."""

    __slots__ = ("type", "value", "line")

    def __init__(self, type_: str, value: str, line: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (
            self.type == other.type
            and self.value == other.value
            and self.line == other.line
        )

    def __repr__(self) -> str:
        return "Token(" + self.type + ", " + repr(self.value) + ", " + str(self.line) + ")"


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


class Lexer:
    """Line-oriented lexer over normalized pseudo-code.

    Keywords are matched case-sensitively, longest first, and only when
    followed by whitespace, a bracket, a comma or the end of the line.
    Characters that start no token are dropped.
    """

    def __init__(self, source: str, keywords: tuple[str, ...] | list[str] = KEYWORDS):
        self.source: str = source
        self.keywords: list[str] = sorted(keywords, key=len, reverse=True)

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        lines = self.source.split("\n")
        i = 0
        while i < len(lines):
            text = lines[i].strip()
            if text != "" and not text.startswith("//"):
                self._tokenize_line(text, i + 1, tokens)
            i += 1
        return tokens

    def _match_keyword(self, text: str, pos: int) -> str | None:
        for kw in self.keywords:
            if text.startswith(kw, pos):
                end = pos + len(kw)
                if end == len(text) or text[end] in KEYWORD_BOUNDARY:
                    return kw
        return None

    def _tokenize_line(self, text: str, line: int, tokens: list[Token]) -> None:
        pos = 0
        length = len(text)
        while pos < length:
            c = text[pos]
            if c == " " or c == "\t" or c == "\r":
                pos += 1
                continue
            kw = self._match_keyword(text, pos)
            if kw is not None:
                tokens.append(Token(TK_KEYWORD, kw, line))
                pos += len(kw)
                continue
            two = text[pos : pos + 2]
            if two in DOUBLE_OPS:
                tokens.append(Token(TK_OPERATOR, two, line))
                pos += 2
                continue
            if c in SINGLE_OPS:
                tokens.append(Token(TK_OPERATOR, c, line))
                pos += 1
                continue
            if _is_digit(c):
                start = pos
                while pos < length and (_is_digit(text[pos]) or text[pos] == "."):
                    pos += 1
                tokens.append(Token(TK_NUMBER, text[start:pos], line))
                continue
            if c == '"' or c == "'":
                pos += 1
                start = pos
                while pos < length and text[pos] != c:
                    pos += 1
                tokens.append(Token(TK_STRING, text[start:pos], line))
                # Unterminated literals run to end of line
                pos += 1
                continue
            if _is_alpha(c):
                start = pos
                while pos < length and _is_alnum(text[pos]):
                    pos += 1
                tokens.append(Token(TK_IDENTIFIER, text[start:pos], line))
                continue
            logger.debug("line %d: dropping unexpected character %r", line, c)
            pos += 1


def tokenize(source: str, keywords: tuple[str, ...] | list[str] = KEYWORDS) -> list[Token]:
    """Tokenize normalized pseudo-code. No end-of-input token is appended."""
    return Lexer(source, keywords).tokenize()
