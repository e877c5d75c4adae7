"""Pseudo-code parser: recursive descent, one method per grammar production.

Parsing is error tolerant. Each statement list catches a failing statement's
ParseError, records it, and resynchronizes at the next token that can start a
statement or close a block. Only a missing START or END is fatal, in which
case the result carries no AST.
"""

from __future__ import annotations

from .ast import (
    CREATE_NODES,
    OPERATION_NODES,
    QUERY_ARITY,
    Arg,
    ArrayAccess,
    ArrayCreate,
    ArraySetStatement,
    AssignmentStatement,
    BinaryExpression,
    DSCreate,
    DSOperation,
    DSQueryExpression,
    Expr,
    ForStatement,
    GraphCreate,
    Identifier,
    IfStatement,
    InputStatement,
    Literal,
    PairCreate,
    PrintStatement,
    Program,
    Stmt,
    StructCreate,
    UnaryExpression,
    WhileStatement,
)
from .tokens import TK_IDENTIFIER, TK_KEYWORD, TK_NUMBER, TK_OPERATOR, TK_STRING, Token

COMPARE_OPS: set[str] = {"==", "!=", "<", ">", "<=", ">="}
ADDITIVE_OPS: set[str] = {"+", "-"}
MULTIPLICATIVE_OPS: set[str] = {"*", "/", "%"}

BLOCK_TERMINATORS: set[str] = {"END", "END IF", "ELSE", "END WHILE", "END FOR"}

STATEMENT_KEYWORDS: set[str] = (
    {"INPUT", "PRINT", "SET", "IF", "WHILE", "FOR", "ARRAY"}
    | set(CREATE_NODES)
    | set(OPERATION_NODES)
)

# Tokens taken verbatim as operation arguments
RAW_ARG_TYPES: set[str] = {TK_IDENTIFIER, TK_NUMBER, TK_STRING}


class ParseError(Exception):
    """Parse error with the source line it is attributed to."""

    def __init__(self, message: str, line: int):
        self.message: str = message
        self.line: int = line
        super().__init__(message + " at line " + str(line))


class ParseResult:
    """Parser output: the program (None when fatal) and all recorded errors."""

    def __init__(self, ast: Program | None, errors: list[ParseError]):
        self.ast: Program | None = ast
        self.errors: list[ParseError] = errors

    def ok(self) -> bool:
        return self.ast is not None and len(self.errors) == 0


def parse_number(text: str) -> int | float:
    """Leading-float parse of a NUMBER token: "1.2.3" is 1.2, integral values are int."""
    end = 0
    seen_dot = False
    while end < len(text):
        c = text[end]
        if c == ".":
            if seen_dot:
                break
            seen_dot = True
        elif not (c >= "0" and c <= "9"):
            break
        end += 1
    digits = text[:end].rstrip(".")
    if digits == "":
        return 0
    value = float(digits)
    if value.is_integer():
        return int(value)
    return value


class Parser:
    """Recursive descent parser over canonical pseudo-code tokens."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = tokens
        self.pos: int = 0
        self.errors: list[ParseError] = []
        self._stmt_start: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def previous(self) -> Token | None:
        if self.pos > 0:
            return self.tokens[self.pos - 1]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at_keyword(self, value: str) -> bool:
        tok = self.current()
        return tok is not None and tok.type == TK_KEYWORD and tok.value == value

    def at_operator(self, value: str) -> bool:
        tok = self.current()
        return tok is not None and tok.type == TK_OPERATOR and tok.value == value

    def at_type(self, type_: str) -> bool:
        tok = self.current()
        return tok is not None and tok.type == type_

    def on_line(self, line: int) -> bool:
        """True when the next token exists and sits on the given line."""
        tok = self.current()
        return tok is not None and tok.line == line

    def expect_keyword(self, value: str, msg: str) -> Token:
        if not self.at_keyword(value):
            raise self.error(msg)
        return self.advance()

    def expect_operator(self, value: str, msg: str) -> Token:
        if not self.at_operator(value):
            raise self.error(msg)
        return self.advance()

    def expect_ident(self, msg: str) -> Token:
        if not self.at_type(TK_IDENTIFIER):
            raise self.error(msg)
        return self.advance()

    def error_line(self) -> int:
        """Line to blame for an error at the current position.

        A statement that ran past the end of its own line is blamed on the
        line of its last consumed token.
        """
        tok = self.current()
        prev = self.previous()
        if prev is not None and self.pos > self._stmt_start:
            if tok is None or tok.line > prev.line:
                return prev.line
        if tok is not None:
            return tok.line
        if prev is not None:
            return prev.line
        return 0

    def error(self, msg: str) -> ParseError:
        return ParseError(msg, self.error_line())

    def block_error(self, msg: str) -> ParseError:
        """Error for a missing block terminator, blamed where the block stopped."""
        tok = self.current()
        if tok is not None:
            return ParseError(msg, tok.line)
        return ParseError(msg, self.error_line())

    def synchronize(self, line: int) -> None:
        """Skip the rest of the failing line, then up to a statement or block boundary."""
        while not self.at_end():
            tok = self.tokens[self.pos]
            if tok.line > line:
                break
            if tok.type == TK_KEYWORD and tok.value in BLOCK_TERMINATORS:
                return
            self.pos += 1
        while not self.at_end():
            tok = self.tokens[self.pos]
            if tok.type == TK_IDENTIFIER:
                return
            if tok.type == TK_KEYWORD and (
                tok.value in STATEMENT_KEYWORDS or tok.value in BLOCK_TERMINATORS
            ):
                return
            self.pos += 1

    # ── Program and Blocks ───────────────────────────────────

    def parse(self) -> ParseResult:
        if not self.at_keyword("START"):
            self.errors.append(self.error("Program must start with START keyword"))
            return ParseResult(None, self.errors)
        self.advance()
        body = self.parse_statements({"END"})
        if not self.at_keyword("END"):
            self.errors.append(self.block_error("Program must end with END keyword"))
            return ParseResult(None, self.errors)
        self.advance()
        return ParseResult(Program(body), self.errors)

    def parse_statements(self, stop: set[str]) -> list[Stmt]:
        """Parse statements until a keyword in stop or end of input."""
        stmts: list[Stmt] = []
        while not self.at_end():
            tok = self.tokens[self.pos]
            if tok.type == TK_KEYWORD and tok.value in stop:
                break
            self._stmt_start = self.pos
            try:
                stmts.append(self.parse_statement())
            except ParseError as e:
                self.errors.append(e)
                self.synchronize(e.line)
        return stmts

    def parse_block(self) -> list[Stmt]:
        start = self._stmt_start
        body = self.parse_statements(BLOCK_TERMINATORS)
        self._stmt_start = start
        return body

    # ── Statements ───────────────────────────────────────────

    def parse_statement(self) -> Stmt:
        tok = self.tokens[self.pos]
        if tok.type == TK_IDENTIFIER:
            return self.parse_identifier_statement()
        if tok.type != TK_KEYWORD:
            self.advance()
            raise self.error("Unexpected token: " + tok.value)
        kw = tok.value
        if kw == "INPUT":
            return self.parse_input()
        if kw == "PRINT":
            return self.parse_print()
        if kw == "SET":
            return self.parse_set()
        if kw == "IF":
            return self.parse_if()
        if kw == "WHILE":
            return self.parse_while()
        if kw == "FOR":
            return self.parse_for()
        if kw == "ARRAY":
            return self.parse_array()
        if kw == "GRAPH":
            return self.parse_graph_create()
        if kw == "PAIR":
            return self.parse_pair_create()
        if kw == "STRUCT":
            return self.parse_struct_create()
        if kw in CREATE_NODES:
            return self.parse_create(CREATE_NODES[kw])
        if kw in OPERATION_NODES:
            return self.parse_operation(OPERATION_NODES[kw])
        self.advance()
        raise self.error("Unexpected keyword: " + kw)

    def parse_identifier_statement(self) -> AssignmentStatement:
        ident = self.advance()
        if not self.at_operator("="):
            raise self.error("Unexpected identifier: " + ident.value)
        self.advance()
        expr = self.parse_expression()
        return AssignmentStatement(ident.line, ident.value, expr)

    def parse_input(self) -> InputStatement:
        self.advance()
        ident = self.expect_ident("Expected variable name after INPUT")
        return InputStatement(ident.line, ident.value)

    def parse_print(self) -> PrintStatement:
        line = self.advance().line
        expr = self.parse_expression()
        return PrintStatement(line, expr)

    def parse_set(self) -> Stmt:
        self.advance()
        ident = self.expect_ident("Expected variable name after SET")
        if self.at_operator("["):
            self.advance()
            index = self.parse_expression()
            self.expect_operator("]", "Expected ]")
            self.expect_operator("=", "Expected = after variable")
            value = self.parse_expression()
            return ArraySetStatement(ident.line, ident.value, index, value)
        self.expect_operator("=", "Expected = after variable name")
        expr = self.parse_expression()
        return AssignmentStatement(ident.line, ident.value, expr)

    def parse_if(self) -> IfStatement:
        line = self.advance().line
        cond = self.parse_expression()
        self.expect_keyword("THEN", "Expected THEN after condition")
        then_branch = self.parse_block()
        else_branch: list[Stmt] | None = None
        if self.at_keyword("ELSE"):
            self.advance()
            else_branch = self.parse_block()
        if not self.at_keyword("END IF"):
            raise self.block_error("Expected END IF")
        self.advance()
        return IfStatement(line, cond, then_branch, else_branch)

    def parse_while(self) -> WhileStatement:
        line = self.advance().line
        cond = self.parse_expression()
        self.expect_keyword("DO", "Expected DO after condition")
        body = self.parse_block()
        if not self.at_keyword("END WHILE"):
            raise self.block_error("Expected END WHILE")
        self.advance()
        return WhileStatement(line, cond, body)

    def parse_for(self) -> ForStatement:
        line = self.advance().line
        var = self.expect_ident("Expected variable name")
        self.expect_operator("=", "Expected =")
        start = self.parse_expression()
        self.expect_keyword("TO", "Expected TO")
        end = self.parse_expression()
        body = self.parse_block()
        if not self.at_keyword("END FOR"):
            raise self.block_error("Expected END FOR")
        self.advance()
        return ForStatement(line, var.value, start, end, body)

    def parse_array(self) -> ArrayCreate:
        line = self.advance().line
        name = self.expect_ident("Expected array name")
        if self.at_operator("["):
            self.advance()
            size = self.parse_expression()
            self.expect_operator("]", "Expected ]")
        else:
            size = self.parse_expression()
        return ArrayCreate(line, name.value, size)

    # ── Data Structures ──────────────────────────────────────

    def parse_create(self, node: type[DSCreate]) -> DSCreate:
        line = self.advance().line
        name = self.expect_ident("Expected " + node.kind + " name")
        return node(line, name.value)

    def _optional_count(self, line: int) -> str | None:
        if self.on_line(line) and (self.at_type(TK_NUMBER) or self.at_type(TK_IDENTIFIER)):
            return self.advance().value
        return None

    def parse_graph_create(self) -> GraphCreate:
        line = self.advance().line
        name = self.expect_ident("Expected graph name")
        return GraphCreate(line, name.value, self._optional_count(line))

    def parse_pair_create(self) -> PairCreate:
        line = self.advance().line
        name = self.expect_ident("Expected pair name")
        first = self._optional_count(line)
        second = self._optional_count(line)
        return PairCreate(line, name.value, first, second)

    def parse_struct_create(self) -> StructCreate:
        line = self.advance().line
        name = self.expect_ident("Expected struct name")
        fields: list[str] = []
        while self.on_line(line) and self.at_type(TK_IDENTIFIER):
            fields.append(self.advance().value)
        return StructCreate(line, name.value, fields)

    def parse_args(self, keyword: str, count: int, line: int) -> list[Arg]:
        """Arguments of a keyword-led operation; all must start on its line."""
        args: list[Arg] = []
        i = 0
        while i < count:
            if not self.on_line(line):
                raise self.error("Expected " + str(count) + " argument(s) for " + keyword)
            tok = self.tokens[self.pos]
            if tok.type == TK_IDENTIFIER and self._next_is_index():
                args.append(self.parse_primary())
            elif tok.type in RAW_ARG_TYPES:
                self.advance()
                if tok.type == TK_STRING:
                    args.append('"' + tok.value + '"')
                else:
                    args.append(tok.value)
            else:
                args.append(self.parse_expression())
            i += 1
        return args

    def _next_is_index(self) -> bool:
        nxt = self.pos + 1
        if nxt >= len(self.tokens):
            return False
        tok = self.tokens[nxt]
        return tok.type == TK_OPERATOR and tok.value == "["

    def parse_operation(self, node: type[DSOperation]) -> DSOperation:
        line = self.advance().line
        args = self.parse_args(node.keyword, node.arity, line)
        return node(line, args)

    # ── Expressions ──────────────────────────────────────────

    def parse_expression(self) -> Expr:
        return self.parse_comparison()

    def _binary_level(self, ops: set[str], operand) -> Expr:
        left = operand()
        while True:
            tok = self.current()
            if tok is None or tok.type != TK_OPERATOR or tok.value not in ops:
                return left
            self.advance()
            right = operand()
            left = BinaryExpression(tok.value, left, right)

    def parse_comparison(self) -> Expr:
        return self._binary_level(COMPARE_OPS, self.parse_additive)

    def parse_additive(self) -> Expr:
        return self._binary_level(ADDITIVE_OPS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expr:
        return self._binary_level(MULTIPLICATIVE_OPS, self.parse_unary)

    def parse_unary(self) -> Expr:
        if self.at_operator("-"):
            self.advance()
            return UnaryExpression("-", self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        tok = self.current()
        if tok is None:
            raise self.error("Unexpected token: EOF")
        if tok.type == TK_NUMBER:
            self.advance()
            return Literal(parse_number(tok.value))
        if tok.type == TK_STRING:
            self.advance()
            return Literal(tok.value)
        if tok.type == TK_IDENTIFIER:
            self.advance()
            if self.at_operator("["):
                self.advance()
                index = self.parse_expression()
                self.expect_operator("]", "Expected ]")
                return ArrayAccess(tok.value, index)
            return Identifier(tok.value)
        if tok.type == TK_OPERATOR and tok.value == "(":
            self.advance()
            expr = self.parse_expression()
            self.expect_operator(")", "Expected ) after expression")
            return expr
        if tok.type == TK_KEYWORD and tok.value in QUERY_ARITY:
            self.advance()
            args = self.parse_args(tok.value, QUERY_ARITY[tok.value], tok.line)
            return DSQueryExpression(tok.value, args)
        raise self.error("Unexpected token: " + tok.value)


def parse(tokens: list[Token]) -> ParseResult:
    """Parse a token stream into a Program, collecting recoverable errors."""
    return Parser(tokens).parse()
