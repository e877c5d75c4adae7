"""Semantic analysis: symbol table and declared-before-use checking.

One pre-order walk over the program. INPUT, assignment, FOR loops, array and
data-structure creation declare names; identifier and array references in
expressions must already be declared. The first declaration of a name wins.
Data-structure operations and queries are not checked.
"""

from __future__ import annotations

from .ast import (
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
    Identifier,
    IfStatement,
    InputStatement,
    Literal,
    PrintStatement,
    Program,
    Stmt,
    UnaryExpression,
    WhileStatement,
)


class SymbolInfo:
    """Information about a declared name."""

    def __init__(self, name: str, type_: str, line: int):
        self.name: str = name
        self.type: str = type_  # "number" | "any" | "array" | data-structure kind
        self.line: int = line
        self.initialized: bool = True

    def __repr__(self) -> str:
        return "SymbolInfo(" + self.name + ", " + self.type + ", " + str(self.line) + ")"


class SymbolTable:
    """Flat program-wide symbol table, in declaration order."""

    def __init__(self) -> None:
        self.symbols: dict[str, SymbolInfo] = {}

    def declare(self, name: str, type_: str, line: int) -> None:
        if name not in self.symbols:
            self.symbols[name] = SymbolInfo(name, type_, line)

    def lookup(self, name: str) -> SymbolInfo | None:
        return self.symbols.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)


class NameViolation:
    """A use-before-declaration error with location."""

    def __init__(self, line: int, message: str):
        self.line: int = line
        self.message: str = message

    def __repr__(self) -> str:
        return "error:" + str(self.line) + ": " + self.message


class NameResult:
    """Result of semantic analysis."""

    def __init__(self) -> None:
        self.table: SymbolTable = SymbolTable()
        self.violations: list[NameViolation] = []

    def add_error(self, line: int, message: str) -> None:
        self.violations.append(NameViolation(line, message))

    def errors(self) -> list[NameViolation]:
        return self.violations

    def ok(self) -> bool:
        return len(self.violations) == 0


class SemanticAnalyzer:
    """Walks a Program, declaring names and checking references."""

    def __init__(self) -> None:
        self.result: NameResult = NameResult()

    def analyze(self, program: Program | None) -> NameResult:
        if program is None:
            raise ValueError("No AST to analyze")
        self.result = NameResult()
        self.visit_block(program.body)
        return self.result

    def visit_block(self, stmts: list[Stmt]) -> None:
        for stmt in stmts:
            self.visit_stmt(stmt)

    def visit_stmt(self, stmt: Stmt) -> None:
        table = self.result.table
        match stmt:
            case InputStatement(line=line, variable=var):
                table.declare(var, "number", line)
            case AssignmentStatement(line=line, variable=var, expression=expr):
                table.declare(var, "any", line)
                self.check_expr(expr, line)
            case PrintStatement(line=line, expression=expr):
                self.check_expr(expr, line)
            case IfStatement(line=line, condition=cond, then_branch=then_b, else_branch=else_b):
                self.check_expr(cond, line)
                self.visit_block(then_b)
                if else_b is not None:
                    self.visit_block(else_b)
            case WhileStatement(line=line, condition=cond, body=body):
                self.check_expr(cond, line)
                self.visit_block(body)
            case ForStatement(line=line, variable=var, start=start, end=end, body=body):
                table.declare(var, "number", line)
                self.check_expr(start, line)
                self.check_expr(end, line)
                self.visit_block(body)
            case ArrayCreate(line=line, name=name, size=size):
                self.check_expr(size, line)
                table.declare(name, "array", line)
            case ArraySetStatement(line=line, array=array, index=index, expression=expr):
                if array not in table:
                    self.result.add_error(
                        line, "Array '" + array + "' used before declaration"
                    )
                self.check_expr(index, line)
                self.check_expr(expr, line)
            case DSCreate(line=line, name=name):
                table.declare(name, stmt.kind, line)
            case DSOperation():
                pass

    def check_expr(self, expr: Expr, line: int) -> None:
        table = self.result.table
        match expr:
            case Identifier(name=name):
                if name not in table:
                    self.result.add_error(
                        line, "Variable '" + name + "' used before declaration"
                    )
            case ArrayAccess(name=name, index=index):
                if name not in table:
                    self.result.add_error(
                        line, "Array '" + name + "' used before declaration"
                    )
                self.check_expr(index, line)
            case BinaryExpression(left=left, right=right):
                self.check_expr(left, line)
                self.check_expr(right, line)
            case UnaryExpression(expression=inner):
                self.check_expr(inner, line)
            case Literal() | DSQueryExpression():
                pass


def analyze(program: Program | None) -> NameResult:
    """Build the symbol table and report names used before declaration.

    Raises ValueError when there is no program to analyze.
    """
    return SemanticAnalyzer().analyze(program)
