"""Base class for target code generators.

Every target walks the program twice: ``collect`` gathers scalars, structure
kinds and struct definitions, then the emission walk below writes lines.
Targets supply the skeleton through hooks and data-structure code through
``templates``, a table of kind -> verb -> ``string.Template`` source.

Template placeholders: ``$ds``, ``$a`` and ``$b`` are the rendered operation
arguments; creation templates get ``$name``, ``$n`` (graph nodes),
``$first``/``$second`` (pair values) and ``$size`` (array size). Multi-line
templates are split on newlines and emitted at the current indent.
"""

from __future__ import annotations

from string import Template

from ..frontend.ast import (
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
from .util import QUERY_KINDS, VERBS, Collection, Emitter, collect, escape_string, is_identifier

DEFAULT_GRAPH_NODES = "100"
DEFAULT_PAIR_VALUE = "0"


class Backend(Emitter):
    """Shared tree-walking emitter."""

    name: str = ""
    extension: str = ""
    indent_str: str = "    "
    comment: str = "//"
    terminator: str = ";"
    null_value: str = "null"
    reserved: frozenset[str] = frozenset()
    operators: dict[str, str] = {}
    requires: dict[str, list[str]] = {}
    templates: dict[str, dict[str, str]] = {}

    def __init__(self) -> None:
        super().__init__(self.indent_str)
        self.info: Collection = Collection()
        self.declared: set[str] = set()

    def emit(self, program: Program) -> str:
        """Emit target source for a program."""
        self.indent = 0
        self.lines = []
        self.info = collect(program)
        self.declared = set()
        self.emit_program(program)
        return self.output()

    def required(self) -> list[str]:
        """Imports or includes needed by the structures in use, deduplicated."""
        result: list[str] = []
        for kind in self.info.kinds_in_order():
            for item in self.requires.get(kind, []):
                if item not in result:
                    result.append(item)
        return result

    def uses_kind(self, *kinds: str) -> bool:
        return any(k in self.info.kinds.values() for k in kinds)

    # --- Hooks for subclasses ---

    def emit_program(self, program: Program) -> None:
        """Emit the target skeleton around ``emit_block(program.body)``."""
        raise NotImplementedError

    def emit_input(self, name: str) -> None:
        raise NotImplementedError

    def emit_print(self, expr: Expr) -> None:
        raise NotImplementedError

    def emit_struct_instance(self, stmt: StructCreate) -> None:
        raise NotImplementedError

    def emit_assign(self, name: str, value: str) -> None:
        self.line(f"{self._name(name)} = {value}{self.terminator}")

    def emit_array(self, stmt: ArrayCreate) -> None:
        tmpl = self.templates.get("array", {}).get("create")
        if tmpl is None:
            self.unsupported("ARRAY", "array")
            return
        self.emit_template(tmpl, {"name": self._name(stmt.name), "size": self._expr(stmt.size)})

    def if_open(self, cond: Expr) -> str:
        return f"if ({self._bare(cond)}) {{"

    def else_line(self) -> str:
        return "} else {"

    def while_open(self, cond: Expr) -> str:
        return f"while ({self._bare(cond)}) {{"

    def for_open(self, var: str, start: Expr, end: Expr) -> str:
        s = self._expr(start)
        e = self._expr(end)
        return f"for ({var} = {s}; {var} <= {e}; {var}++) {{"

    def block_close(self) -> str | None:
        return "}"

    def empty_body(self) -> None:
        pass

    # --- Statements ---

    def emit_block(self, stmts: list[Stmt]) -> None:
        for stmt in stmts:
            self.emit_stmt(stmt)

    def emit_body(self, stmts: list[Stmt]) -> None:
        self.indent += 1
        if stmts:
            self.emit_block(stmts)
        else:
            self.empty_body()
        self.indent -= 1

    def close_block(self) -> None:
        close = self.block_close()
        if close is not None:
            self.line(close)

    def emit_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case InputStatement(variable=var):
                self.emit_input(var)
            case AssignmentStatement(variable=var, expression=expr):
                self.emit_assign(var, self._expr(expr))
            case PrintStatement(expression=expr):
                self.emit_print(expr)
            case IfStatement(condition=cond, then_branch=then_b, else_branch=else_b):
                self.line(self.if_open(cond))
                self.emit_body(then_b)
                if else_b:
                    self.line(self.else_line())
                    self.emit_body(else_b)
                self.close_block()
            case WhileStatement(condition=cond, body=body):
                self.line(self.while_open(cond))
                self.emit_body(body)
                self.close_block()
            case ForStatement(variable=var, start=start, end=end, body=body):
                self.line(self.for_open(self._name(var), start, end))
                self.emit_body(body)
                self.close_block()
            case ArrayCreate(name=name):
                if self._redeclared(name):
                    return
                self.emit_array(stmt)
            case ArraySetStatement(array=array, index=index, expression=expr):
                target = f"{self._name(array)}[{self._expr(index)}]"
                self.line(f"{target} = {self._expr(expr)}{self.terminator}")
            case DSCreate():
                self.emit_create(stmt)
            case DSOperation():
                self.emit_operation(stmt)

    def _redeclared(self, name: str) -> bool:
        """Emit a note and return True if name was already declared."""
        if name in self.declared:
            self.line(f"{self.comment} {self._name(name)} already declared")
            return True
        self.declared.add(name)
        return False

    def unsupported(self, keyword: str, kind: str) -> None:
        self.line(f"{self.comment} {keyword} is not supported for {kind}")

    def emit_template(self, tmpl: str, fields: dict[str, str]) -> None:
        text = Template(tmpl).safe_substitute(fields)
        for part in text.split("\n"):
            self.line(part)

    def emit_create(self, stmt: DSCreate) -> None:
        if self._redeclared(stmt.name):
            return
        if isinstance(stmt, StructCreate):
            self.emit_struct_instance(stmt)
            return
        tmpl = self.templates.get(stmt.kind, {}).get("create")
        if tmpl is None:
            self.unsupported(stmt.kind.upper(), stmt.kind)
            return
        fields = {"name": self._name(stmt.name)}
        match stmt:
            case GraphCreate(node_count=count):
                fields["n"] = self._arg(count) if count is not None else DEFAULT_GRAPH_NODES
            case PairCreate(first=first, second=second):
                fields["first"] = self._arg(first) if first is not None else DEFAULT_PAIR_VALUE
                fields["second"] = self._arg(second) if second is not None else DEFAULT_PAIR_VALUE
        self.emit_template(tmpl, fields)

    def emit_operation(self, op: DSOperation) -> None:
        if op.keyword in QUERY_ARITY:
            # A query on its own line prints its value
            self.emit_print(DSQueryExpression(op.keyword, op.args))
            return
        kind = self.kind_of(op.args, op.kind)
        tmpl = self.templates.get(kind, {}).get(VERBS[op.keyword])
        if tmpl is None:
            self.unsupported(op.keyword, kind)
            return
        self.emit_template(tmpl, self._arg_fields(op.args))

    # --- Expressions ---

    def kind_of(self, args: list[Arg], default: str) -> str:
        """Kind of the structure named by the first argument, else default."""
        if args and isinstance(args[0], str) and args[0] in self.info.kinds:
            return self.info.kinds[args[0]]
        return default

    def _name(self, name: str) -> str:
        """Rename identifiers that collide with target keywords or skeleton names."""
        if name in self.reserved:
            return name + "_"
        return name

    def _string(self, value: str) -> str:
        return '"' + escape_string(value) + '"'

    def _number(self, value: int | float) -> str:
        return str(value)

    def _arg(self, arg: Arg) -> str:
        if isinstance(arg, str):
            if arg.startswith('"'):
                return self._string(arg[1:-1] if arg.endswith('"') and len(arg) > 1 else arg[1:])
            if is_identifier(arg):
                return self._name(arg)
            return arg
        return self._expr(arg)

    def _arg_fields(self, args: list[Arg]) -> dict[str, str]:
        rendered = [self._arg(a) for a in args]
        while len(rendered) < 3:
            rendered.append("")
        return {"ds": rendered[0], "a": rendered[1], "b": rendered[2]}

    def _query(self, query: DSQueryExpression) -> str:
        kind = self.kind_of(query.args, QUERY_KINDS[query.operation])
        tmpl = self.templates.get(kind, {}).get(VERBS[query.operation])
        if tmpl is None:
            return self.null_value
        return Template(tmpl).safe_substitute(self._arg_fields(query.args))

    def binary(self, op: str, left: str, right: str) -> str | None:
        """Target rendering of a binary operator that needs more than a symbol.

        The result must already be grouped; None falls back to ``left op right``.
        """
        return None

    def _bare(self, expr: Expr) -> str:
        """Render without the outer parentheses of a binary expression."""
        if isinstance(expr, BinaryExpression):
            left = self._expr(expr.left)
            right = self._expr(expr.right)
            special = self.binary(expr.operator, left, right)
            if special is not None:
                return special
            op = self.operators.get(expr.operator, expr.operator)
            return f"{left} {op} {right}"
        return self._expr(expr)

    def _expr(self, expr: Expr) -> str:
        match expr:
            case Literal(value=str() as s):
                return self._string(s)
            case Literal(value=value):
                return self._number(value)
            case Identifier(name=name):
                return self._name(name)
            case ArrayAccess(name=name, index=index):
                return f"{self._name(name)}[{self._expr(index)}]"
            case BinaryExpression(operator=op, left=left, right=right):
                lhs = self._expr(left)
                rhs = self._expr(right)
                special = self.binary(op, lhs, rhs)
                if special is not None:
                    return special
                op = self.operators.get(op, op)
                return f"({lhs} {op} {rhs})"
            case UnaryExpression(operator=op, expression=inner):
                return f"({op}{self._expr(inner)})"
            case DSQueryExpression():
                return self._query(expr)
        raise TypeError("unknown expression node: " + type(expr).__name__)
