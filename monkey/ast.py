"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser is the only producer of these nodes and the interpreter is the
only consumer. Nodes are frozen dataclasses and every sequence is stored as
a tuple, so a tree cannot be modified once it has been parsed.

Each node renders back to Monkey source with ``str()``. The rendering fully
parenthesises prefix and infix expressions, which makes operator precedence
visible, and it always re-parses to an equivalent tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


class Statement(Node):
    pass


class Expression(Node):
    pass


def _join_statements(statements: Tuple[Statement, ...]) -> str:
    return '; '.join(str(s) for s in statements)


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        return _join_statements(self.statements)


# Expressions

@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral in practice
    arguments: Tuple[Expression, ...]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements

@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value}"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + _join_statements(self.statements) + ' }'
