"""Expression AST node types and visitor dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from lox.tokens import Token

T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True, slots=True)
class Binary:
    """Infix operation: left operator right."""

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Unary:
    """Prefix operation: '!' or '-' applied to one operand."""

    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Literal:
    """A written value: str, float, bool, or None for nil."""

    value: str | float | bool | None


@dataclass(frozen=True, slots=True)
class Grouping:
    """Explicitly parenthesized expression."""

    expression: Expr


Expr = Binary | Unary | Literal | Grouping


class ExprVisitor(Protocol[T_co]):
    """One method per node kind; see accept()."""

    def visit_binary(self, expr: Binary) -> T_co: ...

    def visit_unary(self, expr: Unary) -> T_co: ...

    def visit_literal(self, expr: Literal) -> T_co: ...

    def visit_grouping(self, expr: Grouping) -> T_co: ...


def accept(expr: Expr, visitor: ExprVisitor[T_co]) -> T_co:
    """Dispatch *expr* to the visitor method for its node kind."""
    match expr:
        case Binary():
            return visitor.visit_binary(expr)
        case Unary():
            return visitor.visit_unary(expr)
        case Literal():
            return visitor.visit_literal(expr)
        case Grouping():
            return visitor.visit_grouping(expr)
    raise TypeError(f"not an expression node: {type(expr).__name__}")
