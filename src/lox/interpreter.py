"""Tree-walking evaluator — reduces an expression AST to a runtime value."""

from __future__ import annotations

import math

from lox.ast import Binary, Expr, Grouping, Literal, Unary, accept
from lox.errors import LoxRuntimeError
from lox.tokens import Token, TokenType, format_number

# Runtime values: str, float, bool, or None for nil.
Value = str | float | bool | None

_NEGATE_ERROR = "Cannot apply negative operand on non-numeric values"
_ADD_ERROR = "Cannot add values other than numbers and strings"
_ARITHMETIC_ERROR = "Cannot apply arithmetic operator on non-numeric values"
_COMPARE_ERROR = "Cannot compare non-numeric values"


def _is_number(value: Value) -> bool:
    # bool subclasses int, never float, so this excludes true/false
    return type(value) is float


def _is_string(value: Value) -> bool:
    return type(value) is str


def is_truthy(value: Value) -> bool:
    """false, nil, and 0 are falsy; everything else (including "") is truthy."""
    if value is None or value is False:
        return False
    if _is_number(value):
        return value != 0.0
    return True


def is_equal(left: Value, right: Value) -> bool:
    """Same-type equality; values of different types are never equal."""
    if type(left) is not type(right):
        return False
    return left == right


def to_number(value: Value) -> float:
    """Coerce a value to a number: strings are parsed, true/false are 1/0, nil is 0."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise LoxRuntimeError("Cannot convert string to number") from None
    return value


def stringify(value: Value) -> str:
    """Render a value as lox prints it."""
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        return format_number(value)
    return value


def _divide(left: float, right: float) -> float:
    if right == 0.0:
        # IEEE semantics instead of ZeroDivisionError
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class Interpreter:
    """Evaluate expressions by visiting each node once."""

    def evaluate(self, expr: Expr) -> Value:
        return accept(expr, self)

    def visit_literal(self, expr: Literal) -> Value:
        return expr.value

    def visit_grouping(self, expr: Grouping) -> Value:
        return self.evaluate(expr.expression)

    def visit_unary(self, expr: Unary) -> Value:
        right = self.evaluate(expr.right)

        if expr.operator.type == TokenType.MINUS:
            if not _is_number(right):
                raise LoxRuntimeError(_NEGATE_ERROR, expr.operator)
            return -right
        if expr.operator.type == TokenType.BANG:
            return not is_truthy(right)

        raise LoxRuntimeError(f"Unknown unary operator '{expr.operator.lexeme}'", expr.operator)

    def visit_binary(self, expr: Binary) -> Value:
        # Walk the left spine in a loop: parsed chains like 1 + 1 + ... fold left
        # and may be far deeper than the Python stack
        chain: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            chain.append(node)
            node = node.left

        value = self.evaluate(node)
        for binary in reversed(chain):
            right = self.evaluate(binary.right)
            value = self._apply(binary.operator, value, right)
        return value

    def _apply(self, op: Token, left: Value, right: Value) -> Value:
        match op.type:
            case TokenType.PLUS:
                return self._add(left, right, op)
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)

        if op.type in (TokenType.MINUS, TokenType.STAR, TokenType.SLASH):
            if not (_is_number(left) and _is_number(right)):
                raise LoxRuntimeError(_ARITHMETIC_ERROR, op)
            if op.type == TokenType.MINUS:
                return left - right
            if op.type == TokenType.STAR:
                return left * right
            return _divide(left, right)

        if op.type in (
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        ):
            if not (_is_number(left) and _is_number(right)):
                raise LoxRuntimeError(_COMPARE_ERROR, op)
            if op.type == TokenType.GREATER:
                return left > right
            if op.type == TokenType.GREATER_EQUAL:
                return left >= right
            if op.type == TokenType.LESS:
                return left < right
            return left <= right

        raise LoxRuntimeError(f"Unknown binary operator '{op.lexeme}'", op)

    def _add(self, left: Value, right: Value, op: Token) -> Value:
        if _is_number(left) and _is_number(right):
            return left + right
        if _is_string(left) and _is_string(right):
            return left + right
        # Numbers are promoted to their printed form next to a string
        if _is_string(left) and _is_number(right):
            return left + format_number(right)
        if _is_number(left) and _is_string(right):
            return format_number(left) + right
        raise LoxRuntimeError(_ADD_ERROR, op)


def evaluate(expr: Expr) -> Value:
    """Convenience function: evaluate an expression with a fresh Interpreter."""
    return Interpreter().evaluate(expr)
