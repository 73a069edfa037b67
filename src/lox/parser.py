"""Lox parser — converts a token stream into an expression AST.

Grammar, loosest binding first::

    expression → equality
    equality   → comparison ( ( "!=" | "==" ) comparison )*
    comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       → factor ( ( "-" | "+" ) factor )*
    factor     → unary ( ( "/" | "*" ) unary )*
    unary      → ( "!" | "-" ) unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from lox.ast import Binary, Expr, Grouping, Literal, Unary
from lox.errors import InternalError, ParseError
from lox.tokens import Token, TokenType

if TYPE_CHECKING:
    from lox.reporter import Reporter


_EQUALITY = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
_COMPARISON = (
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
)
_TERM = (TokenType.MINUS, TokenType.PLUS)
_FACTOR = (TokenType.SLASH, TokenType.STAR)
_UNARY = (TokenType.BANG, TokenType.MINUS)

# Each nested unary or group costs about a dozen Python frames
MAX_NESTING_DEPTH = 50


class Parser:
    """Recursive descent parser for a single Lox expression."""

    def __init__(self, tokens: list[Token], reporter: Reporter | None = None) -> None:
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise InternalError("token stream must end with EOF")
        self._tokens = tokens
        self._reporter = reporter
        self._current = 0
        self._depth = 0
        self.errors: list[ParseError] = []

    def parse(self) -> Expr:
        """Parse one expression; on a syntax error report it and return a nil literal."""
        try:
            return self._expression()
        except ParseError as err:
            self.errors.append(err)
            if self._reporter is not None:
                self._reporter.report(err)
            return Literal(None)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _previous(self) -> Token:
        return self._tokens[self._current - 1]

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _at(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _advance(self) -> Token:
        tok = self._peek()
        if not self._at_end():
            self._current += 1
        return tok

    def _match(self, *types: TokenType) -> bool:
        if self._at(*types):
            self._advance()
            return True
        return False

    def _consume(self, tt: TokenType, message: str) -> Token:
        if self._at(tt):
            return self._advance()
        raise ParseError(message, self._peek())

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _expression(self) -> Expr:
        return self._equality()

    def _binary(self, operand: Callable[[], Expr], operators: tuple[TokenType, ...]) -> Expr:
        """Parse a left-associative chain: operand ( operator operand )*."""
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def _equality(self) -> Expr:
        return self._binary(self._comparison, _EQUALITY)

    def _comparison(self) -> Expr:
        return self._binary(self._term, _COMPARISON)

    def _term(self) -> Expr:
        return self._binary(self._factor, _TERM)

    def _factor(self) -> Expr:
        return self._binary(self._unary, _FACTOR)

    def _unary(self) -> Expr:
        self._depth += 1
        try:
            if self._depth > MAX_NESTING_DEPTH:
                raise ParseError("expression nested too deeply", self._peek())
            if self._match(*_UNARY):
                operator = self._previous()
                return Unary(operator, self._unary())
            return self._primary()
        finally:
            self._depth -= 1

    def _primary(self) -> Expr:
        tok = self._peek()

        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER):
            if not isinstance(tok.literal, float):
                raise InternalError(f"NUMBER token without a float literal: {tok!r}")
            return Literal(tok.literal)

        if self._match(TokenType.STRING):
            if not isinstance(tok.literal, str):
                raise InternalError(f"STRING token without a str literal: {tok!r}")
            return Literal(tok.literal)

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "expect ')' after expression")
            return Grouping(expr)

        raise ParseError("unexpected token", tok)


def parse(tokens: list[Token], reporter: Reporter | None = None) -> Expr:
    """Convenience function: parse a token list into an expression."""
    return Parser(tokens, reporter).parse()
