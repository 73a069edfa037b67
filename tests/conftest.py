"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from lox.ast import Expr
from lox.parser import parse
from lox.printer import print_ast
from lox.scanner import scan
from lox.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that scans source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = scan(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that scans and parses source into an expression."""

    def _parse(source: str) -> Expr:
        return parse(scan(source))

    return _parse


@pytest.fixture
def sexpr(parse_source):
    """Return a helper that parses source and prints the AST."""

    def _sexpr(source: str) -> str:
        return print_ast(parse_source(source))

    return _sexpr


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lexemes(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.lexeme for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
