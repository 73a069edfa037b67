"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from types import MappingProxyType


class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACE = auto()  # {
    RIGHT_BRACE = auto()  # }
    COMMA = auto()  # ,
    DOT = auto()  # .
    MINUS = auto()  # -
    PLUS = auto()  # +
    SEMICOLON = auto()  # ;
    SLASH = auto()  # /
    STAR = auto()  # *

    # One or two character tokens
    BANG = auto()  # !
    BANG_EQUAL = auto()  # !=
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    GREATER = auto()  # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=

    # Literals
    IDENTIFIER = auto()
    STRING = auto()  # literal is the text between the quotes
    NUMBER = auto()  # literal is a float

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "and": TokenType.AND,
        "class": TokenType.CLASS,
        "else": TokenType.ELSE,
        "false": TokenType.FALSE,
        "for": TokenType.FOR,
        "fun": TokenType.FUN,
        "if": TokenType.IF,
        "nil": TokenType.NIL,
        "or": TokenType.OR,
        "print": TokenType.PRINT,
        "return": TokenType.RETURN,
        "super": TokenType.SUPER,
        "this": TokenType.THIS,
        "true": TokenType.TRUE,
        "var": TokenType.VAR,
        "while": TokenType.WHILE,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanner token: kind, source lexeme, literal payload, 1-based line."""

    type: TokenType
    lexeme: str
    literal: str | float | None
    line: int

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "EOF"
        if self.type == TokenType.NUMBER and isinstance(self.literal, float):
            return format_number(self.literal)
        if self.type == TokenType.STRING:
            return str(self.literal)
        return self.lexeme

    def __repr__(self) -> str:
        return f"<{self.type.name}-{self.lexeme!r}-{self.literal!r}>"


def format_number(value: float) -> str:
    """Render a float the way lox prints numbers: no exponent, no trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    # repr has the shortest round-trip digits; Decimal lays them out positionally
    return format(Decimal(repr(value)), "f")


def format_tokens(tokens: list[Token]) -> str:
    """Render a token stream as space-separated token text."""
    return " ".join(str(tok) for tok in tokens)


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII digit."""
    return "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    """Return True if ch can start an identifier (ASCII letter or underscore)."""
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def is_alpha_numeric(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch)
