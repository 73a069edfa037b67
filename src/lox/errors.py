"""Error types with formatted diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lox.tokens import Token


class ScanError(Exception):
    """A scan error at a source line. The scanner collects these and keeps going."""

    def __init__(self, message: str, line: int) -> None:
        self.message = message
        self.line = line
        super().__init__(self.format())

    def format(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class ParseError(Exception):
    """Raised inside the parser on the first syntax error of an expression."""

    def __init__(self, message: str, token: Token) -> None:
        self.message = message
        self.token = token
        super().__init__(self.format())

    @property
    def line(self) -> int:
        return self.token.line

    def format(self) -> str:
        from lox.tokens import TokenType

        if self.token.type == TokenType.EOF:
            where = " at end"
        else:
            where = f" at '{self.token.lexeme}'"
        return f"[line {self.token.line}] Error{where}: {self.message}"


class LoxRuntimeError(Exception):
    """Raised on a type error during evaluation.

    The token is the operator being applied; it only supplies the line number
    for the diagnostic.
    """

    def __init__(self, message: str, token: Token | None = None) -> None:
        self.message = message
        self.token = token
        super().__init__(self.format())

    @property
    def line(self) -> int | None:
        return self.token.line if self.token is not None else None

    def format(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.message}\n[line {self.token.line}]"


class InternalError(Exception):
    """Broken internal invariant (a bug in lox, not in the program being run)."""
