"""Lox scanner — converts source text into a flat token stream."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lox.errors import ScanError
from lox.tokens import KEYWORDS, Token, TokenType, is_alpha, is_alpha_numeric, is_digit

if TYPE_CHECKING:
    from lox.reporter import Reporter


_SINGLE_CHAR: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# first char -> (token with '=' suffix, token without)
_WITH_EQUAL: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


class Scanner:
    """Tokenize Lox source text into a list of Token objects.

    Errors never stop the scan: each one is recorded in ``errors`` (and
    forwarded to the reporter, if any) and scanning resumes at the next
    character.
    """

    def __init__(self, source: str, reporter: Reporter | None = None) -> None:
        self._source = source
        self._reporter = reporter
        self._tokens: list[Token] = []
        self._start = 0
        self._current = 0
        self._line = 1
        self.errors: list[ScanError] = []

    def scan_tokens(self) -> list[Token]:
        """Scan the full source and return the token list, always ending in EOF."""
        while not self._at_end():
            self._start = self._current
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _advance(self) -> str:
        ch = self._source[self._current]
        self._current += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._at_end() or self._source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _peek(self, offset: int = 0) -> str:
        idx = self._current + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _add_token(
        self, tt: TokenType, literal: str | float | None = None, line: int | None = None
    ) -> None:
        text = self._source[self._start : self._current]
        self._tokens.append(Token(tt, text, literal, self._line if line is None else line))

    def _error(self, message: str, line: int | None = None) -> None:
        err = ScanError(message, self._line if line is None else line)
        self.errors.append(err)
        if self._reporter is not None:
            self._reporter.report(err)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._advance()

        if ch in _SINGLE_CHAR:
            self._add_token(_SINGLE_CHAR[ch])
            return

        if ch in _WITH_EQUAL:
            two, one = _WITH_EQUAL[ch]
            self._add_token(two if self._match("=") else one)
            return

        if ch == "/":
            if self._match("/"):
                # Comment runs to end of line; the newline is left for the line counter
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
            return

        if ch in " \r\t":
            return

        if ch == "\n":
            self._line += 1
            return

        if ch == '"':
            self._string()
            return

        if is_digit(ch):
            self._number()
            return

        if is_alpha(ch):
            self._identifier()
            return

        self._error("unexpected character")

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _string(self) -> None:
        start_line = self._line
        while not self._at_end() and self._peek() != '"':
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._at_end():
            self._error("unterminated string")
            return

        self._advance()  # closing quote
        value = self._source[self._start + 1 : self._current - 1]
        self._add_token(TokenType.STRING, value, start_line)

    def _number(self) -> None:
        while is_digit(self._peek()):
            self._advance()

        # A fractional part needs at least one digit after the dot
        if self._peek() == "." and is_digit(self._peek(1)):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        text = self._source[self._start : self._current]
        # Unreachable while is_digit only accepts ASCII digits
        try:
            value = float(text)
        except ValueError:
            self._error("error parsing number")
            return
        self._add_token(TokenType.NUMBER, value)

    def _identifier(self) -> None:
        while is_alpha_numeric(self._peek()):
            self._advance()

        text = self._source[self._start : self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))


def scan(source: str, reporter: Reporter | None = None) -> list[Token]:
    """Convenience function: scan source text and return the token list."""
    return Scanner(source, reporter).scan_tokens()
