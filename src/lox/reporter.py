"""Diagnostic reporter shared by the scanner, parser, and CLI."""

from __future__ import annotations

import sys
from typing import TextIO

from lox.errors import LoxRuntimeError, ParseError, ScanError
from lox.tokens import Token


class Reporter:
    """Write diagnostics to a stream and remember which kinds occurred.

    The reporter never exits; the CLI turns ``had_error`` and
    ``had_runtime_error`` into exit statuses.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.diagnostics: list[str] = []
        self.had_error = False
        self.had_runtime_error = False

    def error_at_line(self, line: int, message: str) -> None:
        self._syntax(ScanError(message, line))

    def error_at_token(self, token: Token, message: str) -> None:
        self._syntax(ParseError(message, token))

    def runtime_error(self, error: LoxRuntimeError) -> None:
        self.had_runtime_error = True
        self._write(error.format())

    def report(self, error: ScanError | ParseError | LoxRuntimeError) -> None:
        if isinstance(error, LoxRuntimeError):
            self.runtime_error(error)
        else:
            self._syntax(error)

    def reset(self) -> None:
        """Forget all diagnostics and error flags, e.g. between REPL lines."""
        self.diagnostics.clear()
        self.had_error = False
        self.had_runtime_error = False

    def _syntax(self, error: ScanError | ParseError) -> None:
        self.had_error = True
        self._write(error.format())

    def _write(self, text: str) -> None:
        self.diagnostics.append(text)
        stream = self._stream if self._stream is not None else sys.stderr
        print(text, file=stream)
