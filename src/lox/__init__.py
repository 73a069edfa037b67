"""Lox expression scanner, parser, and evaluator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lox.interpreter import Value

__version__ = "0.1.0"


def run(source: str) -> Value:
    """Scan, parse, and evaluate one Lox expression.

    Raises the first ScanError or ParseError found, or a LoxRuntimeError
    from evaluation.
    """
    from lox.interpreter import evaluate
    from lox.parser import Parser
    from lox.scanner import Scanner

    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if scanner.errors:
        raise scanner.errors[0]

    parser = Parser(tokens)
    expr = parser.parse()
    if parser.errors:
        raise parser.errors[0]

    return evaluate(expr)
