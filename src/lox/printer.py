"""Parenthesized prefix rendering of the AST, used by --debug."""

from __future__ import annotations

import sys
from typing import TextIO

from lox.ast import Binary, Expr, Grouping, Literal, Unary, accept
from lox.interpreter import stringify


class AstPrinter:
    def print(self, expr: Expr) -> str:
        return accept(expr, self)

    def visit_binary(self, expr: Binary) -> str:
        # Left-folded chains are printed in a loop, like Interpreter.visit_binary
        chain: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            chain.append(node)
            node = node.left

        text = accept(node, self)
        for binary in reversed(chain):
            text = f"({binary.operator.lexeme} {text} {accept(binary.right, self)})"
        return text

    def visit_unary(self, expr: Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_literal(self, expr: Literal) -> str:
        return stringify(expr.value)

    def visit_grouping(self, expr: Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def _parenthesize(self, name: str, *exprs: Expr) -> str:
        parts = [name, *(accept(e, self) for e in exprs)]
        return f"({' '.join(parts)})"


def print_ast(expr: Expr) -> str:
    """Return the expression as a Lisp-like string, e.g. (* 1 (group (+ 2 3)))."""
    return AstPrinter().print(expr)


def dump_ast(expr: Expr, *, file: TextIO = sys.stderr) -> None:
    """Print the expression tree to *file*."""
    file.write(print_ast(expr) + "\n")
