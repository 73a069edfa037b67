"""Minimal LSP server for Lox — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from lox import __version__
from lox.errors import LoxRuntimeError
from lox.interpreter import evaluate
from lox.parser import Parser
from lox.scanner import Scanner

server = LanguageServer("lox-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _line_range(lines: list[str], line: int) -> Range:
    """Range covering the whole of a 1-based source line."""
    idx = line - 1
    width = len(lines[idx]) if 0 <= idx < len(lines) else 0
    return Range(
        start=Position(line=idx, character=0),
        end=Position(line=idx, character=width),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the Lox pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    lines = source.splitlines()
    diagnostics: list[Diagnostic] = []

    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    for scan_err in scanner.errors:
        diagnostics.append(
            Diagnostic(
                range=_line_range(lines, scan_err.line),
                message=scan_err.message,
                severity=DiagnosticSeverity.Error,
                source="lox",
            )
        )

    if not scanner.errors:
        parser = Parser(tokens)
        expr = parser.parse()
        for parse_err in parser.errors:
            diagnostics.append(
                Diagnostic(
                    range=_line_range(lines, parse_err.line),
                    message=parse_err.message,
                    severity=DiagnosticSeverity.Error,
                    source="lox",
                )
            )

        if not parser.errors:
            try:
                evaluate(expr)
            except LoxRuntimeError as exc:
                line = exc.line if exc.line is not None else 1
                diagnostics.append(
                    Diagnostic(
                        range=_line_range(lines, line),
                        message=exc.message,
                        severity=DiagnosticSeverity.Warning,
                        source="lox",
                    )
                )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
