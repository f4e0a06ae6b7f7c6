"""Minimal LSP server for cmdlang scripts: diagnostics only."""

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

from cmdlang import __version__
from cmdlang.parser import Parser, collect_commands
from cmdlang.source import StringSource

server = LanguageServer(
    "cmdlang-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _position(source: str, offset: int) -> Position:
    """Convert an absolute character offset into a 0-based LSP position."""
    offset = min(offset, len(source))
    line = source.count("\n", 0, offset)
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line=line, character=offset - line_start)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse every command in the document and publish one diagnostic per error."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source

    parser = Parser(StringSource(source), color=False, show_source=False)
    _, errors = collect_commands(parser)

    diagnostics = [
        Diagnostic(
            range=Range(
                start=_position(source, exc.begin),
                end=_position(source, exc.end),
            ),
            message=exc.synopsis,
            severity=DiagnosticSeverity.Error,
            source="cmdlang",
        )
        for exc in errors
    ]

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
