"""Minimal LSP server for Fuse — unrecognized-input diagnostics only."""

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

from fuselex import __version__
from fuselex.errors import collect_diagnostics
from fuselex.lexer import FuseLexer

server = LanguageServer("fuselex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish one warning per unrecognized run."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    tokens = FuseLexer().tokenize(source)

    diagnostics: list[Diagnostic] = []
    for diag in collect_diagnostics(tokens, source):
        start = diag.span.start
        end = diag.span.end
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=start.line - 1, character=start.column - 1),
                    end=Position(line=end.line - 1, character=end.column - 1),
                ),
                message=diag.message,
                severity=DiagnosticSeverity.Warning,
                source="fuselex",
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
