"""IR Explorer language server: pygls-based LSP for IR dump files.

Maps each line of an open dump back to its source span, offering hover,
go-to-definition into the source file, and highlighting of every dump line
that shares the span under the cursor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lsprotocol import types as lsp
from pygls import uris
from pygls.lsp.server import LanguageServer

from ir_explorer import __version__
from ir_explorer.blocks import compute_line_spans
from ir_explorer.spans import SourceSpan, first_span_file

logger = logging.getLogger(__name__)

# ── Conversion helpers ────────────────────────────────────────────


def span_to_range(span: SourceSpan) -> lsp.Range:
    """Convert a 1-indexed inclusive SourceSpan to a 0-indexed LSP Range."""
    return lsp.Range(
        start=lsp.Position(line=span.start_line - 1, character=max(span.start_col - 1, 0)),
        end=lsp.Position(line=span.end_line - 1, character=span.end_col),
    )


def _line_range(line: int, text: str) -> lsp.Range:
    return lsp.Range(
        start=lsp.Position(line=line, character=0),
        end=lsp.Position(line=line, character=len(text)),
    )


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Resolved spans for a single open dump."""

    source: str = ""
    lines: list[str] = field(default_factory=list)
    line_spans: list[SourceSpan | None] = field(default_factory=list)
    source_file: str | None = None

    def span_at(self, line: int) -> SourceSpan | None:
        if 0 <= line < len(self.line_spans):
            return self.line_spans[line]
        return None


# ── Server ────────────────────────────────────────────────────────

server = LanguageServer(
    "ir-explorer-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def _analyze(uri: str, source: str) -> DocumentState:
    """Resolve every line's span, cache results, return state."""
    lines = source.split("\n")
    ds = DocumentState(
        source=source,
        lines=lines,
        line_spans=compute_line_spans(lines),
        source_file=first_span_file(lines),
    )
    _state[uri] = ds
    return ds


def _source_uri(dump_uri: str, ds: DocumentState) -> str | None:
    """The URI of the source file named by the dump's span annotations.

    Relative names are resolved against the dump's own directory.
    """
    if ds.source_file is None:
        return None
    target = Path(ds.source_file)
    if not target.is_absolute():
        dump_path = uris.to_fs_path(dump_uri)
        if dump_path is None:
            return None
        target = Path(dump_path).parent / target
    return uris.from_fs_path(str(target))


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    _analyze(params.text_document.uri, params.text_document.text)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    # Full sync — take last content change
    source = params.content_changes[-1].text if params.content_changes else ""
    _analyze(params.text_document.uri, source)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None

    span = ds.span_at(params.position.line)
    if span is None:
        return None

    where = f"`{ds.source_file}` " if ds.source_file else ""
    content = (
        f"**source span** {where}"
        f"{span.start_line}:{span.start_col} – {span.end_line}:{span.end_col}"
    )
    return lsp.Hover(
        contents=lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=content),
        range=_line_range(params.position.line, ds.lines[params.position.line]),
    )


@server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
def definition(params: lsp.DefinitionParams) -> lsp.Location | None:
    uri = params.text_document.uri
    ds = _state.get(uri)
    if ds is None:
        return None

    span = ds.span_at(params.position.line)
    if span is None:
        return None

    target = _source_uri(uri, ds)
    if target is None:
        logger.debug("no source file annotation in %s", uri)
        return None
    return lsp.Location(uri=target, range=span_to_range(span))


@server.feature(lsp.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT)
def document_highlight(
    params: lsp.DocumentHighlightParams,
) -> list[lsp.DocumentHighlight] | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None

    span = ds.span_at(params.position.line)
    if span is None:
        return None

    return [
        lsp.DocumentHighlight(
            range=_line_range(i, ds.lines[i]),
            kind=lsp.DocumentHighlightKind.Text,
        )
        for i, other in enumerate(ds.line_spans)
        if other == span
    ]


# ── Entry point ──────────────────────────────────────────────────


def main() -> None:
    """Start the IR Explorer language server on stdio."""
    server.start_io()
