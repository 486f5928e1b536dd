"""Turn a compile result into hoverable, span-colored HTML lines."""

from __future__ import annotations

import html as html_lib
import json
from dataclasses import dataclass, field
from typing import Protocol

from ir_explorer.blocks import compute_line_spans
from ir_explorer.compiler import CompileResult
from ir_explorer.highlight import DEFAULT_LANGUAGE, highlight, style_css
from ir_explorer.markup import split_highlighted_lines
from ir_explorer.palette import SPAN_COLORS, color_for_span
from ir_explorer.reindent import reindent
from ir_explorer.spans import SourceSpan

NO_OUTPUT = "(no output)"
NO_MESSAGES = "(no messages)"


@dataclass(frozen=True)
class EditorHighlight:
    """A request for the source editor to highlight and reveal a range."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    whole_line: bool

    @classmethod
    def for_span(cls, span: SourceSpan) -> EditorHighlight:
        return cls(
            span.start_line, span.start_col, span.end_line, span.end_col,
            whole_line=span.is_whole_line,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "start_line": self.start_line,
            "start_col": self.start_col,
            "end_line": self.end_line,
            "end_col": self.end_col,
            "whole_line": self.whole_line,
        }


@dataclass
class HighlightedLine:
    html: str
    span: SourceSpan | None = None
    color: str | None = None

    @property
    def highlight(self) -> EditorHighlight | None:
        return EditorHighlight.for_span(self.span) if self.span else None

    def to_dict(self) -> dict[str, object]:
        return {
            "html": self.html,
            "span": self.span.to_dict() if self.span else None,
            "color": self.color,
            "highlight": self.highlight.to_dict() if self.span else None,
        }


@dataclass
class RenderedDump:
    lines: list[HighlightedLine] = field(default_factory=list)
    line_numbers: str = ""
    messages: str = ""

    @property
    def line_spans(self) -> list[SourceSpan | None]:
        return [line.span for line in self.lines]


def gutter(n: int) -> str:
    """Right-aligned 1-based line numbers, one per line."""
    width = len(str(n))
    return "\n".join(str(i + 1).rjust(width) for i in range(n))


def render_text(
    text: str,
    *,
    language: str = DEFAULT_LANGUAGE,
    palette: tuple[str, ...] = SPAN_COLORS,
) -> list[HighlightedLine]:
    """Normalize, resolve, highlight and split one dump."""
    # Pygments treats a lone \r as a line break; the span map must agree.
    text = reindent(text.replace("\r\n", "\n").replace("\r", "\n"))
    raw_lines = text.split("\n")
    line_spans = compute_line_spans(raw_lines)
    html_lines = split_highlighted_lines(highlight(text, language))

    lines = []
    for i, span in enumerate(line_spans):
        fragment = html_lines[i] if i < len(html_lines) else ""
        color = color_for_span(span, palette) if span is not None else None
        lines.append(HighlightedLine(html=fragment or "\n", span=span, color=color))
    return lines


def render_dump(
    result: CompileResult,
    *,
    language: str = DEFAULT_LANGUAGE,
    palette: tuple[str, ...] = SPAN_COLORS,
) -> RenderedDump:
    """Render a compile result; an empty dump shows a placeholder line."""
    lines = render_text(result.ir_output or NO_OUTPUT, language=language, palette=palette)
    return RenderedDump(
        lines=lines,
        line_numbers=gutter(len(lines)),
        messages=result.messages or NO_MESSAGES,
    )


_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: "SF Mono", "Fira Code", monospace; font-size: 13px; }}
.ir-output {{ white-space: pre; }}
.ir-line.has-span {{ cursor: pointer; }}
.ir-line.has-span:hover {{ outline: 1px solid rgba(128, 128, 128, 0.5); }}
.messages {{ white-space: pre-wrap; color: #a00; }}
{css}
</style>
</head>
<body>
<div class="ir-output">
{lines}
</div>
<pre class="messages">{messages}</pre>
</body>
</html>
"""


def _line_div(line: HighlightedLine) -> str:
    if line.span is None:
        return f'<div class="ir-line">{line.html}</div>'
    data = html_lib.escape(json.dumps(line.span.to_dict()), quote=True)
    return (
        f'<div class="ir-line has-span" data-span="{data}" '
        f'title="{line.span}" style="background-color: {line.color}">'
        f"{line.html}</div>"
    )


def to_html_page(
    rendered: RenderedDump,
    *,
    title: str = "IR dump",
    style: str = "default",
) -> str:
    """A standalone HTML page with one ``div.ir-line`` per dump line."""
    return _PAGE_TEMPLATE.format(
        title=html_lib.escape(title),
        css=style_css(style),
        lines="\n".join(_line_div(line) for line in rendered.lines),
        messages=html_lib.escape(rendered.messages),
    )


class Editor(Protocol):
    """The source editor the dump view drives on hover."""

    def highlight_range(
        self,
        start_line: int,
        start_col: int,
        end_line: int,
        end_col: int,
        *,
        whole_line: bool,
    ) -> None: ...

    def clear_highlight(self) -> None: ...


class HoverController:
    """Forwards hover enter/leave on dump lines to an Editor."""

    def __init__(self, editor: Editor) -> None:
        self.editor = editor
        self.active: EditorHighlight | None = None

    def enter(self, line: HighlightedLine) -> None:
        request = line.highlight
        if request is None:
            return
        self.editor.highlight_range(
            request.start_line, request.start_col,
            request.end_line, request.end_col,
            whole_line=request.whole_line,
        )
        self.active = request

    def leave(self) -> None:
        if self.active is None:
            return
        self.editor.clear_highlight()
        self.active = None
