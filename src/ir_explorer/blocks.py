"""Brace-block tracking and per-line span resolution.

A dump line only sometimes carries its own span annotation. Lines without
one inherit the span of the innermost brace block that encloses them, where
a block's span is the last annotation seen while it was the innermost open
block. A line's own annotation always wins over anything inherited.
"""

from __future__ import annotations

from dataclasses import dataclass

from ir_explorer.spans import SourceSpan, parse_span


@dataclass
class Block:
    """A brace-delimited range of dump lines (both ends inclusive)."""

    open_line: int
    close_line: int | None = None
    span: SourceSpan | None = None

    @property
    def length(self) -> int:
        assert self.close_line is not None
        return self.close_line - self.open_line


def track_blocks(
    lines: list[str],
    direct_spans: list[SourceSpan | None] | None = None,
) -> list[Block]:
    """Match braces in one pass and return the closed blocks that got a span.

    Unmatched closing braces are ignored. Blocks still open at the end of the
    document are dropped. Braces are counted wherever they appear on a line,
    including inside string literals.
    """
    if direct_spans is None:
        direct_spans = [parse_span(line) for line in lines]

    stack: list[Block] = []
    blocks: list[Block] = []

    for i, line in enumerate(lines):
        for ch in line:
            if ch == "{":
                stack.append(Block(open_line=i))
            elif ch == "}" and stack:
                block = stack.pop()
                block.close_line = i
                if block.span is not None:
                    blocks.append(block)

        span = direct_spans[i]
        if span is not None and stack:
            stack[-1].span = span

    return blocks


def resolve_line_spans(
    n: int,
    blocks: list[Block],
    direct_spans: list[SourceSpan | None],
) -> list[SourceSpan | None]:
    """Assign every one of *n* lines its most specific span.

    Blocks are painted largest first so nested blocks overwrite the blocks
    that enclose them; direct annotations are applied last.
    """
    line_spans: list[SourceSpan | None] = [None] * n

    for block in sorted(blocks, key=lambda b: b.length, reverse=True):
        for i in range(block.open_line, block.close_line + 1):
            line_spans[i] = block.span

    for i, span in enumerate(direct_spans):
        if span is not None:
            line_spans[i] = span

    return line_spans


def compute_line_spans(lines: list[str]) -> list[SourceSpan | None]:
    """Parse, track and resolve: one resolved span (or None) per line."""
    direct_spans = [parse_span(line) for line in lines]
    blocks = track_blocks(lines, direct_spans)
    return resolve_line_spans(len(lines), blocks, direct_spans)
