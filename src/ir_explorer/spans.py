"""Source span annotations embedded in rustc IR dumps."""

from __future__ import annotations

import re
from dataclasses import dataclass

# "main.rs:3:5: 5:10 (#0)" or "main.rs:3:5"
SPAN_RE = re.compile(r"([^\s:]+\.rs):(\d+):(\d+)(?:: (\d+):(\d+))?")


@dataclass(frozen=True)
class SourceSpan:
    """An inclusive, 1-indexed range in the compiled source."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"

    @property
    def is_whole_line(self) -> bool:
        """True when the span names a line rather than a column range."""
        return self.start_col == 1 and self.end_col <= 1

    def to_dict(self) -> dict[str, int]:
        return {
            "start_line": self.start_line,
            "start_col": self.start_col,
            "end_line": self.end_line,
            "end_col": self.end_col,
        }


def parse_span(line: str) -> SourceSpan | None:
    """Return the first span annotation on *line*, or None.

    A match whose start line is 0 is a dummy span emitted by rustc and is
    treated as no match.
    """
    m = SPAN_RE.search(line)
    if m is None:
        return None
    start_line = int(m.group(2))
    start_col = int(m.group(3))
    if start_line == 0:
        return None
    end_line = int(m.group(4)) if m.group(4) is not None else start_line
    end_col = int(m.group(5)) if m.group(5) is not None else start_col
    return SourceSpan(start_line, start_col, end_line, end_col)


def span_file(line: str) -> str | None:
    """Return the file name of the first span annotation on *line*."""
    m = SPAN_RE.search(line)
    return m.group(1) if m else None


def first_span_file(lines: list[str]) -> str | None:
    """Return the file name named by the first valid annotation in *lines*."""
    for line in lines:
        if parse_span(line) is not None:
            return span_file(line)
    return None
