"""Leading-indentation compaction for IR dumps."""

from __future__ import annotations

import re

_LEADING_SPACES = re.compile(r"^( +)", re.MULTILINE)


def _compact(match: re.Match[str]) -> str:
    width = len(match.group(1))
    return "  " * (width // 4) + " " * (width % 4)


def reindent(text: str) -> str:
    """Rewrite every 4 leading spaces as 2, keeping any 0-3 space remainder.

    Only the run of spaces at the start of each line is touched; tabs and
    interior whitespace pass through unchanged.
    """
    return _LEADING_SPACES.sub(_compact, text)
