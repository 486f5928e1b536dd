"""Split highlighted HTML into self-contained per-line fragments."""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"</?span[^>]*>")
CLOSE_TAG = "</span>"


class MarkupLineSplitter:
    """Carries the stack of open ``<span>`` tags from one line to the next.

    Each call to :meth:`feed` takes one raw line of highlighter output and
    returns it re-opened with the tags still open from earlier lines and
    closed with one ``</span>`` per tag left open at its end.
    """

    def __init__(self) -> None:
        self.open_tags: list[str] = []

    def feed(self, part: str) -> str:
        prefix = "".join(self.open_tags)
        for m in _TAG_RE.finditer(part):
            tag = m.group(0)
            if tag.startswith("</"):
                # Well-formed highlighter output never closes more than it opens.
                if self.open_tags:
                    self.open_tags.pop()
            else:
                self.open_tags.append(tag)
        return prefix + part + CLOSE_TAG * len(self.open_tags)


def split_highlighted_lines(html: str) -> list[str]:
    """Split *html* on newlines so every line is independently well-formed."""
    splitter = MarkupLineSplitter()
    return [splitter.feed(part) for part in html.split("\n")]


def strip_tags(html: str) -> str:
    """Remove all span markup, leaving the (still escaped) text."""
    return _TAG_RE.sub("", html)
