"""Pygments-backed syntax highlighting of normalized dump text."""

from __future__ import annotations

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ir_explorer.lexer import RustIrLexer

DEFAULT_LANGUAGE = "rust-ir"


def get_lexer(language: str = DEFAULT_LANGUAGE) -> Lexer:
    """Return a lexer that leaves leading and trailing newlines alone.

    Unknown languages fall back to the bundled IR lexer.
    """
    options = {"stripnl": False, "ensurenl": False}
    if language in RustIrLexer.aliases:
        return RustIrLexer(**options)
    try:
        return get_lexer_by_name(language, **options)
    except ClassNotFound:
        return RustIrLexer(**options)


def highlight(text: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Highlight *text* as one HTML string of nested ``<span>`` tags.

    The result has no wrapping ``<div>``/``<pre>`` and keeps exactly the
    newlines of *text*.
    """
    formatter = HtmlFormatter(nowrap=True)
    html = pygments_highlight(text, get_lexer(language), formatter)
    if not text.endswith("\n") and html.endswith("\n"):
        html = html[:-1]
    return html


def style_css(style: str = "default", selector: str = ".ir-output") -> str:
    """CSS rules for the token classes emitted by :func:`highlight`."""
    return HtmlFormatter(style=style).get_style_defs(selector)
