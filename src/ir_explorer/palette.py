"""Background colors that group dump lines sharing a source span."""

from __future__ import annotations

from ir_explorer.spans import SourceSpan

SPAN_COLORS = (
    "rgba(86, 156, 214, 0.12)",   # blue
    "rgba(78, 201, 176, 0.12)",   # teal
    "rgba(206, 145, 120, 0.12)",  # orange
    "rgba(197, 134, 192, 0.12)",  # purple
    "rgba(181, 206, 168, 0.12)",  # green
    "rgba(220, 220, 170, 0.12)",  # yellow
    "rgba(243, 139, 168, 0.12)",  # pink
    "rgba(137, 180, 250, 0.12)",  # light blue
    "rgba(249, 226, 175, 0.12)",  # peach
    "rgba(166, 227, 161, 0.12)",  # mint
    "rgba(245, 194, 231, 0.12)",  # mauve
    "rgba(148, 226, 213, 0.12)",  # sky
    "rgba(250, 179, 135, 0.12)",  # tangerine
    "rgba(203, 166, 247, 0.12)",  # lavender
    "rgba(116, 199, 236, 0.12)",  # sapphire
    "rgba(245, 224, 220, 0.12)",  # rosewater
    "rgba(242, 205, 205, 0.12)",  # flamingo
    "rgba(186, 194, 222, 0.12)",  # subtext
    "rgba(249, 249, 113, 0.12)",  # lemon
    "rgba(255, 154, 162, 0.12)",  # coral
    "rgba(130, 170, 255, 0.12)",  # periwinkle
    "rgba(170, 255, 195, 0.12)",  # seafoam
    "rgba(255, 183, 77, 0.12)",   # amber
    "rgba(186, 147, 214, 0.12)",  # wisteria
)


def span_hash(span: SourceSpan) -> int:
    return (
        span.start_line * 1_000_000
        + span.start_col * 1_000
        + span.end_line * 100
        + span.end_col
    )


def color_for_span(span: SourceSpan, palette: tuple[str, ...] = SPAN_COLORS) -> str:
    """Pick a palette entry for *span*. Equal spans always share a color."""
    return palette[span_hash(span) % len(palette)]
