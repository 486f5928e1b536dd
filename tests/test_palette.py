"""Tests for span color assignment."""

from __future__ import annotations

from ir_explorer.palette import SPAN_COLORS, color_for_span, span_hash
from ir_explorer.spans import SourceSpan


class TestColorForSpan:
    def test_hash(self):
        assert span_hash(SourceSpan(3, 5, 5, 10)) == 3_005_510

    def test_palette_index(self):
        span = SourceSpan(3, 5, 5, 10)
        assert color_for_span(span) == SPAN_COLORS[3_005_510 % 24]

    def test_palette_size(self):
        assert len(SPAN_COLORS) == 24

    def test_deterministic(self):
        colors = {color_for_span(SourceSpan(7, 1, 9, 2)) for _ in range(10)}
        assert len(colors) == 1

    def test_equal_spans_share_color(self):
        assert color_for_span(SourceSpan(1, 2, 3, 4)) == color_for_span(SourceSpan(1, 2, 3, 4))

    def test_collisions_allowed(self):
        palette = ("red", "blue")
        a = SourceSpan(1, 1, 1, 1)
        b = SourceSpan(1, 1, 1, 3)
        assert color_for_span(a, palette) == color_for_span(b, palette)

    def test_custom_palette(self):
        assert color_for_span(SourceSpan(1, 0, 0, 0), ("only",)) == "only"
