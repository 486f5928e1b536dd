"""Tests for span annotation parsing."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from ir_explorer.spans import SourceSpan, first_span_file, parse_span, span_file


class TestParseSpan:
    def test_range_form(self):
        assert parse_span("  x.rs:3:5: 5:10") == SourceSpan(3, 5, 5, 10)

    def test_point_form_defaults_end_to_start(self):
        assert parse_span("main.rs:7:12") == SourceSpan(7, 12, 7, 12)

    def test_hir_tree_annotation(self):
        line = "span: src/main.rs:3:5: 5:10 (#0),"
        assert parse_span(line) == SourceSpan(3, 5, 5, 10)

    def test_mir_scope_comment(self):
        line = "_1 = const 42_i32; // scope 0 at main.rs:2:13: 2:15"
        assert parse_span(line) == SourceSpan(2, 13, 2, 15)

    def test_zero_start_line_is_absent(self):
        assert parse_span("y.rs:0:1") is None

    def test_zero_start_line_in_range_form_is_absent(self):
        assert parse_span("y.rs:0:0: 0:0 (#0)") is None

    def test_no_annotation(self):
        assert parse_span("    StorageLive(_1);") is None

    def test_empty_line(self):
        assert parse_span("") is None

    def test_other_extension_ignored(self):
        assert parse_span("foo.c:3:4") is None

    def test_first_match_only(self):
        assert parse_span("a.rs:1:2 b.rs:9:9: 9:10") == SourceSpan(1, 2, 1, 2)

    def test_range_needs_space_after_colon(self):
        assert parse_span("a.rs:1:2:5:6") == SourceSpan(1, 2, 1, 2)

    def test_zero_columns_are_valid(self):
        assert parse_span("a.rs:4:0: 4:0") == SourceSpan(4, 0, 4, 0)


class TestSourceSpan:
    def test_str(self):
        assert str(SourceSpan(3, 5, 5, 10)) == "3:5-5:10"

    def test_frozen(self):
        span = SourceSpan(1, 1, 1, 1)
        with pytest.raises(FrozenInstanceError):
            span.start_line = 2  # type: ignore[misc]

    def test_hashable_and_equal(self):
        assert {SourceSpan(1, 2, 3, 4), SourceSpan(1, 2, 3, 4)} == {SourceSpan(1, 2, 3, 4)}

    def test_whole_line(self):
        assert SourceSpan(4, 1, 4, 1).is_whole_line
        assert SourceSpan(4, 1, 6, 0).is_whole_line
        assert not SourceSpan(4, 1, 4, 8).is_whole_line
        assert not SourceSpan(4, 2, 4, 1).is_whole_line

    def test_to_dict(self):
        assert SourceSpan(1, 2, 3, 4).to_dict() == {
            "start_line": 1, "start_col": 2, "end_line": 3, "end_col": 4,
        }


class TestSpanFile:
    def test_span_file(self):
        assert span_file("span: src/main.rs:3:5: 5:10 (#0)") == "src/main.rs"

    def test_span_file_none(self):
        assert span_file("no span here") is None

    def test_first_span_file_skips_dummy_spans(self):
        lines = ["x", "dummy.rs:0:0", "real.rs:1:1"]
        assert first_span_file(lines) == "real.rs"

    def test_first_span_file_none(self):
        assert first_span_file(["{", "}"]) is None
