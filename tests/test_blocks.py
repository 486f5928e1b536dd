"""Tests for brace-block tracking and per-line span resolution."""

from __future__ import annotations

from ir_explorer.blocks import (
    Block,
    compute_line_spans,
    resolve_line_spans,
    track_blocks,
)
from ir_explorer.spans import SourceSpan, parse_span


def spans_of(lines: list[str]) -> list[SourceSpan | None]:
    return [parse_span(line) for line in lines]


class TestTrackBlocks:
    def test_single_block(self):
        lines = ["fn f() {", "  x.rs:3:5: 5:10", "}"]
        blocks = track_blocks(lines)
        assert blocks == [Block(0, 2, SourceSpan(3, 5, 5, 10))]

    def test_spanless_block_dropped(self):
        assert track_blocks(["{", "  nothing", "}"]) == []

    def test_nested_only_inner_spanned(self):
        lines = ["{", "  {", "    a.rs:1:1", "  }", "}"]
        blocks = track_blocks(lines)
        assert blocks == [Block(1, 3, SourceSpan(1, 1, 1, 1))]

    def test_later_span_overwrites_earlier(self):
        lines = ["{", "a.rs:1:1", "a.rs:2:2", "}"]
        blocks = track_blocks(lines)
        assert blocks == [Block(0, 3, SourceSpan(2, 2, 2, 2))]

    def test_span_on_opening_line_attaches_to_new_block(self):
        lines = ["let x = { // a.rs:4:4", "}"]
        blocks = track_blocks(lines)
        assert blocks == [Block(0, 1, SourceSpan(4, 4, 4, 4))]

    def test_span_after_close_attaches_to_enclosing_block(self):
        lines = ["{", "  {", "  } a.rs:9:1", "}"]
        blocks = track_blocks(lines)
        assert blocks == [Block(0, 3, SourceSpan(9, 1, 9, 1))]

    def test_same_line_block_gets_no_span(self):
        assert track_blocks(["S { a: 1 } a.rs:2:3"]) == []

    def test_unmatched_close_ignored(self):
        lines = ["}", "{", "a.rs:1:1", "}", "}"]
        assert track_blocks(lines) == [Block(1, 3, SourceSpan(1, 1, 1, 1))]

    def test_dangling_block_excluded(self):
        lines = ["{", "a.rs:1:1", "  {", "  b.rs:2:2", "  }"]
        assert track_blocks(lines) == [Block(2, 4, SourceSpan(2, 2, 2, 2))]

    def test_braces_in_strings_counted(self):
        lines = ['let s = "{";', "a.rs:1:1", "}"]
        assert track_blocks(lines) == [Block(0, 2, SourceSpan(1, 1, 1, 1))]

    def test_blocks_in_close_order(self):
        lines = ["{", "a.rs:1:1", "  {", "  b.rs:2:2", "  }", "}"]
        blocks = track_blocks(lines)
        assert [(b.open_line, b.close_line) for b in blocks] == [(2, 4), (0, 5)]

    def test_precomputed_direct_spans(self):
        lines = ["{", "ignored", "}"]
        direct = [None, SourceSpan(7, 7, 7, 7), None]
        assert track_blocks(lines, direct) == [Block(0, 2, SourceSpan(7, 7, 7, 7))]

    def test_empty(self):
        assert track_blocks([]) == []


class TestResolveLineSpans:
    def test_length_matches(self):
        assert resolve_line_spans(4, [], [None] * 4) == [None] * 4

    def test_smaller_block_wins_regardless_of_order(self):
        outer = SourceSpan(1, 1, 10, 1)
        inner = SourceSpan(3, 1, 4, 1)
        blocks = [Block(1, 2, inner), Block(0, 4, outer)]
        result = resolve_line_spans(5, blocks, [None] * 5)
        assert result == [outer, inner, inner, outer, outer]

    def test_direct_span_overrides_block(self):
        block_span = SourceSpan(1, 1, 9, 9)
        own = SourceSpan(5, 5, 5, 5)
        result = resolve_line_spans(3, [Block(0, 2, block_span)], [None, own, None])
        assert result == [block_span, own, block_span]

    def test_direct_span_outside_blocks(self):
        own = SourceSpan(2, 2, 2, 2)
        assert resolve_line_spans(2, [], [own, None]) == [own, None]


class TestComputeLineSpans:
    def test_block_scenario(self):
        span = SourceSpan(3, 5, 5, 10)
        assert compute_line_spans(["fn f() {", "  x.rs:3:5: 5:10", "}"]) == [span, span, span]

    def test_nested_scenario(self):
        span = SourceSpan(1, 1, 1, 1)
        lines = ["{", "  {", "    a.rs:1:1", "  }", "}"]
        assert compute_line_spans(lines) == [None, span, span, span, None]

    def test_invalid_span_inherits_block(self):
        lines = ["{", "a.rs:2:2", "y.rs:0:1", "}"]
        span = SourceSpan(2, 2, 2, 2)
        assert compute_line_spans(lines) == [span, span, span, span]

    def test_mir_dump(self, nested_dump):
        lines = nested_dump.split("\n")
        result = compute_line_spans(lines)
        debug = SourceSpan(2, 9, 2, 10)
        ret = SourceSpan(5, 2, 5, 2)
        assert len(result) == len(lines)
        assert result == [
            None, None,
            debug, debug, debug,
            None,
            ret, ret, ret,
            None, None,
        ]

    def test_direct_spans_always_win(self, nested_dump):
        lines = nested_dump.split("\n")
        result = compute_line_spans(lines)
        for line, resolved in zip(lines, result):
            own = parse_span(line)
            if own is not None:
                assert resolved == own

    def test_inner_block_wins_over_outer(self):
        lines = [
            "fn f() {",           # 0
            "  a.rs:1:1: 9:1",    # 1
            "  if x {",           # 2
            "    b.rs:3:3: 4:4",  # 3
            "    call();",        # 4
            "  }",                # 5
            "}",                  # 6
        ]
        outer = SourceSpan(1, 1, 9, 1)
        inner = SourceSpan(3, 3, 4, 4)
        result = compute_line_spans(lines)
        assert result[2:6] == [inner] * 4
        assert result[0] == result[6] == outer

    def test_deterministic(self, nested_dump):
        lines = nested_dump.split("\n")
        assert compute_line_spans(lines) == compute_line_spans(lines)

    def test_empty_document(self):
        assert compute_line_spans([""]) == [None]
