# tests/unit/test_splitter.py
"""
Tests for ChunkSplitter.

Verifies:
1. Chunks never contain the delimiter and keep source order
2. Text after the last delimiter is carried across blocks
3. Delimiters are interleaved only when keep_delimiters=True
4. Without a delimiter the whole input is one chunk
"""

from __future__ import annotations

import re

import pytest

from rxpipe.core.types import Chunk, Delimiter
from rxpipe.exceptions import ChunkOverflowError
from rxpipe.stages.base import Stage
from rxpipe.stages.splitter import LOOKBACK_CHARS, ChunkSplitter


def split_all(splitter: ChunkSplitter, *blocks: str):
    out = []
    for block in blocks:
        out.extend(splitter.feed(block))
    out.extend(splitter.flush())
    return out


def blocks_of(text: str, size: int):
    return [text[i : i + size] for i in range(0, len(text), size)]


class TestLineSplitting:
    def test_is_a_stage(self, line_by_line):
        assert isinstance(ChunkSplitter(line_by_line), Stage)

    def test_splits_lines(self, line_by_line):
        chunks = split_all(ChunkSplitter(line_by_line), "foo=1\nbar=2\n")

        assert chunks == [Chunk(0, "foo=1"), Chunk(1, "bar=2")]

    def test_trailing_text_is_final_chunk(self, line_by_line):
        chunks = split_all(ChunkSplitter(line_by_line), "a\nb")

        assert chunks == [Chunk(0, "a"), Chunk(1, "b")]

    def test_no_delimiter_in_input_is_single_chunk(self, line_by_line):
        chunks = split_all(ChunkSplitter(line_by_line), "a1 b2 c3")

        assert chunks == [Chunk(0, "a1 b2 c3")]

    def test_blank_lines_are_chunks(self, line_by_line):
        chunks = split_all(ChunkSplitter(line_by_line), "a\n\nb\n")

        assert chunks == [Chunk(0, "a"), Chunk(1, ""), Chunk(2, "b")]

    def test_crlf(self, line_by_line):
        chunks = split_all(ChunkSplitter(line_by_line), "a\r\nb\r\n")

        assert chunks == [Chunk(0, "a"), Chunk(1, "b")]

    def test_empty_input(self, line_by_line):
        assert split_all(ChunkSplitter(line_by_line), "") == []


class TestCarryOver:
    def test_partial_line_waits_for_next_block(self, line_by_line):
        splitter = ChunkSplitter(line_by_line)

        assert splitter.feed("ab") == []
        assert splitter.feed("c\nd") == [Chunk(0, "abc")]
        assert splitter.flush() == [Chunk(1, "d")]

    def test_crlf_split_across_blocks(self, line_by_line):
        splitter = ChunkSplitter(line_by_line, keep_delimiters=True)

        assert splitter.feed("a\r") == []
        assert splitter.feed("\nb") == [Chunk(0, "a"), Delimiter("\r\n")]
        assert splitter.flush() == [Chunk(1, "b")]

    def test_one_character_blocks(self, line_by_line):
        chunks = split_all(ChunkSplitter(line_by_line), *"x1\ny2\n")

        assert chunks == [Chunk(0, "x1"), Chunk(1, "y2")]

    def test_flush_resets_remainder(self, line_by_line):
        splitter = ChunkSplitter(line_by_line)
        splitter.feed("tail")

        assert splitter.flush() == [Chunk(0, "tail")]
        assert splitter.flush() == []


class TestBlockBoundaries:
    PARAGRAPHS = "p1\n\n\np2\n\np3"
    BLANK_LINES = re.compile(r"\n\n+")

    @pytest.mark.parametrize("size", range(1, 9))
    def test_variable_length_delimiter_any_read_size(self, size):
        chunks = split_all(ChunkSplitter(self.BLANK_LINES), *blocks_of(self.PARAGRAPHS, size))

        assert chunks == [Chunk(0, "p1"), Chunk(1, "p2"), Chunk(2, "p3")]

    @pytest.mark.parametrize("size", range(1, 9))
    def test_kept_delimiters_any_read_size(self, size):
        splitter = ChunkSplitter(self.BLANK_LINES, keep_delimiters=True)

        segments = split_all(splitter, *blocks_of(self.PARAGRAPHS, size))

        assert segments == [
            Chunk(0, "p1"),
            Delimiter("\n\n\n"),
            Chunk(1, "p2"),
            Delimiter("\n\n"),
            Chunk(2, "p3"),
        ]

    def test_delimiter_at_end_of_block_is_held_back(self):
        splitter = ChunkSplitter(re.compile(";+"), keep_delimiters=True)

        assert splitter.feed("a;") == []
        assert splitter.feed(";b") == [Chunk(0, "a"), Delimiter(";;")]
        assert splitter.feed(";") == []
        assert splitter.flush() == [Chunk(1, "b"), Delimiter(";")]

    @pytest.mark.parametrize("size", [1, 3, 7])
    def test_trailing_delimiter_is_not_a_chunk(self, size, line_by_line):
        segments = split_all(ChunkSplitter(line_by_line, keep_delimiters=True), *blocks_of("a\nb\n", size))

        assert segments == [Chunk(0, "a"), Delimiter("\n"), Chunk(1, "b"), Delimiter("\n")]

    def test_delimiter_after_long_line(self, line_by_line):
        text = "x" * (3 * LOOKBACK_CHARS) + "\n" + "y"

        chunks = split_all(ChunkSplitter(line_by_line), *blocks_of(text, 7))

        assert chunks == [Chunk(0, "x" * (3 * LOOKBACK_CHARS)), Chunk(1, "y")]


class RecordingPattern:
    """Delimiter that records the length of every text it is asked to search."""

    def __init__(self, pattern: str) -> None:
        self.regex = re.compile(pattern)
        self.searched = []

    def finditer(self, text):
        self.searched.append(len(text))
        return self.regex.finditer(text)


class TestLongInput:
    def test_search_window_stays_bounded(self):
        delimiter = RecordingPattern(r"\r?\n")
        splitter = ChunkSplitter(delimiter)

        for _ in range(500):
            assert splitter.feed("x" * 100) == []

        assert max(delimiter.searched[:-1]) <= LOOKBACK_CHARS + 100
        assert splitter.flush() == [Chunk(0, "x" * 50_000)]

    def test_without_delimiter_blocks_are_joined_once(self):
        splitter = ChunkSplitter(None)

        for _ in range(1000):
            splitter.feed("abcd")

        assert len(splitter._parts) == 1000
        assert splitter.flush() == [Chunk(0, "abcd" * 1000)]
        assert splitter._parts == []


class TestKeepDelimiters:
    def test_delimiters_interleaved(self, line_by_line):
        segments = split_all(ChunkSplitter(line_by_line, keep_delimiters=True), "foo=1\nbar=2\n")

        assert segments == [
            Chunk(0, "foo=1"),
            Delimiter("\n"),
            Chunk(1, "bar=2"),
            Delimiter("\n"),
        ]

    def test_rebuilds_input(self):
        text = "a, b,c ,, d"
        segments = split_all(ChunkSplitter(re.compile(r"\s*,\s*"), keep_delimiters=True), text)

        assert "".join(s.text for s in segments) == text

    def test_chunk_indexes_skip_delimiters(self, line_by_line):
        segments = split_all(ChunkSplitter(line_by_line, keep_delimiters=True), "a\nb\nc")

        assert [s.index for s in segments if isinstance(s, Chunk)] == [0, 1, 2]


class TestWithoutDelimiter:
    def test_whole_input_is_one_chunk(self):
        splitter = ChunkSplitter(None)

        assert splitter.feed("x\ny") == []
        assert splitter.feed("z") == []
        assert splitter.flush() == [Chunk(0, "x\nyz")]

    def test_empty_input_yields_nothing(self):
        assert split_all(ChunkSplitter(None), "") == []


class TestMaxChunkLength:
    def test_overflow_raises(self, line_by_line):
        splitter = ChunkSplitter(line_by_line, max_chunk_length=3)

        with pytest.raises(ChunkOverflowError) as exc_info:
            splitter.feed("abcd")

        assert exc_info.value.limit == 3
        assert exc_info.value.length == 4

    def test_limit_applies_to_carried_text_only(self, line_by_line):
        splitter = ChunkSplitter(line_by_line, max_chunk_length=3)

        assert splitter.feed("abcdefgh\nxy") == [Chunk(0, "abcdefgh")]
        assert splitter.flush() == [Chunk(1, "xy")]

    def test_held_back_delimiter_does_not_count(self, line_by_line):
        splitter = ChunkSplitter(line_by_line, max_chunk_length=3)

        assert splitter.feed("abc\n") == []
        assert splitter.flush() == [Chunk(0, "abc")]

    def test_limit_without_delimiter(self):
        with pytest.raises(ChunkOverflowError):
            split_all(ChunkSplitter(None, max_chunk_length=5), "abc", "def")

    def test_invalid_limit(self, line_by_line):
        with pytest.raises(ValueError, match="max_chunk_length"):
            ChunkSplitter(line_by_line, max_chunk_length=0)
