"""Tests for character sources and the position-tracking wrapper."""

from __future__ import annotations

import io

import pytest

from cmdlang.source import SourceTracker, StreamSource, StringSource


def _drain(source) -> str:
    chars = []
    while True:
        ch, ok = source.advance()
        if not ok:
            return "".join(chars)
        chars.append(ch)


class TestStringSource:
    def test_peek_and_advance(self):
        src = StringSource("ab")
        assert src.peek() == "a"
        assert src.advance() == ("a", True)
        assert src.offset() == 1
        assert src.advance() == ("b", True)
        assert src.advance() == ("", False)
        assert src.peek() == ""

    def test_unstep(self):
        src = StringSource("ab")
        src.advance()
        src.unstep()
        assert src.peek() == "a"
        assert src.offset() == 0

    def test_unstep_underflow(self):
        with pytest.raises(RuntimeError):
            StringSource("ab").unstep()


class TestStreamSource:
    def test_reads_across_lines(self):
        src = StreamSource(io.StringIO("ab\ncd\n"))
        assert _drain(src) == "ab\ncd\n"
        assert src.offset() == 6

    def test_unstep_across_line_boundary(self):
        src = StreamSource(io.StringIO("a\nb"))
        src.advance()
        src.advance()  # newline, end of first line
        assert src.advance() == ("b", True)
        src.unstep()
        assert src.peek() == "b"
        assert src.offset() == 2

    def test_unstep_only_once(self):
        src = StreamSource(io.StringIO("ab"))
        src.advance()
        src.advance()
        src.unstep()
        with pytest.raises(RuntimeError):
            src.unstep()

    def test_reads_lazily(self):
        stream = io.StringIO("first\nsecond\n")
        src = StreamSource(stream)
        src.peek()
        assert stream.tell() == len("first\n")

    def test_prompt_before_each_line(self):
        prompts = io.StringIO()
        src = StreamSource(io.StringIO("a\nb\n"), prompt="> ", prompt_stream=prompts)
        _drain(src)
        # Two lines plus the read that hits end of stream
        assert prompts.getvalue() == "> > > "


class TestSourceTracker:
    def test_records_consumed_text(self):
        t = SourceTracker(StringSource("ab\ncd"))
        for _ in range(4):
            t.advance()
        assert t.consumed_text() == "ab\nc"
        assert t.offset() == 4
        assert t.line() == 2

    def test_unstep_reverses_line_count(self):
        t = SourceTracker(StringSource("a\nb"))
        t.advance()
        t.advance()
        assert t.line() == 2
        t.unstep()
        assert t.line() == 1
        assert t.consumed_text() == "a"
        assert t.peek() == "\n"

    def test_unstep_with_empty_buffer_fails(self):
        t = SourceTracker(StringSource("ab"))
        with pytest.raises(RuntimeError):
            t.unstep()

    def test_clear_snapshots_position(self):
        t = SourceTracker(StringSource("x\ny z"))
        for _ in range(3):
            t.advance()
        t.clear()
        assert t.consumed_text() == ""
        assert t.start_offset() == 3
        assert t.start_line() == 2
        assert t.offset() == 3  # absolute offset keeps counting
        t.advance()
        assert t.consumed_text() == " "
        assert t.offset() == 4

    def test_unstep_after_clear_fails(self):
        t = SourceTracker(StringSource("ab"))
        t.advance()
        t.clear()
        with pytest.raises(RuntimeError):
            t.unstep()

    def test_failed_advance_leaves_state(self):
        t = SourceTracker(StringSource(""))
        assert t.advance() == ("", False)
        assert t.offset() == 0
        assert t.at_end()
