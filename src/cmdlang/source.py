"""Character sources and the position-tracking wrapper used by the tokenizer."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class CharSource(Protocol):
    """Sequential, peekable character source with a single step of undo.

    ``peek`` returns "" at end of stream. ``advance`` returns the consumed
    character and True, or ("", False) at end of stream. ``unstep`` undoes
    the last successful ``advance``.
    """

    def peek(self) -> str: ...

    def advance(self) -> tuple[str, bool]: ...

    def unstep(self) -> None: ...

    def offset(self) -> int: ...


class StringSource:
    """Character source over an in-memory string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def peek(self) -> str:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return ""

    def advance(self) -> tuple[str, bool]:
        if self._pos >= len(self._text):
            return "", False
        ch = self._text[self._pos]
        self._pos += 1
        return ch, True

    def unstep(self) -> None:
        if self._pos == 0:
            raise RuntimeError("cannot unstep: nothing has been consumed")
        self._pos -= 1

    def offset(self) -> int:
        return self._pos


class StreamSource:
    """Line-buffered character source over a text stream (file, stdin, ...).

    A new line is read only once the current one is exhausted, so with an
    interactive stream the only blocking point is waiting for the user to
    finish a line. When *prompt* is set it is written to *prompt_stream*
    before every line read.
    """

    def __init__(
        self,
        stream: TextIO,
        prompt: str | None = None,
        prompt_stream: TextIO | None = None,
    ) -> None:
        self._stream = stream
        self._prompt = prompt
        self._prompt_stream = prompt_stream if prompt_stream is not None else sys.stderr
        self._line = ""
        self._index = 0
        self._consumed = 0
        self._eof = False
        # (line, index) before the last advance
        self._undo: tuple[str, int] | None = None

    def _fill(self) -> bool:
        """Make sure a character is available; return False at end of stream."""
        if self._index < len(self._line):
            return True
        if self._eof:
            return False
        if self._prompt is not None:
            self._prompt_stream.write(self._prompt)
            self._prompt_stream.flush()
        line = self._stream.readline()
        if not line:
            self._eof = True
            return False
        self._line = line
        self._index = 0
        return True

    def peek(self) -> str:
        if not self._fill():
            return ""
        return self._line[self._index]

    def advance(self) -> tuple[str, bool]:
        if not self._fill():
            return "", False
        self._undo = (self._line, self._index)
        ch = self._line[self._index]
        self._index += 1
        self._consumed += 1
        return ch, True

    def unstep(self) -> None:
        if self._undo is None:
            raise RuntimeError("cannot unstep: no pending advance to undo")
        self._line, self._index = self._undo
        self._undo = None
        self._consumed -= 1

    def offset(self) -> int:
        return self._consumed


class SourceTracker:
    """Wraps a CharSource, recording consumed text, offset and line number.

    The tracker is the only authority on positions: some sources (such as
    an interactive console) cannot report a meaningful offset themselves.
    ``clear`` drops the recorded text and marks the start of the next
    command, which diagnostics use to map absolute offsets into the buffer.
    """

    def __init__(self, source: CharSource) -> None:
        self._source = source
        self._offset = 0
        self._line = 1
        self._buffer: list[str] = []
        self._start_offset = 0
        self._start_line = 1

    def peek(self) -> str:
        return self._source.peek()

    def advance(self) -> tuple[str, bool]:
        ch, ok = self._source.advance()
        if ok:
            self._offset += 1
            self._buffer.append(ch)
            if ch == "\n":
                self._line += 1
        return ch, ok

    def unstep(self) -> None:
        if not self._buffer:
            raise RuntimeError("cannot unstep: no consumed character recorded")
        self._source.unstep()
        self._offset -= 1
        if self._buffer.pop() == "\n":
            self._line -= 1

    def offset(self) -> int:
        return self._offset

    def line(self) -> int:
        """Current 1-based line number."""
        return self._line

    def at_end(self) -> bool:
        return self._source.peek() == ""

    def clear(self) -> None:
        self._start_offset = self._offset
        self._start_line = self._line
        self._buffer.clear()

    def consumed_text(self) -> str:
        return "".join(self._buffer)

    def start_offset(self) -> int:
        return self._start_offset

    def start_line(self) -> int:
        return self._start_line
