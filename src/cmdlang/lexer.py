"""cmdlang tokenizer: pulls characters from a SourceTracker and yields tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from cmdlang.source import SourceTracker, StringSource
from cmdlang.tokens import (
    PUNCTUATION,
    Token,
    TokenKind,
    classify_number,
    is_blank,
    is_ident_char,
    is_ident_start,
    is_number_char,
    is_number_start,
)


class Tokenizer:
    """Lazy tokenizer with a single token of lookahead."""

    def __init__(self, tracker: SourceTracker) -> None:
        self._tracker = tracker
        self._peeked: Token | None = None

    def has_more(self) -> bool:
        """Return True unless the stream is exhausted."""
        if self._peeked is not None and self._peeked.kind != TokenKind.END_OF_FILE:
            return True
        return not self._tracker.at_end()

    def next(self) -> Token:
        """Consume and return the next token."""
        if self._peeked is not None:
            tok = self._peeked
            self._peeked = None
            return tok
        return self._read_token()

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._read_token()
        return self._peeked

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next()
            yield tok
            if tok.kind == TokenKind.END_OF_FILE:
                return

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _read_token(self) -> Token:
        tracker = self._tracker
        while True:
            begin = tracker.offset()
            ch, ok = tracker.advance()
            if not ok:
                return Token(TokenKind.END_OF_FILE, "", begin, begin)

            if is_blank(ch):
                continue

            if is_ident_start(ch):
                tracker.unstep()
                return self._read_identifier()

            if ch == '"':
                return self._read_string(begin)

            if is_number_start(ch):
                tracker.unstep()
                return self._read_number()

            if ch in PUNCTUATION:
                return Token(PUNCTUATION[ch], ch, begin, begin + 1)

            if ch == "\n":
                return Token(TokenKind.END_OF_LINE, "\n", begin, begin + 1)

            if ch == "#":
                tracker.unstep()
                return self._read_comment()

            return Token(TokenKind.UNKNOWN, ch, begin, begin + 1)

    def _read_run(self, accept: Callable[[str], bool]) -> tuple[str, int, int]:
        """Consume characters while *accept* holds; return (text, begin, end)."""
        begin = self._tracker.offset()
        chars = []
        while accept(self._tracker.peek()):
            ch, _ = self._tracker.advance()
            chars.append(ch)
        return "".join(chars), begin, self._tracker.offset()

    def _read_identifier(self) -> Token:
        text, begin, end = self._read_run(is_ident_char)
        return Token(TokenKind.IDENTIFIER, text, begin, end)

    def _read_number(self) -> Token:
        # Greedy first, then classify: "1x2" is one UNKNOWN token
        text, begin, end = self._read_run(is_number_char)
        return Token(classify_number(text), text, begin, end)

    def _read_comment(self) -> Token:
        text, begin, end = self._read_run(lambda ch: ch != "" and ch != "\n")
        return Token(TokenKind.COMMENT, text, begin, end)

    def _read_string(self, begin: int) -> Token:
        """Read string content after the opening quote at *begin*.

        A backslash takes the next character literally; a backslash before
        a line break (``\\n`` or ``\\r\\n``) joins the lines.
        """
        chars: list[str] = []
        escape = False
        while True:
            ch, ok = self._tracker.advance()
            if not ok:
                break
            if escape:
                if ch == "\r":
                    continue
                escape = False
                if ch != "\n":
                    chars.append(ch)
            elif ch == "\\":
                escape = True
            elif ch == '"':
                break
            else:
                chars.append(ch)
        return Token(TokenKind.STRING, "".join(chars), begin, self._tracker.offset())


def tokenize(text: str) -> list[Token]:
    """Convenience function: tokenize text, including the final END_OF_FILE."""
    return list(Tokenizer(SourceTracker(StringSource(text))))
