"""Human-readable error reports with a highlighted source snippet."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from cmdlang.errors import (
    MismatchedBracketError,
    UnexpectedTokenError,
    UnknownTokenError,
)
from cmdlang.source import SourceTracker
from cmdlang.tokens import Token, TokenKind

PREFIX_STYLE = "bold red"
HIGHLIGHT_STYLE = "red"

# Tokens whose text is not worth quoting in a report
_UNQUOTED = frozenset({TokenKind.END_OF_LINE, TokenKind.END_OF_FILE})


class DiagnosticFormatter:
    """Build parse errors whose message shows the current command's source.

    Only text still buffered in the tracker (everything consumed since the
    last ``clear``) can be shown; spans outside it produce no snippet.
    """

    def __init__(
        self,
        tracker: SourceTracker,
        color: bool = True,
        show_source: bool = True,
    ) -> None:
        self._tracker = tracker
        self.color = color
        self.show_source = show_source

    # ------------------------------------------------------------------
    # Error constructors
    # ------------------------------------------------------------------

    def unexpected_token(
        self, actual: Token, expected: TokenKind | str | None = None
    ) -> UnexpectedTokenError:
        if expected is None:
            synopsis = f"unexpected {actual.kind.value} at position {actual.begin}"
        else:
            wanted = expected.value if isinstance(expected, TokenKind) else expected
            synopsis = (
                f"expected {wanted} at position {actual.begin} but got {actual.kind.value}"
            )
        synopsis += _quoted(actual)
        return UnexpectedTokenError(self._report(synopsis, actual), synopsis, actual, expected)

    def mismatched_bracket(self, token: Token) -> MismatchedBracketError:
        synopsis = f"mismatched {token.kind.value} at position {token.begin}{_quoted(token)}"
        return MismatchedBracketError(self._report(synopsis, token), synopsis, token)

    def unknown_token(self, token: Token) -> UnknownTokenError:
        synopsis = f"unknown token at position {token.begin} '{token.text}'"
        return UnknownTokenError(self._report(synopsis, token), synopsis, token)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def snippet(self, begin: int, end: int) -> str:
        """Render the buffered source with [begin, end) highlighted."""
        text = self._snippet_text(begin, end)
        if text is None:
            return ""
        return self._render(text)

    def _report(self, synopsis: str, token: Token) -> str:
        report = Text()
        report.append("Error: ", style=PREFIX_STYLE)
        report.append(synopsis)
        if self.show_source:
            snippet = self._snippet_text(token.begin, token.end)
            if snippet is not None:
                report.append("\n")
                report.append_text(snippet)
        return self._render(report)

    def _snippet_text(self, begin: int, end: int) -> Text | None:
        source = self._tracker.consumed_text()
        base = self._tracker.start_offset()
        lo = max(begin - base, 0)
        hi = min(end - base, len(source))
        if lo > hi:
            return None

        lines = source.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()

        first = self._tracker.start_line()
        width = len(str(first + len(lines) - 1))

        out = Text()
        pos = 0
        for i, line in enumerate(lines):
            if i:
                out.append("\n")
            out.append(f"  {first + i:>{width}} | ")
            # colored rows show a tab as one space
            row = Text(line.replace("\t", " ") if self.color else line)
            start = max(lo - pos, 0)
            stop = min(hi - pos, len(line))
            if start < stop:
                row.stylize(HIGHLIGHT_STYLE, start, stop)
            out.append_text(row)
            pos += len(line) + 1
        return out

    def _render(self, text: Text) -> str:
        if not self.color:
            return text.plain
        console = Console(
            force_terminal=True,
            color_system="standard",
            soft_wrap=True,
            highlight=False,
            emoji=False,
            markup=False,
        )
        with console.capture() as capture:
            console.print(text, end="")
        return capture.get()


def _quoted(token: Token) -> str:
    if token.kind in _UNQUOTED:
        return ""
    return f" '{token.text}'"

