"""Parse failure types carrying a rendered diagnostic report."""

from __future__ import annotations

from cmdlang.tokens import Token, TokenKind


class ParseError(Exception):
    """Raised on the first grammar violation of a command.

    ``message`` is the full report (synopsis plus optional source snippet,
    possibly with ANSI colors); ``synopsis`` is the plain one-line
    description; ``token`` is the offending token.
    """

    def __init__(self, message: str, synopsis: str, token: Token) -> None:
        self.message = message
        self.synopsis = synopsis
        self.token = token
        super().__init__(message)

    @property
    def begin(self) -> int:
        return self.token.begin

    @property
    def end(self) -> int:
        return self.token.end


class UnexpectedTokenError(ParseError):
    """A token appeared where the grammar wanted something else."""

    def __init__(
        self,
        message: str,
        synopsis: str,
        token: Token,
        expected: TokenKind | str | None = None,
    ) -> None:
        self.expected = expected
        super().__init__(message, synopsis, token)


class MismatchedBracketError(ParseError):
    """A closing curly without an opener, or a nested opening curly."""


class UnknownTokenError(ParseError):
    """The lexer could not classify a run of characters."""
