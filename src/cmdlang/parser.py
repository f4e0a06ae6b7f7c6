"""cmdlang parser: turns a token stream into Command values.

Grammar::

    command               := identifier argument_list? end_of_line
    argument_list         := arguments+
    arguments             := single_line_arguments
                           | '{' end_of_lines? (multi_line_arguments end_of_lines?)? '}'
    multi_line_arguments  := single_line_arguments (end_of_lines single_line_arguments)*
    single_line_arguments := argument+
    argument              := identifier | string | number | vector
    vector                := number_list | '(' number_list ')' | '[' number_list ']'
    number_list           := number (',' number)*
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from cmdlang.ast import (
    Argument,
    Command,
    Float,
    FloatVector,
    Identifier,
    Integer,
    IntegerVector,
    String,
)
from cmdlang.diagnostics import DiagnosticFormatter
from cmdlang.errors import ParseError
from cmdlang.lexer import Tokenizer
from cmdlang.source import CharSource, SourceTracker, StringSource
from cmdlang.tokens import NUMBER_KINDS, Token, TokenKind, number_value

logger = logging.getLogger(__name__)

_CLOSERS: dict[TokenKind, TokenKind] = {
    TokenKind.LEFT_PAREN: TokenKind.RIGHT_PAREN,
    TokenKind.LEFT_BRACKET: TokenKind.RIGHT_BRACKET,
}

# Tokens that start an argument inside an argument list
_ARGUMENT_START: frozenset[TokenKind] = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.STRING,
        TokenKind.INTEGER,
        TokenKind.FLOAT,
        TokenKind.LEFT_PAREN,
        TokenKind.RIGHT_PAREN,
        TokenKind.LEFT_BRACKET,
        TokenKind.RIGHT_BRACKET,
    }
)

# Tokens after a command name that hand over to the argument list
_LIST_START: frozenset[TokenKind] = _ARGUMENT_START | {
    TokenKind.LEFT_CURLY,
    TokenKind.RIGHT_CURLY,
    TokenKind.COMMA,
    TokenKind.END_OF_LINE,
    TokenKind.END_OF_FILE,
}


class Parser:
    """Recursive descent parser reading one command at a time.

    The parser owns the whole pipeline: the position tracker wrapping
    *source*, the tokenizer reading from it and the formatter that renders
    failures. Every grammar violation raises a ParseError subclass after
    consuming the offending token; recovering (for instance by skipping the
    rest of the line with ``discard_line``) is up to the caller.
    """

    def __init__(self, source: CharSource, *, color: bool = True, show_source: bool = True) -> None:
        self._tracker = SourceTracker(source)
        self._tokens = Tokenizer(self._tracker)
        self._reporter = DiagnosticFormatter(self._tracker, color=color, show_source=show_source)

    @property
    def tracker(self) -> SourceTracker:
        return self._tracker

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokens

    def has_more_commands(self) -> bool:
        return self._tokens.has_more()

    def __iter__(self) -> Iterator[Command]:
        while True:
            command = self.parse_command()
            if command.is_empty:
                return
            yield command

    # ------------------------------------------------------------------
    # Command level
    # ------------------------------------------------------------------

    def parse_command(self) -> Command:
        """Parse the next command; return the empty Command at end of input."""
        try:
            command = self._parse_command()
        finally:
            self._tracker.clear()
        if not command.is_empty:
            logger.debug(
                "parsed command %r with %d argument(s)", command.name, len(command.arguments)
            )
        return command

    def discard_line(self) -> None:
        """Skip tokens up to and including the next end of line."""
        skipped = 0
        while True:
            kind = self._tokens.peek().kind
            if kind == TokenKind.END_OF_FILE:
                break
            self._tokens.next()
            if kind == TokenKind.END_OF_LINE:
                break
            skipped += 1
        self._tracker.clear()
        logger.debug("discarded %d token(s) while recovering", skipped)

    def _parse_command(self) -> Command:
        name = ""
        while True:
            kind = self._tokens.peek().kind

            if not name:
                if kind == TokenKind.IDENTIFIER:
                    name = self._tokens.next().text
                elif kind == TokenKind.END_OF_LINE:
                    self._tokens.next()
                    self._tracker.clear()  # blank line before the command
                elif kind == TokenKind.COMMENT:
                    self._tokens.next()
                elif kind == TokenKind.END_OF_FILE:
                    return Command()
                elif kind == TokenKind.UNKNOWN:
                    raise self._reporter.unknown_token(self._tokens.next())
                else:
                    raise self._reporter.unexpected_token(self._tokens.next(), TokenKind.IDENTIFIER)
                continue

            if kind in _LIST_START:
                return Command(name, tuple(self._parse_argument_list()))
            if kind == TokenKind.COMMENT:
                self._tokens.next()
                continue
            raise self._reporter.unknown_token(self._tokens.next())

    # ------------------------------------------------------------------
    # Arguments
    # ------------------------------------------------------------------

    def _parse_argument_list(self) -> list[Argument]:
        arguments: list[Argument] = []
        multiline = False

        while True:
            kind = self._tokens.peek().kind

            if kind in _ARGUMENT_START:
                arguments.append(self._parse_argument())

            elif kind == TokenKind.LEFT_CURLY:
                tok = self._tokens.next()
                if multiline:
                    # Blocks do not nest
                    raise self._reporter.mismatched_bracket(tok)
                multiline = True

            elif kind == TokenKind.RIGHT_CURLY:
                tok = self._tokens.next()
                if not multiline:
                    raise self._reporter.mismatched_bracket(tok)
                multiline = False

            elif kind == TokenKind.COMMA:
                raise self._reporter.unexpected_token(self._tokens.next())

            elif kind == TokenKind.END_OF_LINE:
                self._tokens.next()
                if not multiline:
                    return arguments

            elif kind == TokenKind.COMMENT:
                self._tokens.next()

            elif kind == TokenKind.END_OF_FILE:
                if multiline:
                    raise self._reporter.unexpected_token(
                        self._tokens.next(), TokenKind.RIGHT_CURLY
                    )
                return arguments

            else:
                raise self._reporter.unknown_token(self._tokens.next())

    def _parse_argument(self) -> Argument:
        kind = self._tokens.peek().kind

        if kind == TokenKind.IDENTIFIER:
            return Identifier(self._tokens.next().text)

        if kind == TokenKind.STRING:
            return String(self._tokens.next().text)

        if kind in NUMBER_KINDS:
            first = self._tokens.next()
            if self._tokens.peek().kind == TokenKind.COMMA:
                # A comma after a number makes it the head of a bare vector
                self._tokens.next()
                return _make_vector([first, *self._parse_number_list()])
            if kind == TokenKind.INTEGER:
                return Integer(number_value(first))
            return Float(number_value(first))

        if kind in _CLOSERS:
            return self._parse_vector()

        # Stray ')' or ']'
        raise self._reporter.unexpected_token(self._tokens.next())

    def _parse_vector(self) -> IntegerVector | FloatVector:
        """Parse a vector enclosed in parentheses or brackets."""
        opener = self._tokens.next().kind
        numbers = self._parse_number_list()
        closer = self._tokens.next()
        if closer.kind != _CLOSERS[opener]:
            raise self._reporter.unexpected_token(closer, _CLOSERS[opener])
        return _make_vector(numbers)

    def _parse_number_list(self) -> list[Token]:
        """Parse ``number (',' number)*`` and return the number tokens."""
        numbers: list[Token] = []
        want_number = True

        while True:
            kind = self._tokens.peek().kind

            if kind in NUMBER_KINDS:
                tok = self._tokens.next()
                if not want_number:
                    raise self._reporter.unexpected_token(tok, TokenKind.COMMA)
                numbers.append(tok)
                want_number = False

            elif kind == TokenKind.COMMA:
                tok = self._tokens.next()
                if want_number:
                    raise self._reporter.unexpected_token(tok, "number")
                want_number = True

            else:
                if want_number:
                    # Empty list or trailing comma
                    raise self._reporter.unexpected_token(self._tokens.next(), "number")
                return numbers


def _make_vector(numbers: list[Token]) -> IntegerVector | FloatVector:
    """Build an IntegerVector, or a FloatVector as soon as one float is present."""
    if all(tok.kind == TokenKind.INTEGER for tok in numbers):
        return IntegerVector(tuple(int(tok.text) for tok in numbers))
    return FloatVector(tuple(float(number_value(tok)) for tok in numbers))


def recover(parser: Parser, error: ParseError) -> bool:
    """Skip what is left of the failed command's line.

    Returns False when the failure happened at end of input and there is
    nothing left to parse.
    """
    kind = error.token.kind
    if kind == TokenKind.END_OF_FILE:
        return False
    logger.info("recovering from parse error: %s", error.synopsis)
    if kind != TokenKind.END_OF_LINE:
        parser.discard_line()
    return True


def collect_commands(parser: Parser) -> tuple[list[Command], list[ParseError]]:
    """Parse every command, skipping the rest of a line after each failure."""
    commands: list[Command] = []
    errors: list[ParseError] = []

    while True:
        try:
            command = parser.parse_command()
        except ParseError as exc:
            errors.append(exc)
            if not recover(parser, exc):
                break
            continue
        if command.is_empty:
            break
        commands.append(command)

    return commands, errors


def parse(source: str, *, color: bool = False, show_source: bool = True) -> list[Command]:
    """Convenience function: parse all commands in source, raising on the first error."""
    return list(Parser(StringSource(source), color=color, show_source=show_source))
