"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from cmdlang.ast import Command
from cmdlang.lexer import tokenize
from cmdlang.parser import Parser, parse
from cmdlang.source import StringSource
from cmdlang.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.kind != TokenKind.END_OF_FILE]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns the list of commands."""

    def _parse(source: str) -> list[Command]:
        return parse(source)

    return _parse


@pytest.fixture
def parse_one():
    """Return a helper that parses source expected to hold exactly one command."""

    def _parse(source: str) -> Command:
        commands = parse(source)
        assert len(commands) == 1, f"Expected one command, got {len(commands)}"
        return commands[0]

    return _parse


@pytest.fixture
def make_parser():
    """Return a helper building an uncolored Parser over a string."""

    def _make(source: str, show_source: bool = True) -> Parser:
        return Parser(StringSource(source), color=False, show_source=show_source)

    return _make


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
