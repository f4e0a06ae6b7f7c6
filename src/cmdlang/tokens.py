"""Token kinds, the Token record, and character classification helpers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Lexical token kinds. Each value is the description used in diagnostics."""

    IDENTIFIER = "identifier"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"

    # Single-character punctuation
    LEFT_PAREN = "left paren"  # (
    RIGHT_PAREN = "right paren"  # )
    LEFT_BRACKET = "left bracket"  # [
    RIGHT_BRACKET = "right bracket"  # ]
    LEFT_CURLY = "left curly"  # {
    RIGHT_CURLY = "right curly"  # }
    COMMA = "comma"  # ,

    END_OF_LINE = "end of line"
    COMMENT = "comment"  # '#' up to the end of the line
    END_OF_FILE = "end of file"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Token:
    """A single token with its text and [begin, end) character offsets."""

    kind: TokenKind
    text: str
    begin: int
    end: int


PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    "{": TokenKind.LEFT_CURLY,
    "}": TokenKind.RIGHT_CURLY,
    ",": TokenKind.COMMA,
}

NUMBER_KINDS = frozenset({TokenKind.INTEGER, TokenKind.FLOAT})

# Whitespace skipped between tokens (newline is a token of its own)
_BLANK = frozenset(" \t\r")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_blank(ch: str) -> bool:
    return ch in _BLANK


def is_ident_start(ch: str) -> bool:
    """Return True if ch may start an identifier."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return is_ident_start(ch) or ("0" <= ch <= "9")


def is_number_start(ch: str) -> bool:
    return ch != "" and ch in "0123456789+-."


def is_number_char(ch: str) -> bool:
    """Return True if ch belongs to a (possibly malformed) number run."""
    return is_ident_char(ch) or (ch != "" and ch in ".+-")


def classify_number(text: str) -> TokenKind:
    """Classify a greedily captured number run as INTEGER, FLOAT or UNKNOWN.

    One trailing ``f``/``F`` suffix is accepted on floats only, so ``1.5f``
    is a float while ``10f`` is unknown. Integers outside the signed 64-bit
    range are read as floats.
    """
    has_suffix = text.endswith(("f", "F"))
    body = text[:-1] if has_suffix else text

    if _INTEGER_RE.fullmatch(body) and _INT64_MIN <= _integer_value(body) <= _INT64_MAX:
        return TokenKind.UNKNOWN if has_suffix else TokenKind.INTEGER

    if _FLOAT_RE.fullmatch(body) and math.isfinite(float(body)):
        return TokenKind.FLOAT

    return TokenKind.UNKNOWN


def number_value(token: Token) -> int | float:
    """Return the numeric value of an INTEGER or FLOAT token."""
    if token.kind == TokenKind.INTEGER:
        return _integer_value(token.text)
    if token.kind == TokenKind.FLOAT:
        text = token.text
        return float(text[:-1] if text.endswith(("f", "F")) else text)
    raise ValueError(f"not a number token: {token.kind.value}")


def _integer_value(text: str) -> int | float:
    # Runs too long for int64 map to inf without converting the digits.
    digits = text.lstrip("+-").lstrip("0")
    if len(digits) > _INT64_DIGITS:
        return -math.inf if text.startswith("-") else math.inf
    value = int(digits or "0")
    return -value if text.startswith("-") else value
