"""Parsed command values: the Command record and its typed arguments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ArgumentKind(Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    INTEGER_VECTOR = "integer vector"
    FLOAT_VECTOR = "float vector"


@dataclass(frozen=True, slots=True)
class Identifier:
    """Bare identifier argument, e.g. ``name``."""

    kind: ClassVar[ArgumentKind] = ArgumentKind.IDENTIFIER
    value: str


@dataclass(frozen=True, slots=True)
class String:
    """Quoted string argument with escapes resolved."""

    kind: ClassVar[ArgumentKind] = ArgumentKind.STRING
    value: str


@dataclass(frozen=True, slots=True)
class Integer:
    kind: ClassVar[ArgumentKind] = ArgumentKind.INTEGER
    value: int


@dataclass(frozen=True, slots=True)
class Float:
    kind: ClassVar[ArgumentKind] = ArgumentKind.FLOAT
    value: float


@dataclass(frozen=True, slots=True)
class IntegerVector:
    """Number list made only of integer literals."""

    kind: ClassVar[ArgumentKind] = ArgumentKind.INTEGER_VECTOR
    values: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class FloatVector:
    """Number list with at least one float literal; integers are widened."""

    kind: ClassVar[ArgumentKind] = ArgumentKind.FLOAT_VECTOR
    values: tuple[float, ...]


Argument = Identifier | String | Integer | Float | IntegerVector | FloatVector


@dataclass(frozen=True, slots=True)
class Command:
    """One parsed command: a name and its positional arguments.

    The empty command (no name) is returned once the input is exhausted.
    """

    name: str = ""
    arguments: tuple[Argument, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.name
