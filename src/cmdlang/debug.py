"""Human-readable and JSON dumps of commands and tokens."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Any, TextIO

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
from cmdlang.tokens import Token


def dump_commands(commands: Iterable[Command], *, file: TextIO = sys.stdout) -> None:
    """Print each command and its arguments as an indented tree to *file*."""
    for command in commands:
        file.write(f"Command {command.name}\n")
        for arg in command.arguments:
            file.write(f"  {format_argument(arg)}\n")


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stdout) -> None:
    """Print one token per line with its offsets."""
    for tok in tokens:
        file.write(f"{tok.begin:>5}-{tok.end:<5} {tok.kind.name:<13} {tok.text!r}\n")


def format_argument(arg: Argument) -> str:
    if isinstance(arg, Identifier):
        return f"Identifier({arg.value})"
    if isinstance(arg, String):
        return f"String({arg.value!r})"
    if isinstance(arg, (Integer, Float)):
        return f"{type(arg).__name__}({arg.value!r})"
    if isinstance(arg, (IntegerVector, FloatVector)):
        items = ", ".join(repr(v) for v in arg.values)
        return f"{type(arg).__name__}({items})"
    raise TypeError(f"not an argument: {type(arg).__name__}")


def command_to_dict(command: Command) -> dict[str, Any]:
    """Return a JSON-serialisable view of a command."""
    arguments = []
    for arg in command.arguments:
        if isinstance(arg, (IntegerVector, FloatVector)):
            value: Any = list(arg.values)
        else:
            value = arg.value
        arguments.append({"kind": arg.kind.value, "value": value})
    return {"name": command.name, "arguments": arguments}
