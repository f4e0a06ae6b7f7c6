"""cmdlang command-language tokenizer, parser and diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdlang.ast import Command

__version__ = "0.1.0"


def parse(source: str, *, color: bool = False, show_source: bool = True) -> list[Command]:
    """Parse every command in source text, raising ParseError on the first failure."""
    from cmdlang.parser import parse as _parse

    return _parse(source, color=color, show_source=show_source)
