"""Command-line interface for cmdlang."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from cmdlang.errors import ParseError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")
DEFAULT_PROMPT = "> "


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    output_format: str
    color: bool
    show_source: bool
    keep_going: bool
    tokens: bool
    prompt: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="cmdlang",
        description="Parse cmdlang command scripts and report errors",
    )
    p.add_argument("input", nargs="?", default="-", help="Input script (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format for parsed commands (default: text)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover cmdlang.toml)",
    )
    p.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Colorize error reports (default: when stderr is a terminal)",
    )
    p.add_argument(
        "--source",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the offending source in error reports (default: on)",
    )
    p.add_argument(
        "--keep-going",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip the rest of a bad line and keep parsing",
    )
    p.add_argument("--tokens", action="store_true", help="Dump the token stream and exit")
    p.add_argument("--prompt", default=None, help="Prompt shown for interactive input")
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for debug output)",
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "cmdlang.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        input_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    diagnostics = _section(config, "diagnostics")
    parser_cfg = _section(config, "parser")
    output = _section(config, "output")

    color = sys.stderr.isatty()
    if isinstance(diagnostics.get("color"), bool):
        color = diagnostics["color"]
    if args.color is not None:
        color = args.color

    show_source = True
    if isinstance(diagnostics.get("source"), bool):
        show_source = diagnostics["source"]
    if args.source is not None:
        show_source = args.source

    keep_going = False
    if isinstance(parser_cfg.get("keep_going"), bool):
        keep_going = parser_cfg["keep_going"]
    if args.keep_going is not None:
        keep_going = args.keep_going

    output_format = "text"
    cfg_format = output.get("format")
    if cfg_format is not None:
        if cfg_format not in OUTPUT_FORMATS:
            raise ValueError(f"invalid output format in config: {cfg_format!r}")
        output_format = cfg_format
    if args.format is not None:
        output_format = args.format

    prompt = DEFAULT_PROMPT
    if isinstance(output.get("prompt"), str):
        prompt = output["prompt"]
    if args.prompt is not None:
        prompt = args.prompt

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        output_format=output_format,
        color=color,
        show_source=show_source,
        keep_going=keep_going,
        tokens=args.tokens,
        prompt=prompt,
    )


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(options: CliOptions, stream: TextIO, out: TextIO, interactive: bool = False) -> int:
    """Parse commands from *stream* and write them to *out*. Returns the exit code."""
    from cmdlang.debug import command_to_dict, dump_commands, dump_tokens
    from cmdlang.parser import Parser, recover
    from cmdlang.source import StreamSource

    source = StreamSource(stream, prompt=options.prompt if interactive else None)
    parser = Parser(source, color=options.color, show_source=options.show_source)

    if options.tokens:
        dump_tokens(parser.tokenizer, file=out)
        return 0

    collected = []
    failures = 0
    while True:
        try:
            command = parser.parse_command()
        except ParseError as exc:
            failures += 1
            print(exc.message, file=sys.stderr)
            if not options.keep_going or not recover(parser, exc):
                break
            continue
        if command.is_empty:
            break
        if options.output_format == "json":
            collected.append(command_to_dict(command))
        else:
            dump_commands([command], file=out)
            out.flush()

    if options.output_format == "json":
        json.dump(collected, out, indent=2)
        out.write("\n")

    logger.info("finished with %d error(s)", failures)
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        options = resolve_options(args)
    except (ValueError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    with ExitStack() as stack:
        try:
            if options.input_file is None:
                stream: TextIO = sys.stdin
                interactive = sys.stdin.isatty()
            else:
                stream = stack.enter_context(open(options.input_file, encoding="utf-8"))
                interactive = False
            out: TextIO = sys.stdout
            if options.output_file:
                out = stack.enter_context(open(options.output_file, "w", encoding="utf-8"))
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        return run(options, stream, out, interactive=interactive)
