"""Command-line interface for fuselex."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from fuselex.config import DIALECTS, LexerOptions, load_options
from fuselex.errors import ConfigError, Diagnostic, collect_diagnostics
from fuselex.log import get_logger

logger = get_logger(__name__)

FORMATS = ("tokens", "json", "html")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    lexer: LexerOptions
    strict: bool
    detect: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="fuselex",
        description="Tokenize Fuse source files",
    )
    p.add_argument("input", help="Input .fuse file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="tokens",
        help="Output format (default: tokens)",
    )
    p.add_argument(
        "--dialect",
        choices=DIALECTS,
        default=None,
        help="Grammar dialect (default: fuse)",
    )
    p.add_argument(
        "--no-builtins",
        action="store_true",
        help="Do not highlight builtin function names",
    )
    p.add_argument(
        "--disable-module",
        action="append",
        default=[],
        metavar="NAME",
        help="Builtin name to exclude from highlighting (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover fuselex.toml)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any input is unrecognized",
    )
    p.add_argument(
        "--detect",
        action="store_true",
        help="Only report whether the file looks like Fuse source",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    lexer = load_options(config_path, input_dir)

    disabled = tuple(lexer.disabled_modules) + tuple(
        m for m in args.disable_module if m not in lexer.disabled_modules
    )
    lexer = lexer.merged(
        function_highlighting=False if args.no_builtins else None,
        disabled_modules=disabled,
        dialect=args.dialect,
    )

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=args.format,
        lexer=lexer,
        strict=args.strict,
        detect=args.detect,
        debug=args.debug,
    )


def render_file(options: CliOptions) -> tuple[str, list[Diagnostic]]:
    """Tokenize the input file; return (rendered output, diagnostics)."""
    from fuselex.lexer import FuseLexer
    from fuselex.render import dump_tokens, render_html, render_json, render_tokens

    source = options.input_file.read_text(encoding="utf-8")
    tokens = list(FuseLexer(options.lexer).tokenize(source))

    if options.debug:
        dump_tokens(tokens, file=sys.stderr)

    diagnostics = collect_diagnostics(tokens, source)
    if diagnostics:
        logger.debug("%d unrecognized input run(s) in %s", len(diagnostics), options.input_file)

    match options.format:
        case "json":
            output = render_json(tokens)
        case "html":
            output = render_html(tokens)
        case _:
            output = render_tokens(tokens)
    return output, diagnostics


def detect_file(path: Path) -> bool:
    """Return True if path looks like Fuse source by name or shebang."""
    from fuselex.metadata import detect, matches_filename

    if matches_filename(path):
        return True
    return detect(path.read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        if options.detect:
            found = detect_file(options.input_file)
            print("fuse" if found else "unknown")
            return 0 if found else 1
        output, diagnostics = render_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if options.strict and diagnostics:
        for diag in diagnostics:
            print(diag.format(str(options.input_file)), file=sys.stderr)
        return 1
    return 0
