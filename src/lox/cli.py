"""Command-line interface for Lox."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from lox.errors import LoxRuntimeError
from lox.reporter import Reporter

# sysexits-style statuses for the two error kinds
EXIT_SYNTAX_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_RUNTIME_ERROR = 70

DEFAULT_PROMPT = "> "


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    script: Path | None
    prompt: str
    debug: bool
    tokens: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="lox",
        description="Evaluate Lox expressions from a file or an interactive prompt",
    )
    p.add_argument("script", nargs="?", help="Source file (default: interactive prompt)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover lox.toml)",
    )
    p.add_argument("--prompt", default=None, metavar="TEXT", help="Interactive prompt text")
    p.add_argument("--debug", action="store_true", help="Dump the AST to stderr")
    p.add_argument("--tokens", action="store_true", help="Dump the token stream to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "lox.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    script = Path(args.script) if args.script else None
    search_dir = script.parent if script is not None else Path(".")
    if not search_dir.parts:
        search_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    prompt = DEFAULT_PROMPT
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt
    if args.prompt is not None:
        prompt = args.prompt

    debug = False
    tokens = False
    cfg_debug = config.get("debug")
    if isinstance(cfg_debug, dict):
        if isinstance(cfg_debug.get("ast"), bool):
            debug = cfg_debug["ast"]
        if isinstance(cfg_debug.get("tokens"), bool):
            tokens = cfg_debug["tokens"]
    debug = debug or args.debug
    tokens = tokens or args.tokens

    return CliOptions(script=script, prompt=prompt, debug=debug, tokens=tokens)


def run_source(
    source: str,
    reporter: Reporter,
    options: CliOptions,
    *,
    out: TextIO | None = None,
) -> None:
    """Run one source unit through scan, parse, and evaluate, printing the result."""
    from lox.interpreter import evaluate, stringify
    from lox.parser import parse
    from lox.printer import dump_ast
    from lox.scanner import scan
    from lox.tokens import format_tokens

    tokens = scan(source, reporter)
    if options.tokens:
        print(format_tokens(tokens), file=sys.stderr)
    if reporter.had_error:
        return

    expr = parse(tokens, reporter)
    if reporter.had_error:
        return
    if options.debug:
        dump_ast(expr, file=sys.stderr)

    try:
        value = evaluate(expr)
    except LoxRuntimeError as exc:
        reporter.runtime_error(exc)
        return

    print(stringify(value), file=out if out is not None else sys.stdout)


def run_file(options: CliOptions, reporter: Reporter) -> int:
    """Run a whole file as a single source unit and return the exit code."""
    assert options.script is not None
    try:
        source = options.script.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: cannot read {options.script}: {exc.strerror}", file=sys.stderr)
        return EXIT_NO_INPUT

    run_source(source, reporter, options)
    if reporter.had_error:
        return EXIT_SYNTAX_ERROR
    if reporter.had_runtime_error:
        return EXIT_RUNTIME_ERROR
    return 0


def run_prompt(options: CliOptions, reporter: Reporter, stdin: TextIO | None = None) -> int:
    """Read and run one line at a time until a blank line or end of input."""
    stdin = stdin if stdin is not None else sys.stdin
    while True:
        sys.stdout.write(options.prompt)
        sys.stdout.flush()
        line = stdin.readline()
        if not line.strip():
            break
        run_source(line, reporter, options)
        reporter.reset()
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code. Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    reporter = Reporter()
    if options.script is None:
        return run_prompt(options, reporter)
    return run_file(options, reporter)
