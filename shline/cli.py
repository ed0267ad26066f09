"""Command-line interface for shline."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .context import build_context
from .exceptions import ShlineError
from .expansion import build_argv
from .printer import format_pipeline, pipeline_to_dict
from .shell_parser import ParseResult, parse_with_diagnostics


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Add a variable to the expansion context (repeatable).",
    )
    parser.add_argument(
        "--env",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Seed the expansion context from the process environment.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of recovering from malformed input.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parser recoveries to stderr.",
    )


def _report_diagnostics(result: ParseResult) -> None:
    for diagnostic in result.diagnostics:
        sys.stderr.write(f"warning: {diagnostic}\n")


def _write_argv(result: ParseResult, context: dict[str, object]) -> None:
    for command in result.pipeline.commands:
        sys.stdout.write(json.dumps(build_argv(command, context)) + "\n")


def _run_parse(args: argparse.Namespace) -> int:
    result = parse_with_diagnostics(args.text, strict=args.strict)
    if args.json:
        sys.stdout.write(json.dumps(pipeline_to_dict(result.pipeline), indent=2) + "\n")
    else:
        sys.stdout.write(format_pipeline(result.pipeline) + "\n")
    _report_diagnostics(result)
    return 0


def _run_argv(args: argparse.Namespace) -> int:
    context = build_context(use_environ=args.env, assignments=args.var)
    result = parse_with_diagnostics(args.text, strict=args.strict)
    _write_argv(result, context)
    _report_diagnostics(result)
    return 0


def _run_shell(args: argparse.Namespace) -> int:
    context = build_context(use_environ=args.env, assignments=args.var)
    try:
        while True:
            line = input("shline> ")
            if line.strip() in {":q", "exit", "quit"}:
                return 0
            if not line.strip():
                continue
            try:
                result = parse_with_diagnostics(line, strict=args.strict)
            except ShlineError as exc:
                sys.stderr.write(f"error: {exc}\n")
                continue
            sys.stdout.write(format_pipeline(result.pipeline) + "\n")
            _write_argv(result, context)
            _report_diagnostics(result)
    except (EOFError, KeyboardInterrupt):
        return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="shline")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    parse_parser = subparsers.add_parser("parse", help="Dump the syntax tree of a command line")
    _add_common_flags(parse_parser)
    parse_parser.add_argument("--json", action="store_true", help="Emit the tree as JSON.")
    parse_parser.add_argument("text", help="Command line to parse")
    parse_parser.set_defaults(func=_run_parse)

    argv_parser = subparsers.add_parser("argv", help="Print the expanded argv of each command")
    _add_common_flags(argv_parser)
    argv_parser.add_argument("text", help="Command line to expand")
    argv_parser.set_defaults(func=_run_argv)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive parse loop")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        exit_code = args.func(args)
    except ShlineError as exc:
        sys.stderr.write(f"error: {exc}\n")
        exit_code = 2
    raise SystemExit(exit_code)


__all__ = ["main"]
