"""Command line interface for running JSON assertion programs."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from types import ModuleType

from .encoding import EncodingError
from .interpreter import RunOptions, ShapeMismatchError, interpret, run_test
from .loader import DocumentLoadError, load_document
from .module_loading import ModuleLoadError, load_attribute
from .program import Program


class CLIError(RuntimeError):
    """Raised when CLI execution fails."""


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="json-assertions",
        description="Check that a JSON document corresponds to the value it encodes",
    )
    parser.add_argument(
        "--program",
        required=True,
        help="Program to run, as FILE.py:ATTRIBUTE",
    )
    parser.add_argument(
        "--host",
        required=True,
        help="Host value the document corresponds to, as FILE.py:ATTRIBUTE",
    )
    parser.add_argument(
        "--document",
        help="Stored JSON or YAML document to check instead of encoding the host value",
    )
    parser.add_argument(
        "--root-label",
        default=RunOptions.root_label,
        help="Label for the document root in failure messages",
    )
    parser.add_argument(
        "--index-in-failures",
        action="store_true",
        help="Name the missing array position in lookup failures",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    options = RunOptions(
        root_label=args.root_label,
        index_in_failures=bool(args.index_in_failures),
    )

    try:
        failures = _run(args=args, options=options)
    except (
        CLIError,
        DocumentLoadError,
        EncodingError,
        ModuleLoadError,
        ShapeMismatchError,
    ) as exc:
        parser.error(str(exc))
        return 2

    for failure in failures:
        print(failure)
    if failures:
        print(f"Failures: {len(failures)}")
        return 1
    return 0


def _run(*, args: argparse.Namespace, options: RunOptions) -> list[str]:
    loaded: dict[Path, ModuleType] = {}
    program = load_attribute(args.program, loaded=loaded)
    if not isinstance(program, Program):
        raise CLIError(f"{args.program} is not a program, got {type(program).__name__}")
    host = load_attribute(args.host, loaded=loaded)

    if args.document is None:
        return run_test(program, host, options=options)
    document = load_document(Path(args.document))
    return interpret(program, document, host, options=options)


if __name__ == "__main__":
    raise SystemExit(main())
