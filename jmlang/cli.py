"""Command-line front end: run a JML file and print or save the result as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import urllib.request
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from .context import Context
from .errors import EvalError
from .interpreter import eval_with_ctx_source
from .parser import ParseError, parse
from .values import from_json, to_json

_LOGGER_NAME = "jmlang"
logger = logging.getLogger(_LOGGER_NAME)

_BANNER = r"""
    __ _____ __
 __|  |     |  |
|  |  | | | |  |__
|_____|_|_|_|_____|"""


def parse_variable(text: str) -> Tuple[str, str]:
    """Split ``name=path`` into its two parts at the first ``=``."""
    name, sep, path = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(
            f"Invalid variable format: '{text}'. Expected format 'name=path'."
        )
    return name, path


def load_json(path: str) -> Any:
    """Read JSON data from an http(s) URL or a local file."""
    if path.startswith(("http://", "https://")):
        with urllib.request.urlopen(path) as response:
            text = response.read().decode("utf-8")
    else:
        text = Path(path).read_text(encoding="utf-8")
    return json.loads(text)


def write_output_to_json(output_path: Any, value: Any) -> None:
    """Write a JML value to ``output_path`` as pretty-printed JSON."""
    data = to_json(value)
    with open(output_path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, ensure_ascii=False)


def setup_logging() -> None:
    """Send info-level log records of the package to standard error."""
    if not any(getattr(h, "_jmlang", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._jmlang = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the ``jml`` command."""
    parser = argparse.ArgumentParser(
        prog="jml",
        description=_BANNER + "\n\nJML Command-Line Tool.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-l", "--log", action="store_true", help="Turn logging on or off"
    )
    commands = parser.add_subparsers(dest="command", required=True)
    run = commands.add_parser(
        "run", help="Run the JML parser and evaluator on a given file."
    )
    run.add_argument(
        "-f", "--file", type=Path, required=True, help="Input JML file to process."
    )
    run.add_argument(
        "-o", "--output", type=Path, default=None, help="Output file for JSON result."
    )
    run.add_argument(
        "-v",
        "--variables",
        type=parse_variable,
        action="append",
        default=[],
        help="Variable names and JSON files or URLs",
    )
    return parser


def _run(file: Path, output: Optional[Path], variables: List[Tuple[str, str]]) -> None:
    source = file.read_text(encoding="utf-8")
    logger.info("Processing file: %s", file)

    ctx = Context()
    for name, path in variables:
        logger.info("Loading variable '%s' from '%s'", name, path)
        ctx.bind_value(name, from_json(load_json(path)))
        logger.info("Loaded JSON data for '%s'", name)

    program = parse(source)
    try:
        result = eval_with_ctx_source(program, source, ctx)
    except EvalError as exc:
        raise _Reported(exc.render(source)) from exc

    if output is not None:
        logger.info("Output will be written to: %s", output)
        write_output_to_json(output, result)
    else:
        logger.info("No output file specified. Printing to console.")
        print(json.dumps(to_json(result), indent=2, ensure_ascii=False))


class _Reported(Exception):
    """An error whose message is already fully rendered."""


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``jml`` command; returns the exit status."""
    args = build_parser().parse_args(argv)
    if args.log:
        setup_logging()

    try:
        if args.command == "run":
            _run(args.file, args.output, args.variables)
    except _Reported as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except ParseError as exc:
        print(f"parse error: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())