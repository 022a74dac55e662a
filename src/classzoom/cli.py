"""Command-line interface for classzoom."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from classzoom.config import PARSERS, load_settings
from classzoom.graph import UnknownTypeError
from classzoom.pipeline import run


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {number}")
    return number


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="classzoom",
        description="Draw PlantUML class diagrams of a Java source tree, "
        "or of the types connected to one class.",
    )
    parser.add_argument("-s", "--src", required=True, help="Source folder")
    parser.add_argument("-d", "--dest", required=True, help="Destination folder")
    parser.add_argument(
        "-n", "--name", required=True, help="Name of generated plantuml file"
    )
    parser.add_argument(
        "-c",
        "--class",
        dest="focus",
        default=None,
        help="Fully qualified class to center the diagram on (default: all classes)",
    )
    parser.add_argument(
        "--parser",
        choices=PARSERS,
        default=None,
        help="Parser backend (default: from config, else tree-sitter)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of parallel extraction workers (default: one per CPU)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    if not args.name.strip() or not args.src.strip() or not args.dest.strip():
        parser.error("-s, -d and -n should not be empty")
    src = Path(args.src)
    dest = Path(args.dest)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("classzoom").setLevel(logging.DEBUG)

    if not src.is_dir():
        parser.error(f"source folder not found: {src}")

    settings = load_settings(src)
    if args.parser:
        settings.parser = args.parser
    if args.workers is not None:
        settings.workers = args.workers

    try:
        out_path = run(
            src,
            dest,
            args.name.strip(),
            focus=args.focus,
            settings=settings,
        )
    except UnknownTypeError:
        print(f"error: class {args.focus} was not found under {src}", file=sys.stderr)
        sys.exit(1)

    print(out_path)
