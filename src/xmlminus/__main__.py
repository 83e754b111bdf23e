#!/usr/bin/env python3
"""Command-line interface for XMLMinus."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import NoReturn

from . import XMLMinus
from .errors import (
    DuplicateAttributeError,
    InternalAutomatonError,
    TagMismatchError,
    XMLMinusError,
)
from .serialize import GRAMMAR_TEXT, format_table, format_tokens

# Exit status per error type; any other XMLMinusError exits with 1.
_EXIT_CODES: dict[type[XMLMinusError], int] = {
    TagMismatchError: 2,
    DuplicateAttributeError: 3,
    InternalAutomatonError: 4,
}


def _get_version() -> str:
    try:
        return version("xmlminus")
    except PackageNotFoundError:  # pragma: no cover
        return "dev"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xmlminus",
        description="Validate an XML-- document and print its rightmost derivation in reverse.",
        epilog=(
            "Examples:\n"
            "  xmlminus input0.xml\n"
            "  cat input0.xml | xmlminus -\n"
            "  xmlminus input0.xml --tokens\n"
            "  xmlminus --grammar\n"
            "\n"
            "If you don't have the 'xmlminus' command available, use:\n"
            "  python -m xmlminus ...\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="XML-- file to parse, or '-' to read from stdin",
    )
    parser.add_argument(
        "--grammar",
        action="store_true",
        help="Print the grammar used by the parser and exit",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Print the ACTION/GOTO parse table and exit",
    )
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--tokens",
        action="store_true",
        help="Print the token stream instead of the derivation",
    )
    output_group.add_argument(
        "--rightmost",
        action="store_true",
        help="Print the derivation starting from the start symbol",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject characters that do not start any token",
    )
    parser.add_argument(
        "--encoding",
        help="Encoding of the input (default: BOM, then UTF-8)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log tokenizer and automaton activity to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"xmlminus {_get_version()}",
    )

    args = parser.parse_args(argv)

    if not args.path and not (args.grammar or args.table):
        parser.print_help(sys.stderr)
        raise SystemExit(1)

    return args


def _read_document(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()

    return Path(path).read_bytes()


def main(argv: list[str] | None = None) -> NoReturn | None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.grammar:
        sys.stdout.write(GRAMMAR_TEXT)
        return None

    if args.table:
        sys.stdout.write(format_table())
        sys.stdout.write("\n")
        return None

    try:
        data = _read_document(args.path)
    except OSError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1) from e

    try:
        doc = XMLMinus(data, encoding=args.encoding, strict=args.strict)
    except XMLMinusError as e:
        print(f"Error - {e}", file=sys.stderr)
        print("Parsing terminated...", file=sys.stderr)
        raise SystemExit(_EXIT_CODES.get(type(e), 1)) from e

    if args.tokens:
        sys.stdout.write(format_tokens(doc.tokens))
        sys.stdout.write("\n")
        return None

    sys.stdout.write(doc.to_text(rightmost=args.rightmost))
    sys.stdout.write("\n\nDocument parsed successfully!\n")
    return None


if __name__ == "__main__":
    main()
