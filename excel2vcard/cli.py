"""
Command line entry point.

    excel2vcard convert -i contacts.xlsx -o cards/
    excel2vcard columns
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .convert import convert_bytes, write_cards
from .normalize import MissingHeaderError
from .rules import FIELD_VOCABULARY
from .sources import UnreadableFileError, UnsupportedFileError, check_supported

logger = logging.getLogger(__name__)


def run_convert(input_file: str, output_dir: str, escape: bool = False) -> int:
    input_path = Path(input_file)
    if not input_path.exists():
        logger.error("Error: File '%s' not found", input_file)
        return 1
    try:
        check_supported(input_path.name)
    except UnsupportedFileError as e:
        logger.error("Error: %s", e)
        return 1

    out_path = Path(output_dir)
    logger.info("Reading %s...", input_file)
    try:
        result = convert_bytes(input_path.read_bytes(), input_path.name, escape=escape)
    except (MissingHeaderError, UnsupportedFileError, UnreadableFileError) as e:
        logger.error("Error: %s", e)
        return 1

    if result.records == 0:
        logger.error("No contacts found in file")
        return 1

    _, failed = write_cards(result, out_path)

    created = len(result.cards) - failed
    logger.info("")
    logger.info("Conversion complete: %d vCard(s) created, %d failed", created, failed + len(result.skipped))
    logger.info("Output directory: %s", out_path.resolve())
    return 0


def print_columns() -> int:
    print("Supported column names (case-insensitive):")
    print("   " + ", ".join(FIELD_VOCABULARY))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="excel2vcard",
        description="Convert an Excel/CSV file with address data to vCard files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    conv = sub.add_parser("convert", help="Write one .vcf per table row")
    conv.add_argument("-i", "--input", required=True, help="Path to Excel or CSV file")
    conv.add_argument("-o", "--output", default=".", help="Output directory (default: .)")
    conv.add_argument("--escape", action="store_true", help="Escape ; , \\ and newlines in values")

    sub.add_parser("columns", help="Show supported column names")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stdout,
    )

    if args.command == "columns":
        return print_columns()
    return run_convert(args.input, args.output, escape=args.escape)


if __name__ == "__main__":
    sys.exit(main())
