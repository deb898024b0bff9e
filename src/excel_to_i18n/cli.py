"""Command line interface for converting spreadsheets to translation files.

Usage:
    excel-to-i18n translations.xlsx -l en,ko -o src/locales
    excel-to-i18n translations.xlsx --header-languages --nested --stdout
    excel-to-i18n translations.xlsx -l en,ko --watch
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from excel_to_i18n.config import settings
from excel_to_i18n.options import (
    DEFAULT_CATEGORY_COLUMN_INDEX,
    DEFAULT_CATEGORY_DELIMITERS,
    DEFAULT_DATA_START_ROW_INDEX,
    DEFAULT_HEADER_ROW_INDEX,
    DEFAULT_KEY_COLUMN_INDEX,
    DEFAULT_VALUE_START_COLUMN_INDEX,
    ColumnMode,
    ConversionOptions,
    InputFormat,
    KeyStyle,
)
from excel_to_i18n.output.json_writer import TranslationFileWriter
from excel_to_i18n.services.conversion import ConversionService
from excel_to_i18n.utils.exceptions import I18nError
from excel_to_i18n.utils.logging import configure_logging
from excel_to_i18n.version import __version__
from excel_to_i18n.watcher import watch_file


def _non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def _delimiters(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("at least one delimiter is required")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="excel-to-i18n",
        description="Convert a translation spreadsheet into per-language JSON.",
    )
    parser.add_argument("input", help="Path to an .xlsx or .csv spreadsheet")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help=f"Directory for translation files (default: {settings.output_dir})",
    )
    parser.add_argument(
        "-l",
        "--languages",
        default="",
        help="Comma-separated language codes, in column order",
    )
    parser.add_argument(
        "--header-languages",
        action="store_true",
        help="Read language codes from the header row",
    )
    parser.add_argument(
        "--nested",
        action="store_true",
        help="Build nested objects instead of 'category/key' keys",
    )
    parser.add_argument("--sheet", default=None, help="Sheet to convert")

    category = parser.add_mutually_exclusive_group()
    category.add_argument(
        "--category-column",
        type=_non_negative,
        default=DEFAULT_CATEGORY_COLUMN_INDEX,
        help="Zero-based category column (default: %(default)s)",
    )
    category.add_argument(
        "--no-category",
        action="store_true",
        help="The sheet has no category column",
    )

    parser.add_argument(
        "--key-column",
        type=_non_negative,
        default=DEFAULT_KEY_COLUMN_INDEX,
        help="Zero-based key column (default: %(default)s)",
    )
    parser.add_argument(
        "--value-start-column",
        type=_non_negative,
        default=DEFAULT_VALUE_START_COLUMN_INDEX,
        help="Zero-based first language column (default: %(default)s)",
    )
    parser.add_argument(
        "--header-row",
        type=_non_negative,
        default=DEFAULT_HEADER_ROW_INDEX,
        help="Zero-based header row (default: %(default)s)",
    )
    parser.add_argument(
        "--data-start-row",
        type=_non_negative,
        default=DEFAULT_DATA_START_ROW_INDEX,
        help="Zero-based first data row (default: %(default)s)",
    )
    parser.add_argument(
        "--category-header",
        default=None,
        help="Header text of the category column (header mode)",
    )
    parser.add_argument(
        "--key-header",
        default=None,
        help="Header text of the key column (header mode)",
    )
    parser.add_argument(
        "--category-delimiters",
        type=_delimiters,
        default=DEFAULT_CATEGORY_DELIMITERS,
        help="Characters that split a category into key path segments "
        "(default: %(default)s)",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in InputFormat],
        default=None,
        help="Input format (default: from the file suffix)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--stdout",
        action="store_true",
        help="Print the conversion result as JSON instead of writing files",
    )
    mode.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and convert again whenever the spreadsheet changes",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def options_from_args(args: argparse.Namespace) -> ConversionOptions:
    """Translate parsed arguments into conversion options."""
    languages = [code.strip() for code in args.languages.split(",")]
    return ConversionOptions(
        supported_languages=[code for code in languages if code],
        category_column_index=None if args.no_category else args.category_column,
        key_column_index=args.key_column,
        value_start_column_index=args.value_start_column,
        sheet_name=args.sheet,
        header_row_index=args.header_row,
        data_start_row_index=args.data_start_row,
        key_style=KeyStyle.NESTED if args.nested else KeyStyle.FLAT,
        column_mode=(
            ColumnMode.HEADER if args.header_languages else ColumnMode.POSITIONAL
        ),
        category_header=args.category_header,
        key_header=args.key_header,
        category_delimiters=args.category_delimiters,
        input_format=InputFormat(args.format) if args.format else None,
    )


def convert_and_write(
    service: ConversionService,
    input_path: str,
    options: ConversionOptions,
    writer: TranslationFileWriter,
) -> int:
    """Convert ``input_path`` once and write its translation files.

    Failures are reported on stderr. Returns the exit status.
    """
    result = service.convert_path(input_path, options)
    if not result.success:
        sys.stderr.write(f"error: [{result.error_code}] {result.error}\n")
        return 1

    try:
        paths = writer.write(result)
    except I18nError as e:
        sys.stderr.write(f"error: {e}\n")
        return 1

    for path in paths:
        sys.stdout.write(f"{path}\n")
    sys.stdout.flush()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter and return the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, use_structured_formatter=True)

    service = ConversionService()
    options = options_from_args(args)

    if args.stdout:
        result = service.convert_path(args.input, options)
        sys.stdout.write(result.to_json(indent=settings.json_indent or None) + "\n")
        return 0 if result.success else 1

    writer = TranslationFileWriter(
        output_dir=args.output_dir or settings.output_dir,
        filename_template=settings.output_filename_template,
        indent=settings.json_indent or None,
    )
    exit_code = convert_and_write(service, args.input, options, writer)
    if not args.watch:
        return exit_code

    # A missing or broken spreadsheet is converted once it is added or fixed.
    try:
        watch_file(
            args.input, lambda: convert_and_write(service, args.input, options, writer)
        )
    except FileNotFoundError as e:
        sys.stderr.write(f"error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
