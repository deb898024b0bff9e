"""Resolution of the category, key and language columns of a sheet.

Two modes are supported and exactly one is active per conversion:

- ``ColumnMode.POSITIONAL``: languages come from ``supported_languages`` and
  occupy consecutive columns starting at ``value_start_column_index``.
- ``ColumnMode.HEADER``: every non-empty header cell from
  ``value_start_column_index`` onward names a language column. The key and
  category columns may also be located by header text.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from excel_to_i18n.options import (
    ColumnMode,
    ConversionOptions,
    is_safe_language_code,
)
from excel_to_i18n.services.extraction.cell_coercion import coerce_cell
from excel_to_i18n.utils.exceptions import ErrorCode, StructuralError
from excel_to_i18n.utils.logging import get_logger
from excel_to_i18n.workbook import Cell

logger = get_logger(__name__)


@dataclass
class ResolvedColumns:
    """Physical column layout of a sheet."""

    key_column_index: int
    category_column_index: int | None = None
    language_columns: list[tuple[str, int]] = field(default_factory=list)

    @property
    def languages(self) -> list[str]:
        return [language for language, _ in self.language_columns]

    def column_of(self, language: str) -> int | None:
        for code, index in self.language_columns:
            if code == language:
                return index
        return None


def resolve_columns(
    options: ConversionOptions,
    header_row: Sequence[Cell] | None = None,
    sheet_name: str | None = None,
) -> ResolvedColumns:
    """Resolve the column layout for a sheet.

    Args:
        options: Conversion options.
        header_row: Cells of the header row, or None when the sheet has no
            row at ``options.header_row_index``. Only read in header mode.
        sheet_name: Sheet name used in error details.

    Returns:
        The resolved column layout.

    Raises:
        StructuralError: If the configuration is ambiguous, the header row is
            missing in header mode, a named column is absent, or no language
            column can be resolved.
    """
    if options.column_mode is ColumnMode.HEADER:
        columns = _resolve_from_header(options, header_row, sheet_name)
    else:
        columns = _resolve_positional(options, sheet_name)

    logger.info(
        "Resolved columns",
        mode=options.column_mode.value,
        key=columns.key_column_index,
        category=columns.category_column_index,
        languages=", ".join(
            f"{lang}:{idx}" for lang, idx in columns.language_columns
        ),
    )
    return columns


def _resolve_positional(
    options: ConversionOptions, sheet_name: str | None
) -> ResolvedColumns:
    if options.uses_header_names:
        raise StructuralError(
            "category_header/key_header require header column mode; "
            "positional mode addresses columns by index only",
            error_code=ErrorCode.AMBIGUOUS_CONFIGURATION,
            sheet_name=sheet_name,
            details={"column_mode": options.column_mode.value},
        )

    key_index = _check_index(options.key_column_index, "key", sheet_name)
    category_index = _check_optional_index(
        options.category_column_index, sheet_name
    )

    if not options.supported_languages:
        raise StructuralError(
            "Positional column mode requires at least one supported language",
            error_code=ErrorCode.NO_LANGUAGE_COLUMNS,
            sheet_name=sheet_name,
        )

    columns = ResolvedColumns(
        key_column_index=key_index,
        category_column_index=category_index,
    )
    reserved = {key_index, category_index}
    for offset, language in enumerate(options.supported_languages):
        column = options.value_start_column_index + offset
        if column in reserved:
            raise StructuralError(
                f"Language '{language}' column {column} overlaps the key or "
                "category column",
                error_code=ErrorCode.COLUMN_CONFLICT,
                sheet_name=sheet_name,
                details={"language": language, "column": column},
            )
        _add_language(columns, language, column)
    return columns


def _resolve_from_header(
    options: ConversionOptions,
    header_row: Sequence[Cell] | None,
    sheet_name: str | None,
) -> ResolvedColumns:
    if header_row is None:
        raise StructuralError(
            f"Header row {options.header_row_index} not found",
            error_code=ErrorCode.HEADER_ROW_OUT_OF_RANGE,
            sheet_name=sheet_name,
            details={"header_row_index": options.header_row_index},
        )

    headers = [coerce_cell(cell).strip() for cell in header_row]

    if options.key_header is not None:
        key_index = _find_header(headers, options.key_header)
        if key_index is None:
            raise StructuralError(
                f"No '{options.key_header}' column in header row",
                error_code=ErrorCode.KEY_COLUMN_NOT_FOUND,
                sheet_name=sheet_name,
                details={"headers": headers},
            )
    else:
        key_index = _check_index(options.key_column_index, "key", sheet_name)

    category_index: int | None
    if options.category_header is not None:
        category_index = _find_header(headers, options.category_header)
        if category_index is None:
            raise StructuralError(
                f"No '{options.category_header}' column in header row",
                error_code=ErrorCode.CATEGORY_COLUMN_NOT_FOUND,
                sheet_name=sheet_name,
                details={"headers": headers},
            )
    else:
        category_index = _check_optional_index(
            options.category_column_index, sheet_name
        )

    known = set(options.supported_languages)
    columns = ResolvedColumns(
        key_column_index=key_index,
        category_column_index=category_index,
    )
    for index in range(max(options.value_start_column_index, 0), len(headers)):
        if index in (key_index, category_index):
            continue
        code = headers[index]
        if not code:
            continue
        if known and code not in known:
            logger.debug("Ignoring header column", column=index, header=code)
            continue
        if not is_safe_language_code(code):
            logger.warning(
                "Ignoring header column with unusable language code",
                column=index,
                header=code,
            )
            continue
        _add_language(columns, code, index)

    if not columns.language_columns:
        raise StructuralError(
            "No language columns found in header row",
            error_code=ErrorCode.NO_LANGUAGE_COLUMNS,
            sheet_name=sheet_name,
            details={
                "headers": headers,
                "value_start_column_index": options.value_start_column_index,
            },
        )
    return columns


def _add_language(columns: ResolvedColumns, language: str, index: int) -> None:
    existing = columns.column_of(language)
    if existing is not None:
        logger.warning(
            "Duplicate language column ignored",
            language=language,
            column=index,
            kept_column=existing,
        )
        return
    columns.language_columns.append((language, index))


def _find_header(headers: list[str], name: str) -> int | None:
    wanted = name.strip().casefold()
    for index, header in enumerate(headers):
        if header.casefold() == wanted:
            return index
    return None


def _check_index(index: int, role: str, sheet_name: str | None) -> int:
    if index < 0:
        raise StructuralError(
            f"Invalid {role} column index: {index}",
            error_code=ErrorCode.KEY_COLUMN_NOT_FOUND,
            sheet_name=sheet_name,
        )
    return index


def _check_optional_index(index: int | None, sheet_name: str | None) -> int | None:
    if index is None:
        return None
    if index < 0:
        raise StructuralError(
            f"Invalid category column index: {index}",
            error_code=ErrorCode.CATEGORY_COLUMN_NOT_FOUND,
            sheet_name=sheet_name,
        )
    return index
