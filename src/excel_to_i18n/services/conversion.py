"""Conversion of spreadsheets into per-language translation documents.

This module ties the extraction stages together:

1. Decode the input with :class:`WorkbookReader` (XLSX or CSV).
2. Select the sheet (``options.sheet_name`` or the first sheet).
3. Resolve the key, category and language columns once.
4. Walk the data rows and assemble a flat or nested document per language.
5. Wrap the documents in a :class:`ConversionResult`.

Workbook-level problems (undecodable input, missing sheets, unresolvable
columns, ambiguous configuration) produce a failed result with an error
message and no documents. Row-level problems (missing keys, empty values,
short rows) are skipped silently.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from excel_to_i18n.options import ColumnMode, ConversionOptions, InputFormat
from excel_to_i18n.services.extraction.column_resolution import resolve_columns
from excel_to_i18n.services.extraction.document_assembly import (
    Document,
    create_assembler,
)
from excel_to_i18n.services.extraction.row_extraction import RowExtractor
from excel_to_i18n.services.workbook_reader import WorkbookReader
from excel_to_i18n.utils.exceptions import (
    ErrorCode,
    I18nError,
    ParseError,
    StructuralError,
)
from excel_to_i18n.utils.logging import LogContext, get_logger, timed_operation
from excel_to_i18n.workbook import Sheet, Workbook

logger = get_logger(__name__)


@dataclass
class ConversionStats:
    """Counters describing one conversion."""

    sheet_name: str | None = None
    rows_processed: int = 0
    rows_skipped: int = 0
    entries: int = 0
    entries_per_language: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheet_name": self.sheet_name,
            "rows_processed": self.rows_processed,
            "rows_skipped": self.rows_skipped,
            "entries": self.entries,
            "entries_per_language": dict(self.entries_per_language),
        }


@dataclass
class ConversionResult:
    """Outcome of one conversion.

    A failed result never carries documents. A successful result has one
    document per resolved language, possibly empty.
    """

    success: bool
    translations: dict[str, Document] = field(default_factory=dict)
    error: str | None = None
    error_code: str | None = None
    stats: ConversionStats = field(default_factory=ConversionStats)

    def __post_init__(self) -> None:
        if not self.success:
            self.translations = {}

    @classmethod
    def succeeded(
        cls, translations: dict[str, Document], stats: ConversionStats | None = None
    ) -> ConversionResult:
        return cls(
            success=True,
            translations=translations,
            stats=stats or ConversionStats(),
        )

    @classmethod
    def failed(cls, error: I18nError) -> ConversionResult:
        return cls(
            success=False,
            error=error.message,
            error_code=error.error_code.value,
        )

    @property
    def languages(self) -> list[str]:
        return list(self.translations)

    def document(self, language: str) -> Document:
        """Return the document for ``language``.

        Raises:
            KeyError: If the language is not part of the result.
        """
        return self.translations[language]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "success": self.success,
            "translations": self.translations,
            "error": self.error,
        }
        if self.error_code:
            result["error_code"] = self.error_code
        return result

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


class ConversionService:
    """Convert spreadsheets into translation documents.

    The service keeps no state between calls; one instance can serve any
    number of conversions.
    """

    def __init__(self, reader: WorkbookReader | None = None) -> None:
        self.reader = reader or WorkbookReader()

    def convert_path(
        self, file_path: str | Path, options: ConversionOptions | None = None
    ) -> ConversionResult:
        """Convert a spreadsheet file.

        The format is taken from ``options.input_format`` or, when unset,
        from the file suffix.
        """
        opts = options or ConversionOptions()
        try:
            workbook = self.reader.read_path(
                file_path, opts.input_format, sheet_name=opts.sheet_name
            )
        except I18nError as e:
            return self._failure(e)
        return self.convert_workbook(workbook, opts)

    def convert_bytes(
        self, content: bytes, options: ConversionOptions | None = None
    ) -> ConversionResult:
        """Convert raw spreadsheet bytes (XLSX unless options say otherwise)."""
        opts = options or ConversionOptions()
        try:
            workbook = self.reader.read_bytes(
                content,
                opts.input_format or InputFormat.XLSX,
                sheet_name=opts.sheet_name,
            )
        except I18nError as e:
            return self._failure(e)
        return self.convert_workbook(workbook, opts)

    def convert_workbook(
        self, workbook: Workbook, options: ConversionOptions | None = None
    ) -> ConversionResult:
        """Convert an already decoded workbook."""
        opts = options or ConversionOptions()
        with timed_operation(logger, "conversion") as metrics:
            try:
                result = self._convert(workbook, opts)
            except I18nError as e:
                return self._failure(e)
            metrics.rows_processed = result.stats.rows_processed
            metrics.rows_skipped = result.stats.rows_skipped
            metrics.entries_emitted = result.stats.entries
            metrics.languages = len(result.translations)

        logger.log_conversion_result(
            success=True,
            languages=result.languages,
            entries=result.stats.entries,
        )
        return result

    def _convert(
        self, workbook: Workbook, options: ConversionOptions
    ) -> ConversionResult:
        sheet = self._select_sheet(workbook, options)

        with LogContext(sheet=sheet.name):
            header_row = None
            if options.column_mode is ColumnMode.HEADER:
                header_row = sheet.row_at(options.header_row_index)
            columns = resolve_columns(options, header_row, sheet_name=sheet.name)

            extractor = RowExtractor(columns, options.category_delimiters)
            assembler = create_assembler(options.key_style, columns.languages)
            assembler.add_all(
                extractor.extract(sheet.rows, options.data_start_row_index)
            )

        stats = ConversionStats(
            sheet_name=sheet.name,
            rows_processed=extractor.stats.rows_processed,
            rows_skipped=extractor.stats.rows_skipped,
            entries=assembler.entry_count,
            entries_per_language=dict(extractor.stats.entries_per_language),
        )
        return ConversionResult.succeeded(assembler.documents(), stats)

    def _select_sheet(self, workbook: Workbook, options: ConversionOptions) -> Sheet:
        if not workbook.sheet_names:
            raise StructuralError(
                "No sheets found in workbook", error_code=ErrorCode.NO_SHEETS
            )

        name = options.sheet_name or workbook.sheet_names[0]
        if name not in workbook.sheet_names:
            raise StructuralError(
                f"Sheet '{name}' not found",
                error_code=ErrorCode.SHEET_NOT_FOUND,
                sheet_name=name,
                details={"available_sheets": list(workbook.sheet_names)},
            )

        sheet = workbook.get_sheet(name)
        if sheet is None:
            raise ParseError(f"Sheet '{name}' could not be read", sheet_name=name)
        return sheet

    def _failure(self, error: I18nError) -> ConversionResult:
        logger.log_conversion_result(
            success=False,
            languages=[],
            entries=0,
            error_code=error.error_code.value,
            error_message=error.message,
        )
        return ConversionResult.failed(error)


def convert(
    content: bytes,
    options: ConversionOptions | None = None,
    **overrides: Any,
) -> ConversionResult:
    """Convert spreadsheet bytes with a default :class:`ConversionService`.

    Keyword overrides use the names accepted by
    :meth:`ConversionOptions.from_dict` and are only allowed without
    ``options``.

    Example:
        result = convert(xlsx_bytes, supported_languages=["en", "ko"])
        result.translations["en"]
    """
    if options is not None and overrides:
        raise TypeError("Pass either options or keyword overrides, not both")
    if options is None:
        try:
            options = ConversionOptions.from_dict(overrides)
        except I18nError as e:
            return ConversionResult.failed(e)
    return ConversionService().convert_bytes(content, options)
