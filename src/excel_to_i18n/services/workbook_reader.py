"""Spreadsheet decoding for XLSX workbooks and CSV files."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from zipfile import BadZipFile

import chardet
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from excel_to_i18n.options import InputFormat
from excel_to_i18n.utils.exceptions import (
    EncodingError,
    I18nFileNotFoundError,
    ParseError,
    UnsupportedFormatError,
)
from excel_to_i18n.utils.logging import get_logger
from excel_to_i18n.workbook import Cell, Sheet, Workbook

logger = get_logger(__name__)


class WorkbookReader:
    """Decode spreadsheet bytes into a :class:`Workbook`.

    XLSX files are read with openpyxl using cached formula values. Only the
    requested sheet (or the first sheet when none is requested) has its rows
    materialized; every sheet name is still listed.

    CSV files become a single sheet named ``Sheet1`` with text cells. The
    encoding is detected with chardet and the delimiter with ``csv.Sniffer``.
    """

    CSV_SHEET_NAME = "Sheet1"

    CSV_DELIMITERS = ",;\t|"

    # Common encodings to try if chardet fails
    FALLBACK_ENCODINGS = ["utf-8", "cp1252", "latin-1"]

    # Minimum confidence threshold for encoding detection
    MIN_ENCODING_CONFIDENCE = 0.5

    def read_path(
        self,
        file_path: str | Path,
        input_format: InputFormat | None = None,
        sheet_name: str | None = None,
    ) -> Workbook:
        """Read a spreadsheet file.

        Args:
            file_path: Path to an ``.xlsx`` or ``.csv`` file.
            input_format: Explicit format; inferred from the suffix when None.
            sheet_name: Sheet to materialize (XLSX only).

        Raises:
            I18nFileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the format cannot be determined.
            ParseError: If the file cannot be decoded.
        """
        path = Path(file_path)
        if not path.exists():
            raise I18nFileNotFoundError(str(path))

        fmt = input_format or InputFormat.from_path(path)
        if fmt is None:
            raise UnsupportedFormatError(
                f"Unsupported spreadsheet format: {path.suffix or '(none)'}",
                extension=path.suffix,
                file_path=str(path),
            )
        return self.read_bytes(path.read_bytes(), fmt, sheet_name=sheet_name)

    def read_bytes(
        self,
        content: bytes,
        input_format: InputFormat = InputFormat.XLSX,
        sheet_name: str | None = None,
    ) -> Workbook:
        """Decode spreadsheet bytes.

        Raises:
            ParseError: If the bytes are not a readable spreadsheet.
        """
        if input_format is InputFormat.CSV:
            return self._read_csv(content)
        return self._read_xlsx(content, sheet_name)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _read_xlsx(self, content: bytes, sheet_name: str | None) -> Workbook:
        try:
            wb = load_workbook(
                filename=io.BytesIO(content), read_only=True, data_only=True
            )
        except (BadZipFile, InvalidFileException, KeyError, ValueError, OSError) as e:
            raise ParseError(
                f"Error opening Excel file: {e}",
                details={"decoder": "openpyxl", "error_type": type(e).__name__},
            ) from e

        sheet_names = list(wb.sheetnames)
        target = sheet_name
        if target is None and sheet_names:
            target = sheet_names[0]

        sheets: list[Sheet] = []
        try:
            if target is not None and target in sheet_names:
                sheets.append(self._extract_sheet(wb[target], target))
        finally:
            wb.close()

        logger.debug(
            "Read workbook",
            sheets=len(sheet_names),
            materialized=target if sheets else None,
        )
        return Workbook(
            sheets=sheets,
            sheet_names=sheet_names,
            metadata={"format": InputFormat.XLSX.value},
        )

    def _extract_sheet(self, worksheet: object, name: str) -> Sheet:
        iter_rows = getattr(worksheet, "iter_rows", None)
        if iter_rows is None:
            raise ParseError(
                f"Sheet '{name}' is not a worksheet and cannot be read",
                sheet_name=name,
            )
        try:
            rows = [
                [Cell.from_value(value) for value in values]
                for values in iter_rows(values_only=True)
            ]
        except (KeyError, ValueError, TypeError) as e:
            raise ParseError(
                f"Error reading sheet '{name}': {e}", sheet_name=name
            ) from e
        return Sheet(name=name, rows=rows)

    def _read_csv(self, content: bytes) -> Workbook:
        encoding = self._detect_encoding(content)
        text = self._decode_content(content, encoding)
        delimiter = self._detect_csv_delimiter(text)

        try:
            records = list(csv.reader(io.StringIO(text), delimiter=delimiter))
        except csv.Error as e:
            raise ParseError(f"Error parsing CSV file: {e}") from e

        rows = [[Cell.from_value(value) for value in record] for record in records]
        logger.debug(
            "Read CSV",
            rows=len(rows),
            encoding=encoding,
            delimiter=repr(delimiter),
        )
        return Workbook(
            sheets=[Sheet(name=self.CSV_SHEET_NAME, rows=rows)],
            metadata={
                "format": InputFormat.CSV.value,
                "encoding": encoding,
                "delimiter": delimiter,
            },
        )

    def _detect_encoding(self, content: bytes) -> str:
        """Detect the encoding of CSV bytes."""
        if not content:
            return "utf-8"

        result = chardet.detect(content)
        encoding = result.get("encoding")
        confidence = result.get("confidence", 0.0) or 0.0

        if encoding and confidence >= self.MIN_ENCODING_CONFIDENCE:
            encoding = self._normalize_encoding(encoding)
            logger.debug(
                f"Detected encoding: {encoding} (confidence: {confidence:.2f})"
            )
            return encoding

        for fallback in self.FALLBACK_ENCODINGS:
            try:
                content.decode(fallback)
                logger.debug(f"Using fallback encoding: {fallback}")
                return fallback
            except (UnicodeDecodeError, LookupError):
                continue

        return "latin-1"

    def _normalize_encoding(self, encoding: str) -> str:
        encoding = encoding.lower().replace("-", "_").replace(" ", "_")

        normalizations = {
            "utf_8": "utf-8",
            "utf_8_sig": "utf-8-sig",
            "ascii": "utf-8",
            "iso_8859_1": "latin-1",
            "latin_1": "latin-1",
            "windows_1252": "cp1252",
        }

        return normalizations.get(encoding, encoding.replace("_", "-"))

    def _decode_content(self, content: bytes, encoding: str) -> str:
        """Decode CSV bytes, dropping a UTF-8 byte order mark."""
        if encoding == "utf-8":
            encoding = "utf-8-sig"
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            for fallback in self.FALLBACK_ENCODINGS:
                try:
                    return content.decode(fallback)
                except (UnicodeDecodeError, LookupError):
                    continue

            raise EncodingError(
                f"Failed to decode CSV content with encoding {encoding}: {e}",
                encoding=encoding,
            ) from e

    def _detect_csv_delimiter(self, content: str) -> str:
        try:
            sample = content[:8192]
            dialect = csv.Sniffer().sniff(sample, delimiters=self.CSV_DELIMITERS)
            return dialect.delimiter
        except csv.Error:
            logger.debug("CSV delimiter detection failed, defaulting to comma")
            return ","
