"""Services for the spreadsheet to i18n converter."""

from excel_to_i18n.services.conversion import (
    ConversionResult,
    ConversionService,
    ConversionStats,
    convert,
)
from excel_to_i18n.services.workbook_reader import WorkbookReader

__all__ = [
    "ConversionResult",
    "ConversionService",
    "ConversionStats",
    "WorkbookReader",
    "convert",
]
