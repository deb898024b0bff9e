"""Utilities package for the spreadsheet to i18n converter.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from excel_to_i18n.utils.exceptions import (
    ConfigurationError,
    ConversionError,
    ErrorCode,
    FileError,
    HTTPStatusMixin,
    I18nError,
    ParseError,
    StructuralError,
    UnsupportedFormatError,
    ValidationError,
    WorkbookError,
)
from excel_to_i18n.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "ConversionError",
    "ErrorCode",
    "FileError",
    "HTTPStatusMixin",
    "I18nError",
    "ParseError",
    "StructuralError",
    "UnsupportedFormatError",
    "ValidationError",
    "WorkbookError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
