"""Centralized exception classes for the spreadsheet to i18n converter.

This module provides a hierarchy of custom exceptions with error codes,
HTTP status code mapping, and structured error details for consistent
error handling throughout the application.

Exception Hierarchy:
    I18nError (base)
    ├── FileError
    │   ├── I18nFileNotFoundError
    │   ├── FileTooLargeError
    │   ├── UnsupportedFormatError
    │   ├── FileWriteError
    │   └── EncodingError
    ├── WorkbookError
    │   ├── ParseError
    │   └── StructuralError
    ├── ConversionError
    ├── ConfigurationError
    └── ValidationError

Error Codes:
    All errors have a unique error code (e.g., "E2001") that can be used
    for programmatic error handling and documentation.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used in the application.

    Error codes are grouped by category:
    - E1xxx: File/input errors
    - E2xxx: Workbook parse and structure errors
    - E4xxx: Conversion errors
    - E9xxx: Internal/unexpected errors
    """

    # File errors (E1xxx)
    FILE_NOT_FOUND = "E1001"
    FILE_TOO_LARGE = "E1002"
    UNSUPPORTED_FORMAT = "E1003"
    FILE_READ_ERROR = "E1004"
    FILE_WRITE_ERROR = "E1005"
    ENCODING_ERROR = "E1006"

    # Workbook errors (E2xxx)
    WORKBOOK_PARSE_FAILED = "E2001"
    NO_SHEETS = "E2002"
    SHEET_NOT_FOUND = "E2003"
    HEADER_ROW_OUT_OF_RANGE = "E2004"
    KEY_COLUMN_NOT_FOUND = "E2005"
    CATEGORY_COLUMN_NOT_FOUND = "E2006"
    AMBIGUOUS_CONFIGURATION = "E2007"
    NO_LANGUAGE_COLUMNS = "E2008"
    COLUMN_CONFLICT = "E2009"

    # Conversion errors (E4xxx)
    CONVERSION_FAILED = "E4001"
    INVALID_INPUT = "E4002"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"
    CONFIGURATION_ERROR = "E9002"


class HTTPStatusMixin:
    """Mixin that provides HTTP status code for exceptions.

    Subclasses should set the `http_status` class attribute.
    """

    http_status: int = 500

    def get_http_status(self) -> int:
        """Get the HTTP status code for this exception.

        Returns:
            HTTP status code appropriate for this error.
        """
        return self.http_status


class I18nError(Exception, HTTPStatusMixin):
    """Base exception for all converter errors.

    All custom exceptions in the application should inherit from this class.
    It provides:
    - Unique error codes for programmatic handling
    - HTTP status code mapping for API responses
    - Structured error details for logging and debugging

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
        http_status: HTTP status code for API responses (default 500).
    """

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for API responses.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# File Errors (E1xxx)
# =============================================================================


class FileError(I18nError):
    """Base class for file-related errors."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FILE_READ_ERROR,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with file path information.

        Args:
            message: Error message.
            error_code: Error code.
            file_path: Path to the problematic file.
            details: Additional details.
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, error_code, details)
        self.file_path = file_path


class I18nFileNotFoundError(FileError):
    """Raised when an input spreadsheet is not found.

    Note: Named I18nFileNotFoundError to avoid shadowing built-in FileNotFoundError.
    """

    http_status: int = 404

    def __init__(
        self,
        file_path: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = message or f"File not found: {file_path}"
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_NOT_FOUND,
            file_path=file_path,
            details=details,
        )


class FileTooLargeError(FileError):
    """Raised when an upload exceeds the maximum allowed size."""

    http_status: int = 413

    def __init__(
        self,
        file_size: int,
        max_size: int,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with size information.

        Args:
            file_size: Actual file size in bytes.
            max_size: Maximum allowed size in bytes.
            file_path: Optional file path.
            details: Additional details.
        """
        details = details or {}
        details["file_size_bytes"] = file_size
        details["max_size_bytes"] = max_size
        message = (
            f"File size ({file_size} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)"
        )
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_TOO_LARGE,
            file_path=file_path,
            details=details,
        )
        self.file_size = file_size
        self.max_size = max_size


class UnsupportedFormatError(FileError):
    """Raised when an input format is not a supported spreadsheet format."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        extension: str | None = None,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if extension:
            details["extension"] = extension
        super().__init__(
            message=message,
            error_code=ErrorCode.UNSUPPORTED_FORMAT,
            file_path=file_path,
            details=details,
        )
        self.extension = extension


class FileWriteError(FileError):
    """Raised when a translation file cannot be written."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_WRITE_ERROR,
            file_path=file_path,
            details=details,
        )


class EncodingError(FileError):
    """Raised when text input (CSV) cannot be decoded."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        encoding: str | None = None,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with encoding information.

        Args:
            message: Error message.
            encoding: The encoding that caused the error.
            file_path: Optional file path.
            details: Additional details.
        """
        details = details or {}
        if encoding:
            details["encoding"] = encoding
        super().__init__(
            message=message,
            error_code=ErrorCode.ENCODING_ERROR,
            file_path=file_path,
            details=details,
        )
        self.encoding = encoding


# =============================================================================
# Workbook Errors (E2xxx)
# =============================================================================


class WorkbookError(I18nError):
    """Base class for errors that make a workbook unusable for conversion."""

    http_status: int = 422

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.WORKBOOK_PARSE_FAILED,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the affected sheet.

        Args:
            message: Error message.
            error_code: Error code.
            sheet_name: Sheet being processed when the error occurred.
            details: Additional details.
        """
        details = details or {}
        if sheet_name:
            details["sheet_name"] = sheet_name
        super().__init__(message, error_code, details)
        self.sheet_name = sheet_name


class ParseError(WorkbookError):
    """Raised when the input bytes cannot be decoded as a spreadsheet."""

    def __init__(
        self,
        message: str,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.WORKBOOK_PARSE_FAILED,
            sheet_name=sheet_name,
            details=details,
        )


class StructuralError(WorkbookError):
    """Raised when a readable workbook does not have the expected layout.

    Covers missing sheets, an out-of-range header row, unresolvable key or
    category columns, and ambiguous column configuration.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.KEY_COLUMN_NOT_FOUND,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            sheet_name=sheet_name,
            details=details,
        )


# =============================================================================
# Conversion Errors (E4xxx)
# =============================================================================


class ConversionError(I18nError):
    """Raised when a conversion result cannot be used as requested."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONVERSION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


# =============================================================================
# Configuration and Validation Errors
# =============================================================================


class ConfigurationError(I18nError):
    """Raised when conversion options cannot be built from user input."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        option: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending option name.

        Args:
            message: Error message.
            option: Name of the option that was rejected.
            details: Additional details.
        """
        details = details or {}
        if option:
            details["option"] = option
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            details=details,
        )
        self.option = option


class ValidationError(I18nError):
    """General validation error for API input data."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with validation details.

        Args:
            message: Main error message.
            field: Field that failed validation.
            errors: List of validation errors.
            details: Additional details.
        """
        details = details or {}
        if field:
            details["field"] = field
        if errors:
            details["validation_errors"] = errors
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_INPUT,
            details=details,
        )
