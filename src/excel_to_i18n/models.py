"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from excel_to_i18n.options import ColumnMode, ConversionOptions, KeyStyle
from excel_to_i18n.services.conversion import ConversionResult
from excel_to_i18n.utils.exceptions import ErrorCode


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: str
    version: str


class ConversionRequest(BaseModel):
    """Conversion options submitted alongside an uploaded spreadsheet."""

    languages: list[str] = Field(
        default_factory=list,
        description="Language codes, in column order for positional mode",
    )
    column_mode: ColumnMode = Field(
        default=ColumnMode.POSITIONAL, description="How language columns are found"
    )
    key_style: KeyStyle = Field(
        default=KeyStyle.FLAT, description="Flat 'category/key' keys or nested objects"
    )
    sheet_name: str | None = Field(
        default=None, description="Sheet to convert (defaults to the first sheet)"
    )
    category_column_index: int | None = Field(default=0, ge=0)
    key_column_index: int = Field(default=1, ge=0)
    value_start_column_index: int = Field(default=2, ge=0)
    header_row_index: int = Field(default=0, ge=0)
    data_start_row_index: int = Field(default=1, ge=0)
    category_header: str | None = Field(
        default=None, description="Header text of the category column (header mode)"
    )
    key_header: str | None = Field(
        default=None, description="Header text of the key column (header mode)"
    )
    category_delimiters: str = Field(
        default="/", min_length=1, description="Characters splitting a category"
    )

    def to_options(self, **extra: Any) -> ConversionOptions:
        """Build core conversion options from the request."""
        return ConversionOptions(
            supported_languages=list(self.languages),
            category_column_index=self.category_column_index,
            key_column_index=self.key_column_index,
            value_start_column_index=self.value_start_column_index,
            sheet_name=self.sheet_name,
            header_row_index=self.header_row_index,
            data_start_row_index=self.data_start_row_index,
            key_style=self.key_style,
            column_mode=self.column_mode,
            category_header=self.category_header,
            key_header=self.key_header,
            category_delimiters=self.category_delimiters,
            **extra,
        )


class ConversionStatsModel(BaseModel):
    """Counters describing one conversion."""

    sheet_name: str | None = None
    rows_processed: int = 0
    rows_skipped: int = 0
    entries: int = 0
    entries_per_language: dict[str, int] = Field(default_factory=dict)


class ConversionResponse(BaseModel):
    """Response model for the conversion endpoint."""

    success: bool = Field(..., description="Whether the conversion succeeded")
    translations: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="One document per language"
    )
    error: str | None = Field(default=None, description="Error message on failure")
    error_code: str | None = Field(
        default=None, description="Machine-readable error code on failure"
    )
    stats: ConversionStatsModel | None = Field(
        default=None, description="Conversion counters (successful conversions)"
    )
    request_id: str | None = Field(default=None, description="Request ID")

    @classmethod
    def from_result(
        cls, result: ConversionResult, request_id: str | None = None
    ) -> "ConversionResponse":
        return cls(
            success=result.success,
            translations=result.translations,
            error=result.error,
            error_code=result.error_code,
            stats=ConversionStatsModel(**result.stats.to_dict())
            if result.success
            else None,
            request_id=request_id,
        )


class ErrorDetail(BaseModel):
    """Error detail model for API error responses.

    This model provides structured error responses with:
    - Human-readable error message
    - Machine-readable error code
    - Optional additional details for debugging
    - Optional request ID for correlation
    """

    detail: str = Field(..., description="Human-readable error message")
    error_code: str | None = Field(
        default=None,
        description="Machine-readable error code (e.g., 'E1003')",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details for debugging",
    )
    request_id: str | None = Field(
        default=None,
        description="Request ID for error correlation",
    )

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        detail: str,
        details: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> "ErrorDetail":
        """Create an ErrorDetail from an ErrorCode enum value."""
        return cls(
            detail=detail,
            error_code=error_code.value,
            details=details,
            request_id=request_id,
        )
