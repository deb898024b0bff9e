"""FastAPI application for spreadsheet to i18n conversion."""

import uuid
from datetime import UTC, datetime
from typing import Annotated, Any

import pydantic
from fastapi import (
    FastAPI,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from excel_to_i18n.config import settings, validate_settings_on_startup
from excel_to_i18n.models import (
    ConversionRequest,
    ConversionResponse,
    ErrorDetail,
    HealthResponse,
)
from excel_to_i18n.options import ColumnMode, InputFormat, KeyStyle
from excel_to_i18n.services.conversion import ConversionService
from excel_to_i18n.utils.exceptions import (
    ErrorCode,
    FileTooLargeError,
    I18nError,
    UnsupportedFormatError,
    ValidationError,
)
from excel_to_i18n.utils.logging import (
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)
from excel_to_i18n.version import __version__

API_VERSION = __version__

# Configure structured logging using settings
configure_logging(
    level=settings.log_level_int,
    use_structured_formatter=True,
)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Excel to i18n JSON API",
        description=(
            "Converts translation spreadsheets (XLSX or CSV) into one JSON "
            "document per language, with flat or nested keys."
        ),
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.conversion_service = ConversionService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    validate_settings_on_startup(settings)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Any) -> Any:
        """Assign a request ID, expose it in logs and the response headers."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()

    @app.exception_handler(I18nError)
    async def i18n_exception_handler(request: Request, exc: I18nError) -> JSONResponse:
        """Return structured error responses for application exceptions."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.error(
            f"I18n Error: {exc.message}",
            error_code=exc.error_code.value,
            http_status=exc.http_status,
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=ErrorDetail(
                detail=exc.message,
                error_code=exc.error_code.value,
                details=exc.details if exc.details else None,
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Custom exception handler for HTTP exceptions."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                detail=str(exc.detail),
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all handler that hides internal details outside debug mode."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.exception(
            f"Unexpected error: {type(exc).__name__}",
            error_type=type(exc).__name__,
        )
        if settings.debug:
            detail = f"Internal server error: {type(exc).__name__}: {exc}"
        else:
            detail = "Internal server error. Please try again later."

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorDetail(
                detail=detail,
                error_code=ErrorCode.INTERNAL_ERROR.value,
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Check the health status of the service."""
        request_id = getattr(request.state, "request_id", None)
        logger.debug("Health check requested", request_id=request_id)
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": API_VERSION,
        }

    @app.post(
        "/convert",
        response_model=ConversionResponse,
        tags=["Conversion"],
        responses={
            400: {"model": ErrorDetail, "description": "Invalid upload or options"},
            413: {"model": ErrorDetail, "description": "File too large"},
            422: {
                "model": ConversionResponse,
                "description": "Spreadsheet could not be converted",
            },
        },
    )
    async def convert_spreadsheet(
        request: Request,
        file: Annotated[UploadFile, File(description="XLSX or CSV spreadsheet")],
        languages: Annotated[
            str | None, Form(description="Comma-separated language codes")
        ] = None,
        column_mode: Annotated[ColumnMode, Form()] = ColumnMode.POSITIONAL,
        key_style: Annotated[KeyStyle, Form()] = KeyStyle.FLAT,
        sheet_name: Annotated[str | None, Form()] = None,
        category_column_index: Annotated[int | None, Form()] = 0,
        no_category: Annotated[
            bool, Form(description="The sheet has no category column")
        ] = False,
        key_column_index: Annotated[int, Form()] = 1,
        value_start_column_index: Annotated[int, Form()] = 2,
        header_row_index: Annotated[int, Form()] = 0,
        data_start_row_index: Annotated[int, Form()] = 1,
        category_header: Annotated[str | None, Form()] = None,
        key_header: Annotated[str | None, Form()] = None,
        category_delimiters: Annotated[str, Form()] = "/",
    ) -> JSONResponse:
        """Convert an uploaded spreadsheet into per-language documents.

        The spreadsheet format is taken from the file name (``.xlsx`` or
        ``.csv``). The response is 200 when the conversion succeeded and 422
        when the workbook could not be converted; both carry a
        ConversionResponse body.

        Raises:
            ValidationError: 400 if the file or options are invalid
            UnsupportedFormatError: 400 if the file is not XLSX or CSV
            FileTooLargeError: 413 if the file exceeds the size limit
        """
        request_id = getattr(request.state, "request_id", None)

        if file.filename is None or file.filename == "":
            logger.warning("Convert request missing file", request_id=request_id)
            raise ValidationError(
                message="A spreadsheet file must be provided",
                field="file",
            )

        input_format = InputFormat.from_path(file.filename)
        if input_format is None:
            raise UnsupportedFormatError(
                f"Unsupported spreadsheet format: {file.filename}",
                file_path=file.filename,
            )

        content = await file.read()
        if len(content) > settings.max_file_size_bytes:
            logger.warning(
                "File too large",
                file_size=len(content),
                max_size=settings.max_file_size_bytes,
                request_id=request_id,
            )
            raise FileTooLargeError(
                file_size=len(content),
                max_size=settings.max_file_size_bytes,
                file_path=file.filename,
            )

        try:
            codes = [code.strip() for code in (languages or "").split(",")]
            conversion_request = ConversionRequest(
                languages=[code for code in codes if code],
                column_mode=column_mode,
                key_style=key_style,
                sheet_name=sheet_name or None,
                category_column_index=None if no_category else category_column_index,
                key_column_index=key_column_index,
                value_start_column_index=value_start_column_index,
                header_row_index=header_row_index,
                data_start_row_index=data_start_row_index,
                category_header=category_header or None,
                key_header=key_header or None,
                category_delimiters=category_delimiters,
            )
        except pydantic.ValidationError as e:
            raise ValidationError(
                message="Invalid conversion options",
                errors=[
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ],
            ) from e

        logger.info(
            "Converting spreadsheet",
            filename=file.filename,
            file_size=len(content),
            format=input_format.value,
            request_id=request_id,
        )
        service: ConversionService = request.app.state.conversion_service
        result = await run_in_threadpool(
            service.convert_bytes,
            content,
            conversion_request.to_options(input_format=input_format),
        )

        response = ConversionResponse.from_result(result, request_id=request_id)
        return JSONResponse(
            status_code=status.HTTP_200_OK
            if result.success
            else status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=response.model_dump(),
        )

    return app


# Create the default app instance
app = create_app()
