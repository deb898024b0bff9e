"""Excel to i18n - Convert translation spreadsheets into per-language JSON."""

from typing import Any

from excel_to_i18n.options import ColumnMode, ConversionOptions, InputFormat, KeyStyle
from excel_to_i18n.services.conversion import (
    ConversionResult,
    ConversionService,
    convert,
)
from excel_to_i18n.version import __version__

__all__ = [
    "ColumnMode",
    "ConversionOptions",
    "ConversionResult",
    "ConversionService",
    "InputFormat",
    "KeyStyle",
    "__version__",
    "app",
    "convert",
    "create_app",
]


def __getattr__(name: str) -> Any:
    # The FastAPI app configures logging on import; load it only when asked.
    if name in ("app", "create_app"):
        from excel_to_i18n import api

        return getattr(api, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main() -> None:
    """Run the FastAPI server using uvicorn."""
    import uvicorn

    from excel_to_i18n.config import settings

    uvicorn.run(
        "excel_to_i18n.api:app",
        host=settings.server_host,
        port=settings.server_port,
    )
