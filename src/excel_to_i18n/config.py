"""Configuration management for the spreadsheet to i18n converter.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
EXI18N_ prefix, or via a .env file in the project root.

Environment Variables:
    EXI18N_MAX_FILE_SIZE_MB: Maximum upload size in MB (default: 10)
    EXI18N_OUTPUT_DIR: Default directory for translation files (default: locales)
    EXI18N_OUTPUT_FILENAME_TEMPLATE: File name per language
        (default: translation.{lang}.json)
    EXI18N_JSON_INDENT: Indentation of written JSON files (default: 2)
    EXI18N_LOG_LEVEL: Logging level (default: INFO)
    EXI18N_DEBUG: Enable debug mode (default: false)
    EXI18N_CORS_ORIGINS: Comma-separated CORS origins (default: *)
    EXI18N_SERVER_HOST: Server bind host (default: 0.0.0.0)
    EXI18N_SERVER_PORT: Server bind port (default: 8000)
"""

import logging
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example .env file:
        EXI18N_OUTPUT_DIR=src/i18n/locales
        EXI18N_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="EXI18N_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Input Settings
    # =========================================================================

    max_file_size_mb: int = 10
    """Maximum spreadsheet upload size in megabytes."""

    # =========================================================================
    # Output Settings
    # =========================================================================

    output_dir: str = "locales"
    """Directory where translation files are written."""

    output_filename_template: str = "translation.{lang}.json"
    """File name of each language document; {lang} is the language code."""

    json_indent: int = 2
    """Indentation of written JSON files."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional error details."""

    # =========================================================================
    # Server Settings
    # =========================================================================

    cors_origins: str = "*"
    """Comma-separated list of allowed CORS origins, or * for all."""

    server_host: str = "0.0.0.0"
    """Host address for the server to bind to."""

    server_port: int = 8000
    """Port for the server to listen on."""

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return upper_v

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_file_size(cls, v: int) -> int:
        """Validate file size is positive and reasonable."""
        if not 1 <= v <= 500:
            raise ValueError(f"max_file_size_mb must be between 1 and 500, got {v}")
        return v

    @field_validator("output_filename_template")
    @classmethod
    def validate_filename_template(cls, v: str) -> str:
        """Validate the template names each language file distinctly."""
        if "{lang}" not in v:
            raise ValueError(
                f"output_filename_template must contain '{{lang}}', got {v!r}"
            )
        return v

    @field_validator("json_indent")
    @classmethod
    def validate_json_indent(cls, v: int) -> int:
        if not 0 <= v <= 8:
            raise ValueError(f"json_indent must be between 0 and 8, got {v}")
        return v

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"server_port must be between 1 and 65535, got {v}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary suitable for logging."""
        return {
            "max_file_size_mb": self.max_file_size_mb,
            "output_dir": self.output_dir,
            "output_filename_template": self.output_filename_template,
            "json_indent": self.json_indent,
            "log_level": self.log_level,
            "debug": self.debug,
            "cors_origins": self.cors_origins,
            "server_host": self.server_host,
            "server_port": self.server_port,
        }


def validate_settings_on_startup(s: Settings) -> None:
    """Validate settings on application startup.

    Logs warnings for settings that are valid but risky in production.

    Args:
        s: Settings instance to validate.
    """
    logger = logging.getLogger(__name__)

    if s.cors_origins == "*" and not s.debug:
        logger.warning(
            "CORS is configured to allow all origins (*). "
            "Consider restricting this in production."
        )

    logger.info(
        f"Configuration loaded: log_level={s.log_level}, debug={s.debug}, "
        f"max_file_size_mb={s.max_file_size_mb}, output_dir={s.output_dir}"
    )


# Create the global settings instance
settings = Settings()
