"""Conversion options shared by every input format and output style."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

from excel_to_i18n.utils.exceptions import ConfigurationError

DEFAULT_CATEGORY_COLUMN_INDEX = 0
DEFAULT_KEY_COLUMN_INDEX = 1
DEFAULT_VALUE_START_COLUMN_INDEX = 2
DEFAULT_HEADER_ROW_INDEX = 0
DEFAULT_DATA_START_ROW_INDEX = 1
DEFAULT_CATEGORY_DELIMITERS = "/"

_UNSAFE_CODE_CHARS = ("/", "\\", "\x00")


def is_safe_language_code(code: str) -> bool:
    """Return True if ``code`` can be used as a single file name component.

    Language codes end up in translation file names, so path separators and
    the relative names ``.`` and ``..`` are not allowed.
    """
    if not code or code in (".", ".."):
        return False
    return not any(char in code for char in _UNSAFE_CODE_CHARS)


class ColumnMode(str, Enum):
    """How language columns are located."""

    POSITIONAL = "positional"
    """``supported_languages[i]`` lives at ``value_start_column_index + i``."""

    HEADER = "header"
    """Language codes are read from the header row."""


class KeyStyle(str, Enum):
    """Shape of each language document."""

    FLAT = "flat"
    """Single-level mapping keyed by ``category/key``."""

    NESTED = "nested"
    """One object level per key path segment."""


class InputFormat(str, Enum):
    """Spreadsheet formats understood by the reader."""

    XLSX = "xlsx"
    CSV = "csv"

    @classmethod
    def from_path(cls, path: str | Path) -> InputFormat | None:
        """Return the format matching the file suffix, if any."""
        suffix = Path(path).suffix.lower().lstrip(".")
        for member in cls:
            if member.value == suffix:
                return member
        return None


@dataclass
class ConversionOptions:
    """Options controlling one spreadsheet conversion.

    Column and row indices are zero-based. ``category_column_index`` may be
    None for sheets without a category column. ``category_header`` and
    ``key_header`` are only valid with ``ColumnMode.HEADER``.
    """

    supported_languages: list[str] = field(default_factory=list)
    category_column_index: int | None = DEFAULT_CATEGORY_COLUMN_INDEX
    key_column_index: int = DEFAULT_KEY_COLUMN_INDEX
    value_start_column_index: int = DEFAULT_VALUE_START_COLUMN_INDEX
    sheet_name: str | None = None
    header_row_index: int = DEFAULT_HEADER_ROW_INDEX
    data_start_row_index: int = DEFAULT_DATA_START_ROW_INDEX
    key_style: KeyStyle = KeyStyle.FLAT
    column_mode: ColumnMode = ColumnMode.POSITIONAL
    category_header: str | None = None
    key_header: str | None = None
    category_delimiters: str = DEFAULT_CATEGORY_DELIMITERS
    input_format: InputFormat | None = None

    @property
    def use_nested_keys(self) -> bool:
        return self.key_style is KeyStyle.NESTED

    @property
    def uses_header_names(self) -> bool:
        """Whether a header-driven field names the key or category column."""
        return self.key_header is not None or self.category_header is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConversionOptions:
        """Build options from a mapping with snake_case or camelCase keys.

        The boolean ``use_nested_keys`` is accepted as an alias for
        ``key_style``; giving both with different meanings is rejected.

        Raises:
            ConfigurationError: For unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        normalized: dict[str, Any] = {}
        use_nested: bool | None = None

        for raw_key, value in data.items():
            name = _ALIASES.get(raw_key, _to_snake_case(raw_key))
            if name == "use_nested_keys":
                use_nested = _as_bool(value, name)
                continue
            if name not in known:
                raise ConfigurationError(f"Unknown option: {raw_key}", option=raw_key)
            normalized[name] = value

        kwargs: dict[str, Any] = {}
        for name, value in normalized.items():
            kwargs[name] = _PARSERS.get(name, _as_optional_str)(value, name)

        if use_nested is not None:
            implied = KeyStyle.NESTED if use_nested else KeyStyle.FLAT
            if "key_style" in kwargs and kwargs["key_style"] is not implied:
                raise ConfigurationError(
                    "use_nested_keys contradicts key_style",
                    option="use_nested_keys",
                )
            kwargs["key_style"] = implied

        return cls(**kwargs)


_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

_ALIASES = {
    # name used by build plugin configurations
    "supportLanguages": "supported_languages",
    "support_languages": "supported_languages",
    "languages": "supported_languages",
}


def _to_snake_case(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def _as_languages(value: Any, name: str) -> list[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise ConfigurationError(
            f"{name} must be a list of language codes", option=name
        )
    languages = [str(item).strip() for item in items]
    return [lang for lang in languages if lang]


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer", option=name)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}", option=name
        ) from e


def _as_optional_int(value: Any, name: str) -> int | None:
    if value is None or value == "":
        return None
    return _as_int(value, name)


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "1", "yes"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "0", "no"}:
        return False
    raise ConfigurationError(f"{name} must be a boolean", option=name)


def _as_optional_str(value: Any, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be a string", option=name)
    return value


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{name} must be a non-empty string", option=name)
    return value


def _enum_parser(enum_cls: type[Enum]) -> Any:
    def parse(value: Any, name: str) -> Enum:
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(str(value).strip().lower())
        except ValueError as e:
            choices = ", ".join(str(member.value) for member in enum_cls)
            raise ConfigurationError(
                f"{name} must be one of: {choices}", option=name
            ) from e

    return parse


def _optional_enum_parser(enum_cls: type[Enum]) -> Any:
    parse = _enum_parser(enum_cls)

    def parse_optional(value: Any, name: str) -> Enum | None:
        if value is None:
            return None
        return parse(value, name)

    return parse_optional


_PARSERS = {
    "supported_languages": _as_languages,
    "category_column_index": _as_optional_int,
    "key_column_index": _as_int,
    "value_start_column_index": _as_int,
    "header_row_index": _as_int,
    "data_start_row_index": _as_int,
    "key_style": _enum_parser(KeyStyle),
    "column_mode": _enum_parser(ColumnMode),
    "category_delimiters": _as_str,
    "input_format": _optional_enum_parser(InputFormat),
}
