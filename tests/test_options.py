"""Tests for conversion options."""

import pytest

from excel_to_i18n.options import (
    ColumnMode,
    ConversionOptions,
    InputFormat,
    KeyStyle,
    is_safe_language_code,
)
from excel_to_i18n.utils.exceptions import ConfigurationError, ErrorCode


class TestDefaults:
    def test_default_layout(self) -> None:
        options = ConversionOptions()

        assert options.supported_languages == []
        assert options.category_column_index == 0
        assert options.key_column_index == 1
        assert options.value_start_column_index == 2
        assert options.header_row_index == 0
        assert options.data_start_row_index == 1
        assert options.sheet_name is None
        assert options.key_style is KeyStyle.FLAT
        assert options.column_mode is ColumnMode.POSITIONAL
        assert options.category_delimiters == "/"
        assert options.input_format is None

    def test_use_nested_keys_property(self) -> None:
        assert ConversionOptions(key_style=KeyStyle.NESTED).use_nested_keys
        assert not ConversionOptions().use_nested_keys

    def test_uses_header_names(self) -> None:
        assert not ConversionOptions().uses_header_names
        assert ConversionOptions(key_header="key").uses_header_names


class TestInputFormat:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("strings.xlsx", InputFormat.XLSX),
            ("STRINGS.XLSX", InputFormat.XLSX),
            ("dir/strings.csv", InputFormat.CSV),
            ("strings.ods", None),
            ("strings", None),
        ],
    )
    def test_from_path(self, path: str, expected: InputFormat | None) -> None:
        assert InputFormat.from_path(path) is expected


class TestFromDict:
    """Tests for building options from loosely typed mappings."""

    def test_camel_case_keys(self) -> None:
        options = ConversionOptions.from_dict(
            {
                "supportLanguages": ["en", "ko"],
                "keyColumnIndex": 0,
                "categoryColumnIndex": None,
                "valueStartColumnIndex": 1,
                "sheetName": "Strings",
            }
        )

        assert options.supported_languages == ["en", "ko"]
        assert options.key_column_index == 0
        assert options.category_column_index is None
        assert options.value_start_column_index == 1
        assert options.sheet_name == "Strings"

    def test_comma_separated_languages(self) -> None:
        options = ConversionOptions.from_dict({"languages": "en, ko,,ja"})
        assert options.supported_languages == ["en", "ko", "ja"]

    def test_enum_values_from_strings(self) -> None:
        options = ConversionOptions.from_dict(
            {"column_mode": "HEADER", "key_style": "nested", "input_format": "csv"}
        )

        assert options.column_mode is ColumnMode.HEADER
        assert options.key_style is KeyStyle.NESTED
        assert options.input_format is InputFormat.CSV

    def test_use_nested_keys_alias(self) -> None:
        assert ConversionOptions.from_dict({"useNestedKeys": True}).use_nested_keys
        flat = ConversionOptions.from_dict({"use_nested_keys": "false"})
        assert flat.key_style is KeyStyle.FLAT

    def test_use_nested_keys_contradicting_key_style(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConversionOptions.from_dict(
                {"use_nested_keys": True, "key_style": "flat"}
            )
        assert exc_info.value.option == "use_nested_keys"

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConversionOptions.from_dict({"outputDir": "locales"})

        assert exc_info.value.error_code is ErrorCode.CONFIGURATION_ERROR
        assert exc_info.value.details["option"] == "outputDir"

    @pytest.mark.parametrize(
        "data",
        [
            {"key_column_index": "first"},
            {"key_column_index": True},
            {"column_mode": "diagonal"},
            {"supported_languages": 3},
            {"category_delimiters": ""},
            {"sheet_name": 1},
        ],
    )
    def test_invalid_values(self, data: dict[str, object]) -> None:
        with pytest.raises(ConfigurationError):
            ConversionOptions.from_dict(data)

    def test_numeric_strings_accepted(self) -> None:
        options = ConversionOptions.from_dict({"data_start_row_index": "3"})
        assert options.data_start_row_index == 3


class TestLanguageCodes:
    """Language codes must be usable as a file name component."""

    @pytest.mark.parametrize("code", ["en", "ko", "zh-Hant", "pt_BR", "en.US"])
    def test_safe_codes(self, code: str) -> None:
        assert is_safe_language_code(code)

    @pytest.mark.parametrize(
        "code", ["", ".", "..", "en/US", "x/../..", "/abs/evil", "en\\US", "en\x00"]
    )
    def test_unsafe_codes(self, code: str) -> None:
        assert not is_safe_language_code(code)
