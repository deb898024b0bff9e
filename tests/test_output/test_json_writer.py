"""Tests for the translation file writer."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from excel_to_i18n.options import ColumnMode, ConversionOptions
from excel_to_i18n.output import DEFAULT_FILENAME_TEMPLATE, TranslationFileWriter
from excel_to_i18n.services.conversion import ConversionResult, ConversionService
from excel_to_i18n.utils.exceptions import (
    ConversionError,
    ErrorCode,
    FileWriteError,
    StructuralError,
)


@pytest.fixture
def result() -> ConversionResult:
    return ConversionResult.succeeded(
        {
            "en": {"greeting/hello": "Hello"},
            "ko": {"greeting/hello": "안녕"},
        }
    )


class TestTranslationFileWriter:
    """Tests for TranslationFileWriter."""

    def test_writes_one_file_per_language(
        self, tmp_path: Path, result: ConversionResult
    ) -> None:
        paths = TranslationFileWriter(tmp_path).write(result)

        assert paths == [
            tmp_path / "translation.en.json",
            tmp_path / "translation.ko.json",
        ]
        ko = json.loads(paths[1].read_text(encoding="utf-8"))
        assert ko == {"greeting/hello": "안녕"}

    def test_non_ascii_is_not_escaped(
        self, tmp_path: Path, result: ConversionResult
    ) -> None:
        TranslationFileWriter(tmp_path).write(result)

        text = (tmp_path / "translation.ko.json").read_text(encoding="utf-8")
        assert "안녕" in text
        assert "\\u" not in text
        assert text.endswith("\n")

    def test_creates_output_directory(
        self, tmp_path: Path, result: ConversionResult
    ) -> None:
        output_dir = tmp_path / "src" / "locales"
        TranslationFileWriter(output_dir).write(result)

        assert (output_dir / "translation.en.json").is_file()

    def test_custom_template_and_indent(
        self, tmp_path: Path, result: ConversionResult
    ) -> None:
        writer = TranslationFileWriter(tmp_path, "{lang}.json", indent=None)
        writer.write(result)

        assert (tmp_path / "en.json").read_text(encoding="utf-8") == (
            '{"greeting/hello": "Hello"}\n'
        )

    def test_template_without_lang(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="lang"):
            TranslationFileWriter(tmp_path, "translation.json")

    def test_default_template(self, tmp_path: Path) -> None:
        writer = TranslationFileWriter(tmp_path)

        assert writer.filename_template == DEFAULT_FILENAME_TEMPLATE
        assert writer.path_for("ja") == tmp_path / "translation.ja.json"

    def test_refuses_failed_result(self, tmp_path: Path) -> None:
        failed = ConversionResult.failed(
            StructuralError("No sheets", error_code=ErrorCode.NO_SHEETS)
        )

        with pytest.raises(ConversionError) as exc_info:
            TranslationFileWriter(tmp_path).write(failed)

        assert exc_info.value.details["error_code"] == ErrorCode.NO_SHEETS.value
        assert list(tmp_path.iterdir()) == []

    def test_write_failure(self, tmp_path: Path, result: ConversionResult) -> None:
        with (
            patch.object(Path, "write_text", side_effect=OSError("disk full")),
            pytest.raises(FileWriteError) as exc_info,
        ):
            TranslationFileWriter(tmp_path).write(result)

        assert exc_info.value.error_code is ErrorCode.FILE_WRITE_ERROR
        assert exc_info.value.file_path == str(tmp_path / "translation.en.json")

    @pytest.mark.parametrize("language", ["x/../..", "..", "en/US", "en\\US", ""])
    def test_rejects_language_codes_that_are_not_file_names(
        self, tmp_path: Path, language: str
    ) -> None:
        output_dir = tmp_path / "locales"
        result = ConversionResult.succeeded({"en": {"a": "A"}, language: {"a": "B"}})

        with pytest.raises(FileWriteError) as exc_info:
            TranslationFileWriter(output_dir).write(result)

        assert exc_info.value.details["language"] == language
        assert not output_dir.exists()

    def test_absolute_language_code_stays_inside_output_dir(
        self, tmp_path: Path
    ) -> None:
        output_dir = tmp_path / "locales"
        outside = tmp_path / "outside" / "evil"
        result = ConversionResult.succeeded({str(outside): {"a": "A"}})

        with pytest.raises(FileWriteError):
            TranslationFileWriter(output_dir, "{lang}.json").write(result)

        assert not outside.with_suffix(".json").exists()
        assert list(tmp_path.iterdir()) == []

    def test_template_escaping_output_dir(
        self, tmp_path: Path, result: ConversionResult
    ) -> None:
        writer = TranslationFileWriter(tmp_path / "locales", "../{lang}.json")

        with pytest.raises(FileWriteError):
            writer.write(result)

        assert list(tmp_path.iterdir()) == []

    def test_header_language_written_inside_output_dir(
        self, tmp_path: Path, xlsx_factory: Callable[..., bytes]
    ) -> None:
        outside = tmp_path / "outside" / "evil"
        content = xlsx_factory(
            [["category", "key", "en", str(outside)], ["ui", "save", "Save", "X"]]
        )
        result = ConversionService().convert_bytes(
            content, ConversionOptions(column_mode=ColumnMode.HEADER)
        )
        output_dir = tmp_path / "locales"

        paths = TranslationFileWriter(output_dir, "{lang}.json").write(result)

        assert paths == [output_dir / "en.json"]
        assert all(output_dir in path.parents for path in paths)
        assert not (tmp_path / "outside").exists()

    def test_output_dir_is_a_file(
        self, tmp_path: Path, result: ConversionResult
    ) -> None:
        blocker = tmp_path / "locales"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(FileWriteError):
            TranslationFileWriter(blocker).write(result)
