"""Tests for the command line interface."""

import json
import os
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

import excel_to_i18n
from excel_to_i18n.cli import build_parser, main, options_from_args
from excel_to_i18n.options import ColumnMode, InputFormat, KeyStyle


@pytest.fixture
def greeting_file(tmp_path: Path, greeting_xlsx: bytes) -> Path:
    path = tmp_path / "strings.xlsx"
    path.write_bytes(greeting_xlsx)
    return path


class TestOptionsFromArgs:
    def test_defaults(self) -> None:
        options = options_from_args(build_parser().parse_args(["strings.xlsx"]))

        assert options.supported_languages == []
        assert options.category_column_index == 0
        assert options.key_column_index == 1
        assert options.value_start_column_index == 2
        assert options.column_mode is ColumnMode.POSITIONAL
        assert options.key_style is KeyStyle.FLAT
        assert options.input_format is None
        assert options.category_delimiters == "/"

    def test_all_flags(self) -> None:
        args = build_parser().parse_args(
            [
                "strings.csv",
                "-l",
                "en, ko",
                "--header-languages",
                "--nested",
                "--sheet",
                "UI",
                "--no-category",
                "--key-column",
                "0",
                "--value-start-column",
                "1",
                "--header-row",
                "2",
                "--data-start-row",
                "3",
                "--key-header",
                "key",
                "--category-delimiters",
                "/.",
                "--format",
                "csv",
            ]
        )
        options = options_from_args(args)

        assert options.supported_languages == ["en", "ko"]
        assert options.column_mode is ColumnMode.HEADER
        assert options.key_style is KeyStyle.NESTED
        assert options.sheet_name == "UI"
        assert options.category_column_index is None
        assert options.key_column_index == 0
        assert options.value_start_column_index == 1
        assert options.header_row_index == 2
        assert options.data_start_row_index == 3
        assert options.key_header == "key"
        assert options.category_delimiters == "/."
        assert options.input_format is InputFormat.CSV

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["strings.xlsx", "--key-column", "-1"])

    def test_category_flags_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["strings.xlsx", "--no-category", "--category-column", "1"]
            )

    def test_empty_category_delimiters_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["strings.xlsx", "--category-delimiters", ""])

    def test_watch_and_stdout_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["strings.xlsx", "--watch", "--stdout"])


class TestMain:
    """Tests for running the converter end to end."""

    def test_writes_translation_files(
        self,
        greeting_file: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        output_dir = tmp_path / "locales"

        exit_code = main([str(greeting_file), "-l", "en,ko", "-o", str(output_dir)])

        assert exit_code == 0
        ko = json.loads((output_dir / "translation.ko.json").read_text("utf-8"))
        assert ko == {"greeting/hello": "안녕", "greeting/bye": "잘가"}
        assert str(output_dir / "translation.en.json") in capsys.readouterr().out

    def test_stdout(
        self, greeting_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main(
            [str(greeting_file), "--header-languages", "--nested", "--stdout"]
        )

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert payload["translations"]["en"] == {
            "greeting": {"hello": "Hello", "bye": "Bye"}
        }

    def test_failed_conversion_exit_status(
        self,
        greeting_file: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        output_dir = tmp_path / "locales"

        exit_code = main(
            [str(greeting_file), "-l", "en", "--sheet", "Nope", "-o", str(output_dir)]
        )

        assert exit_code == 1
        assert "E2003" in capsys.readouterr().err
        assert not output_dir.exists()

    def test_failed_conversion_to_stdout(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main([str(tmp_path / "missing.xlsx"), "-l", "en", "--stdout"])

        assert exit_code == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is False
        assert payload["error_code"] == "E1001"
        assert payload["translations"] == {}

    def test_category_delimiters(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "strings.csv"
        source.write_text("category,key,en\nui.buttons,save,Save\n", encoding="utf-8")

        exit_code = main(
            [str(source), "-l", "en", "--category-delimiters", "/.", "--nested"]
            + ["--stdout"]
        )

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["translations"]["en"] == {"ui": {"buttons": {"save": "Save"}}}


class TestWatch:
    """Tests for regenerating translation files on spreadsheet changes."""

    def test_regenerates_on_change(
        self,
        greeting_file: Path,
        tmp_path: Path,
        xlsx_factory: Callable[..., bytes],
    ) -> None:
        output_dir = tmp_path / "locales"
        en_file = output_dir / "translation.en.json"
        seen: list[dict[str, str]] = []

        def fake_watch(path: str, on_change: Callable[[], Any]) -> None:
            assert path == str(greeting_file)
            seen.append(json.loads(en_file.read_text("utf-8")))
            greeting_file.write_bytes(
                xlsx_factory([["category", "key", "en"], ["ui", "save", "Save"]])
            )
            assert on_change() == 0

        with patch("excel_to_i18n.cli.watch_file", side_effect=fake_watch):
            exit_code = main(
                [str(greeting_file), "-l", "en", "-o", str(output_dir), "--watch"]
            )

        assert exit_code == 0
        assert seen == [{"greeting/hello": "Hello", "greeting/bye": "Bye"}]
        assert json.loads(en_file.read_text("utf-8")) == {"ui/save": "Save"}

    def test_keeps_watching_after_failed_conversion(
        self,
        tmp_path: Path,
        greeting_xlsx: bytes,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        source = tmp_path / "strings.xlsx"
        output_dir = tmp_path / "locales"

        def fake_watch(path: str, on_change: Callable[[], Any]) -> None:
            source.write_bytes(greeting_xlsx)
            on_change()

        with patch("excel_to_i18n.cli.watch_file", side_effect=fake_watch):
            exit_code = main(
                [str(source), "-l", "en,ko", "-o", str(output_dir), "--watch"]
            )

        assert exit_code == 0
        assert "E1001" in capsys.readouterr().err
        assert (output_dir / "translation.ko.json").is_file()

    def test_missing_directory(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "missing" / "strings.xlsx"

        exit_code = main([str(source), "-l", "en", "--watch"])

        assert exit_code == 1
        assert "Directory not found" in capsys.readouterr().err


class TestImports:
    def test_cli_does_not_build_the_api(self) -> None:
        """Importing the CLI must not create the FastAPI app or touch logging."""
        src_dir = Path(excel_to_i18n.__file__).resolve().parents[1]
        env = {**os.environ, "PYTHONPATH": str(src_dir)}
        code = (
            "import sys, excel_to_i18n.cli; "
            "print('excel_to_i18n.api' in sys.modules)"
        )

        completed = subprocess.run(
            [sys.executable, "-c", code],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )

        assert completed.stdout.strip() == "False"

    def test_app_is_available_from_the_package(self) -> None:
        from excel_to_i18n.api import app

        assert excel_to_i18n.app is app
        assert excel_to_i18n.__version__ == "0.1.0"
