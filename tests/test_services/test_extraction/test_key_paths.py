"""Tests for key path construction."""

from excel_to_i18n.services.extraction import KeyPath, build_key_path, split_category
from excel_to_i18n.workbook import Cell


class TestKeyPath:
    def test_key_and_parents(self) -> None:
        path = KeyPath(("ui", "buttons", "submit"))

        assert path.key == "submit"
        assert path.parents == ("ui", "buttons")

    def test_join(self) -> None:
        path = KeyPath(("ui", "buttons", "submit"))

        assert path.join() == "ui/buttons/submit"
        assert path.join(".") == "ui.buttons.submit"

    def test_is_a_tuple(self) -> None:
        assert KeyPath(("a", "b")) == ("a", "b")
        assert hash(KeyPath(("a",))) == hash(("a",))


class TestSplitCategory:
    def test_single_segment(self) -> None:
        assert split_category("greeting") == ["greeting"]

    def test_multi_level(self) -> None:
        assert split_category("ui/buttons") == ["ui", "buttons"]

    def test_segments_are_trimmed_and_blanks_dropped(self) -> None:
        assert split_category(" ui / /buttons/ ") == ["ui", "buttons"]

    def test_empty(self) -> None:
        assert split_category("") == []

    def test_custom_delimiters(self) -> None:
        assert split_category("ui.buttons/form", "./") == ["ui", "buttons", "form"]
        assert split_category("ui.buttons") == ["ui.buttons"]


class TestBuildKeyPath:
    def test_category_and_key(self) -> None:
        path = build_key_path(Cell.from_value("ui/buttons"), Cell.from_value("submit"))

        assert path == KeyPath(("ui", "buttons", "submit"))
        assert path is not None and path.join() == "ui/buttons/submit"

    def test_without_category_column(self) -> None:
        assert build_key_path(None, Cell.from_value("title")) == ("title",)

    def test_empty_category(self) -> None:
        assert build_key_path(Cell.empty(), Cell.from_value("title")) == ("title",)

    def test_empty_key_yields_none(self) -> None:
        assert build_key_path(Cell.from_value("ui"), Cell.empty()) is None

    def test_whitespace_key_yields_none(self) -> None:
        assert build_key_path(Cell.from_value("ui"), Cell.from_value("   ")) is None

    def test_key_is_trimmed(self) -> None:
        assert build_key_path(None, Cell.from_value(" hello ")) == ("hello",)

    def test_numeric_key(self) -> None:
        assert build_key_path(Cell.from_value("errors"), Cell.from_value(404)) == (
            "errors",
            "404",
        )
