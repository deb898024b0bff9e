"""Tests for flat and nested document assembly."""

from excel_to_i18n.options import KeyStyle
from excel_to_i18n.services.extraction import (
    FlatDocumentAssembler,
    KeyPath,
    NestedDocumentAssembler,
    TranslationEntry,
    create_assembler,
)


def _entry(path: tuple[str, ...], value: str, language: str = "en") -> TranslationEntry:
    return TranslationEntry(language=language, path=KeyPath(path), value=value)


class TestFlatAssembly:
    def test_joins_path_with_slash(self) -> None:
        assembler = FlatDocumentAssembler(["en"])
        assembler.add(_entry(("ui", "buttons", "submit"), "Submit"))

        assert assembler.documents() == {"en": {"ui/buttons/submit": "Submit"}}

    def test_last_write_wins(self) -> None:
        assembler = FlatDocumentAssembler(["en"]).add_all(
            [_entry(("ui", "ok"), "OK"), _entry(("ui", "ok"), "Okay")]
        )

        assert assembler.documents()["en"] == {"ui/ok": "Okay"}
        assert assembler.entry_count == 2

    def test_languages_without_entries_get_empty_documents(self) -> None:
        assembler = FlatDocumentAssembler(["en", "ko"])
        assembler.add(_entry(("title",), "Title"))

        assert assembler.documents() == {"en": {"title": "Title"}, "ko": {}}

    def test_scalar_and_deeper_key_coexist(self) -> None:
        assembler = FlatDocumentAssembler().add_all(
            [_entry(("ui",), "UI"), _entry(("ui", "ok"), "OK")]
        )

        assert assembler.documents()["en"] == {"ui": "UI", "ui/ok": "OK"}


class TestNestedAssembly:
    def test_builds_tree(self) -> None:
        assembler = NestedDocumentAssembler(["en"])
        assembler.add(_entry(("ui", "buttons", "submit"), "Submit"))

        assert assembler.documents() == {
            "en": {"ui": {"buttons": {"submit": "Submit"}}}
        }

    def test_reuses_intermediate_objects(self) -> None:
        assembler = NestedDocumentAssembler().add_all(
            [
                _entry(("ui", "buttons", "submit"), "Submit"),
                _entry(("ui", "buttons", "cancel"), "Cancel"),
                _entry(("ui", "title"), "Title"),
            ]
        )

        assert assembler.documents()["en"] == {
            "ui": {
                "buttons": {"submit": "Submit", "cancel": "Cancel"},
                "title": "Title",
            }
        }

    def test_last_write_wins(self) -> None:
        assembler = NestedDocumentAssembler().add_all(
            [_entry(("ui", "ok"), "OK"), _entry(("ui", "ok"), "Okay")]
        )

        assert assembler.documents()["en"] == {"ui": {"ok": "Okay"}}

    def test_scalar_replaced_by_subtree(self) -> None:
        assembler = NestedDocumentAssembler().add_all(
            [_entry(("ui",), "UI"), _entry(("ui", "ok"), "OK")]
        )

        assert assembler.documents()["en"] == {"ui": {"ok": "OK"}}

    def test_subtree_replaced_by_scalar(self) -> None:
        assembler = NestedDocumentAssembler().add_all(
            [
                _entry(("ui", "buttons", "ok"), "OK"),
                _entry(("ui", "buttons"), "Buttons"),
            ]
        )

        assert assembler.documents()["en"] == {"ui": {"buttons": "Buttons"}}

    def test_languages_are_independent(self) -> None:
        assembler = NestedDocumentAssembler(["en", "ko"]).add_all(
            [_entry(("ui", "ok"), "OK"), _entry(("ui", "ok"), "확인", "ko")]
        )

        assert assembler.documents() == {
            "en": {"ui": {"ok": "OK"}},
            "ko": {"ui": {"ok": "확인"}},
        }


def test_documents_returns_a_copy() -> None:
    assembler = NestedDocumentAssembler(["en"])
    assembler.add(_entry(("ui", "ok"), "OK"))

    documents = assembler.documents()
    documents["en"]["ui"]["ok"] = "changed"

    assert assembler.documents()["en"] == {"ui": {"ok": "OK"}}


def test_create_assembler() -> None:
    assert isinstance(create_assembler(KeyStyle.FLAT), FlatDocumentAssembler)
    nested = create_assembler(KeyStyle.NESTED, ["en"])
    assert isinstance(nested, NestedDocumentAssembler)
    assert nested.documents() == {"en": {}}
