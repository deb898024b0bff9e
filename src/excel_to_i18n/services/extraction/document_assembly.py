"""Assembly of translation entries into per-language documents.

Two document shapes are produced:

- Flat: ``{"ui/buttons/submit": "Submit"}``. The key path is joined with
  ``/`` into a single key.
- Nested: ``{"ui": {"buttons": {"submit": "Submit"}}}``. Each key path
  segment becomes one object level.

Both shapes are last-write-wins: an entry that lands on an existing location
replaces what was there. In nested mode that includes a scalar standing where
an intermediate object is needed (the scalar is dropped) and an object
standing where the final value goes (the whole subtree is dropped).
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from excel_to_i18n.options import KeyStyle
from excel_to_i18n.services.extraction.key_paths import KeyPath
from excel_to_i18n.services.extraction.row_extraction import TranslationEntry
from excel_to_i18n.utils.logging import get_logger

logger = get_logger(__name__)

FLAT_KEY_DELIMITER = "/"

Document = dict[str, Any]


class DocumentAssembler(ABC):
    """Accumulates entries into one document per language."""

    key_style: KeyStyle

    def __init__(self, languages: Iterable[str] = ()) -> None:
        self._documents: dict[str, Document] = {}
        self.entry_count = 0
        for language in languages:
            self._documents.setdefault(language, {})

    def add(self, entry: TranslationEntry) -> None:
        document = self._documents.setdefault(entry.language, {})
        self._place(document, entry.path, entry.value)
        self.entry_count += 1

    def add_all(self, entries: Iterable[TranslationEntry]) -> DocumentAssembler:
        for entry in entries:
            self.add(entry)
        return self

    def documents(self) -> dict[str, Document]:
        """Return a copy of every language document."""
        return copy.deepcopy(self._documents)

    @abstractmethod
    def _place(self, document: Document, path: KeyPath, value: str) -> None:
        """Store ``value`` at ``path`` inside ``document``."""


class FlatDocumentAssembler(DocumentAssembler):
    """Single-level documents keyed by the joined key path."""

    key_style = KeyStyle.FLAT

    def __init__(
        self, languages: Iterable[str] = (), delimiter: str = FLAT_KEY_DELIMITER
    ) -> None:
        super().__init__(languages)
        self.delimiter = delimiter

    def _place(self, document: Document, path: KeyPath, value: str) -> None:
        document[path.join(self.delimiter)] = value


class NestedDocumentAssembler(DocumentAssembler):
    """Documents with one object level per key path segment."""

    key_style = KeyStyle.NESTED

    def _place(self, document: Document, path: KeyPath, value: str) -> None:
        node = document
        for segment in path.parents:
            child = node.get(segment)
            if not isinstance(child, dict):
                if child is not None:
                    logger.debug(
                        "Replacing value with nested object",
                        segment=segment,
                        path=path.join(FLAT_KEY_DELIMITER),
                    )
                child = {}
                node[segment] = child
            node = child

        if isinstance(node.get(path.key), dict):
            logger.debug(
                "Replacing nested object with value",
                path=path.join(FLAT_KEY_DELIMITER),
            )
        node[path.key] = value


def create_assembler(
    key_style: KeyStyle, languages: Iterable[str] = ()
) -> DocumentAssembler:
    """Return the assembler for ``key_style``."""
    if key_style is KeyStyle.NESTED:
        return NestedDocumentAssembler(languages)
    return FlatDocumentAssembler(languages)
