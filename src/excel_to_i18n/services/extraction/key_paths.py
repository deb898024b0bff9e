"""Key paths locating a translation inside a language document."""

from __future__ import annotations

import re
from functools import lru_cache

from excel_to_i18n.options import DEFAULT_CATEGORY_DELIMITERS
from excel_to_i18n.services.extraction.cell_coercion import coerce_cell
from excel_to_i18n.workbook import Cell


class KeyPath(tuple[str, ...]):
    """Ordered, non-empty segments: category segments followed by the key."""

    __slots__ = ()

    @property
    def key(self) -> str:
        return self[-1]

    @property
    def parents(self) -> tuple[str, ...]:
        return tuple(self[:-1])

    def join(self, delimiter: str = "/") -> str:
        return delimiter.join(self)


@lru_cache(maxsize=32)
def _splitter(delimiters: str) -> re.Pattern[str]:
    return re.compile(f"[{re.escape(delimiters)}]")


def split_category(
    category: str, delimiters: str = DEFAULT_CATEGORY_DELIMITERS
) -> list[str]:
    """Split a category label into trimmed, non-empty segments."""
    if not category:
        return []
    segments = (part.strip() for part in _splitter(delimiters).split(category))
    return [segment for segment in segments if segment]


def build_key_path(
    category_cell: Cell | None,
    key_cell: Cell,
    delimiters: str = DEFAULT_CATEGORY_DELIMITERS,
) -> KeyPath | None:
    """Build the key path for one row.

    Returns None when the key is empty, meaning the row contributes nothing.
    """
    key = coerce_cell(key_cell).strip()
    if not key:
        return None

    category = coerce_cell(category_cell) if category_cell is not None else ""
    return KeyPath((*split_category(category, delimiters), key))
