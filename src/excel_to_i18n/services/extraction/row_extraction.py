"""Extraction of translation entries from data rows."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from excel_to_i18n.options import DEFAULT_CATEGORY_DELIMITERS
from excel_to_i18n.services.extraction.cell_coercion import coerce_cell
from excel_to_i18n.services.extraction.column_resolution import ResolvedColumns
from excel_to_i18n.services.extraction.key_paths import KeyPath, build_key_path
from excel_to_i18n.utils.logging import get_logger
from excel_to_i18n.workbook import Row, cell_at

logger = get_logger(__name__)


@dataclass(frozen=True)
class TranslationEntry:
    """One translated value extracted from one row for one language."""

    language: str
    path: KeyPath
    value: str
    row_index: int = -1


@dataclass
class ExtractionStats:
    """Counters collected while walking the data rows."""

    rows_processed: int = 0
    rows_skipped: int = 0
    entries_emitted: int = 0
    empty_values: int = 0
    entries_per_language: dict[str, int] = field(default_factory=dict)


class RowExtractor:
    """Walk data rows top to bottom and emit translation entries.

    Rows without a key are skipped. A language whose cell is empty on a row
    contributes nothing for that row. Column indices beyond the end of a row
    read as empty cells.
    """

    def __init__(
        self,
        columns: ResolvedColumns,
        category_delimiters: str = DEFAULT_CATEGORY_DELIMITERS,
    ) -> None:
        self.columns = columns
        self.category_delimiters = category_delimiters
        self.stats = ExtractionStats(
            entries_per_language={language: 0 for language in columns.languages}
        )

    def extract(
        self, rows: Sequence[Row], start_index: int = 0
    ) -> Iterator[TranslationEntry]:
        """Yield entries for ``rows[start_index:]`` in row order."""
        for row_index in range(max(start_index, 0), len(rows)):
            yield from self.extract_row(rows[row_index], row_index)

    def extract_row(self, row: Row, row_index: int = -1) -> Iterator[TranslationEntry]:
        """Yield the entries contributed by a single row."""
        self.stats.rows_processed += 1

        category_index = self.columns.category_column_index
        category_cell = (
            cell_at(row, category_index) if category_index is not None else None
        )
        path = build_key_path(
            category_cell,
            cell_at(row, self.columns.key_column_index),
            self.category_delimiters,
        )
        if path is None:
            self.stats.rows_skipped += 1
            logger.debug("Skipping row without key", row=row_index)
            return

        for language, column in self.columns.language_columns:
            value = coerce_cell(cell_at(row, column))
            if not value:
                self.stats.empty_values += 1
                continue
            self.stats.entries_emitted += 1
            self.stats.entries_per_language[language] = (
                self.stats.entries_per_language.get(language, 0) + 1
            )
            yield TranslationEntry(
                language=language, path=path, value=value, row_index=row_index
            )
