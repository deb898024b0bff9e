"""Extraction stages turning sheet rows into per-language documents."""

from excel_to_i18n.services.extraction.cell_coercion import coerce_cell
from excel_to_i18n.services.extraction.column_resolution import (
    ResolvedColumns,
    resolve_columns,
)
from excel_to_i18n.services.extraction.document_assembly import (
    Document,
    DocumentAssembler,
    FlatDocumentAssembler,
    NestedDocumentAssembler,
    create_assembler,
)
from excel_to_i18n.services.extraction.key_paths import (
    KeyPath,
    build_key_path,
    split_category,
)
from excel_to_i18n.services.extraction.row_extraction import (
    ExtractionStats,
    RowExtractor,
    TranslationEntry,
)

__all__ = [
    # Cells and key paths
    "KeyPath",
    "build_key_path",
    "coerce_cell",
    "split_category",
    # Columns
    "ResolvedColumns",
    "resolve_columns",
    # Rows
    "ExtractionStats",
    "RowExtractor",
    "TranslationEntry",
    # Documents
    "Document",
    "DocumentAssembler",
    "FlatDocumentAssembler",
    "NestedDocumentAssembler",
    "create_assembler",
]
