"""Output generation for conversion results.

This module writes per-language translation documents to JSON files.
"""

from excel_to_i18n.output.json_writer import (
    DEFAULT_FILENAME_TEMPLATE,
    TranslationFileWriter,
)

__all__ = [
    "DEFAULT_FILENAME_TEMPLATE",
    "TranslationFileWriter",
]
