"""Writing language documents to JSON translation files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from excel_to_i18n.options import is_safe_language_code
from excel_to_i18n.services.conversion import ConversionResult
from excel_to_i18n.utils.exceptions import ConversionError, FileWriteError
from excel_to_i18n.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FILENAME_TEMPLATE = "translation.{lang}.json"


class TranslationFileWriter:
    """Writes one JSON file per language of a successful conversion.

    Files are named from ``filename_template`` (``{lang}`` is replaced by the
    language code) and written as UTF-8 without ASCII escaping, so scripts
    such as Hangul stay readable.
    """

    def __init__(
        self,
        output_dir: str | Path,
        filename_template: str = DEFAULT_FILENAME_TEMPLATE,
        indent: int | None = 2,
    ) -> None:
        if "{lang}" not in filename_template:
            raise ValueError(
                f"filename_template must contain '{{lang}}': {filename_template}"
            )
        self.output_dir = Path(output_dir)
        self.filename_template = filename_template
        self.indent = indent

    def path_for(self, language: str) -> Path:
        """Return the file path for ``language``.

        Raises:
            FileWriteError: If the language code is not a plain file name
                component or the path would fall outside ``output_dir``.
        """
        path = self.output_dir / self.filename_template.format(lang=language)
        if not is_safe_language_code(language) or not path.resolve().is_relative_to(
            self.output_dir.resolve()
        ):
            raise FileWriteError(
                f"Language code {language!r} cannot be used as a file name",
                file_path=str(path),
                details={"language": language},
            )
        return path

    def render(self, document: dict[str, Any]) -> str:
        return json.dumps(document, ensure_ascii=False, indent=self.indent) + "\n"

    def write(self, result: ConversionResult) -> list[Path]:
        """Write every language document of ``result``.

        Returns:
            Paths of the written files, in language order.

        Raises:
            ConversionError: If the result is a failed conversion.
            FileWriteError: If a language code is not a valid file name, or
                the directory or a file cannot be written. Nothing is written
                when a language code is rejected.
        """
        if not result.success:
            raise ConversionError(
                f"Cannot write translations of a failed conversion: {result.error}",
                details={"error_code": result.error_code},
            )

        paths = {language: self.path_for(language) for language in result.translations}

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileWriteError(
                f"Cannot create output directory: {e}",
                file_path=str(self.output_dir),
            ) from e

        written: list[Path] = []
        for language, document in result.translations.items():
            path = paths[language]
            try:
                path.write_text(self.render(document), encoding="utf-8")
            except OSError as e:
                raise FileWriteError(
                    f"Cannot write translation file: {e}", file_path=str(path)
                ) from e
            written.append(path)
            logger.info("Wrote translation file", language=language, path=str(path))
        return written
