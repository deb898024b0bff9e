from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from openpyxl import Workbook as OpenpyxlWorkbook

from excel_to_i18n.workbook import Sheet, Workbook

XlsxFactory = Callable[..., bytes]

GREETING_ROWS: list[list[Any]] = [
    ["category", "key", "en", "ko"],
    ["greeting", "hello", "Hello", "안녕"],
    ["greeting", "bye", "Bye", "잘가"],
]


def build_xlsx(sheets: dict[str, Sequence[Sequence[Any]]]) -> bytes:
    """Serialize ``{sheet name: rows}`` into XLSX bytes."""
    wb = OpenpyxlWorkbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(list(row))
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_factory() -> XlsxFactory:
    """Build XLSX bytes from rows (single sheet) or a mapping of sheets."""

    def factory(
        rows: Sequence[Sequence[Any]] | None = None,
        *,
        sheet_name: str = "Sheet1",
        sheets: dict[str, Sequence[Sequence[Any]]] | None = None,
    ) -> bytes:
        if sheets is None:
            sheets = {sheet_name: rows or []}
        return build_xlsx(sheets)

    return factory


@pytest.fixture
def greeting_xlsx(xlsx_factory: XlsxFactory) -> bytes:
    return xlsx_factory(GREETING_ROWS)


@pytest.fixture
def greeting_workbook() -> Workbook:
    return Workbook(sheets=[Sheet.from_values("Sheet1", GREETING_ROWS)])
