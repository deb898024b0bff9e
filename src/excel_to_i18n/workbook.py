"""Dataclasses representing a decoded spreadsheet."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any


class CellKind(str, Enum):
    """Kind of value held by a cell."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    """A single typed cell value."""

    kind: CellKind
    value: str | int | float | bool | None = None

    @classmethod
    def empty(cls) -> Cell:
        return _EMPTY_CELL

    @classmethod
    def from_value(cls, value: Any) -> Cell:
        """Classify a raw value produced by a spreadsheet decoder."""
        if value is None:
            return _EMPTY_CELL
        # bool is a subclass of int
        if isinstance(value, bool):
            return cls(CellKind.BOOLEAN, value)
        if isinstance(value, int):
            return cls(CellKind.INTEGER, value)
        if isinstance(value, float):
            return cls(CellKind.FLOAT, value)
        if isinstance(value, (datetime, date, time)):
            return cls(CellKind.TEXT, value.isoformat())
        text = value if isinstance(value, str) else str(value)
        if text == "":
            return _EMPTY_CELL
        return cls(CellKind.TEXT, text)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY


_EMPTY_CELL = Cell(CellKind.EMPTY, None)

Row = Sequence[Cell]


def cell_at(row: Row, index: int | None) -> Cell:
    """Return the cell at ``index``, or an empty cell when out of range."""
    if index is None or index < 0 or index >= len(row):
        return _EMPTY_CELL
    return row[index]


@dataclass
class Sheet:
    """Represents a single worksheet within a workbook."""

    name: str
    rows: list[list[Cell]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def row_at(self, index: int) -> list[Cell] | None:
        """Return the row at ``index`` or None when it does not exist."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    @classmethod
    def from_values(cls, name: str, values: Sequence[Sequence[Any]]) -> Sheet:
        """Build a sheet from plain Python values, one sequence per row."""
        return cls(
            name=name,
            rows=[[Cell.from_value(value) for value in row] for row in values],
        )


@dataclass
class Workbook:
    """Represents a decoded workbook.

    ``sheet_names`` lists every sheet in workbook order. ``sheets`` holds the
    sheets whose rows were materialized, which may be a subset when the
    reader was asked for a single sheet.
    """

    sheets: list[Sheet] = field(default_factory=list)
    sheet_names: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.sheet_names:
            self.sheet_names = [sheet.name for sheet in self.sheets]

    def get_sheet(self, name: str) -> Sheet | None:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None
