"""Canonical string form of spreadsheet cells."""

from excel_to_i18n.workbook import Cell, CellKind

# Integral floats below this magnitude print exactly as integers.
_MAX_EXACT_FLOAT_INT = 2**53


def coerce_cell(cell: Cell) -> str:
    """Convert a typed cell into the string stored in a language document.

    Integers are printed losslessly. Integral floats drop the fractional part
    (``3.0`` becomes ``"3"``); other floats use the shortest representation
    that parses back to the same value (``3.5`` becomes ``"3.5"``). Booleans
    become ``"true"``/``"false"`` and empty cells ``""``.
    """
    kind = cell.kind
    value = cell.value

    if kind is CellKind.EMPTY or value is None:
        return ""
    if kind is CellKind.TEXT:
        return str(value)
    if kind is CellKind.BOOLEAN:
        return "true" if value else "false"
    if kind is CellKind.INTEGER:
        return str(int(value))
    if kind is CellKind.FLOAT:
        return _format_float(float(value))
    return str(value)


def _format_float(value: float) -> str:
    if value.is_integer() and abs(value) < _MAX_EXACT_FLOAT_INT:
        return str(int(value))
    return repr(value)
