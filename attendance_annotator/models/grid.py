from __future__ import annotations

from datetime import datetime, time
from typing import Any

from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

"""Grid model over an openpyxl worksheet.

The annotator only needs a 2-D grid of typed cells with optional style,
addressed by zero-based (row, col) and with a declared extent. Grid adapts the
1-based openpyxl worksheet API to that model.

Reading never creates cells: openpyxl's ws.cell() materialises the cell it is
asked for, so reads go through the worksheet's private cell map instead.
"""

__all__ = [
    "Grid",
]


def _cell_map(worksheet: Worksheet) -> dict[tuple[int, int], Cell]:
    """Existing cells keyed by 1-based (row, column).

    Relies on openpyxl internals (Worksheet._cells, stable across 3.1.x); this
    is the only place that touches them.
    """
    return worksheet._cells


class Grid:
    def __init__(self, worksheet: Worksheet) -> None:
        self.worksheet = worksheet

    @property
    def title(self) -> str:
        return self.worksheet.title

    @property
    def extent(self) -> tuple[int, int]:
        """Declared extent as zero-based (max_row, max_col)."""
        return self.worksheet.max_row - 1, self.worksheet.max_column - 1

    def ensure_extent(self, max_row: int, max_col: int) -> None:
        """Widen the declared extent to cover (max_row, max_col), zero-based.

        Touching the bottom-right corner is enough for openpyxl to report the
        larger dimension; existing cells are left as they are.
        """
        cur_row, cur_col = self.extent
        if max_row > cur_row or max_col > cur_col:
            self.worksheet.cell(row=max(max_row, cur_row) + 1, column=max(max_col, cur_col) + 1)

    def peek(self, row: int, col: int) -> Cell | None:
        """Existing cell at (row, col) or None; never creates one."""
        return _cell_map(self.worksheet).get((row + 1, col + 1))

    def cell(self, row: int, col: int) -> Cell:
        """Cell at (row, col), created if missing."""
        return self.worksheet.cell(row=row + 1, column=col + 1)

    def value(self, row: int, col: int) -> Any:
        c = self.peek(row, col)
        return None if c is None else c.value

    def read_text(self, row: int, col: int) -> str:
        """Cell content as text; missing or empty cells read as ""."""
        value = self.value(row, col)
        if value is None:
            return ""
        # typed punch times are shown as HH:MM in the sheet
        if isinstance(value, (datetime, time)):
            return value.strftime("%H:%M")
        return str(value)

    def has_style(self, row: int, col: int) -> bool:
        c = self.peek(row, col)
        return c is not None and c.has_style

    def write(self, row: int, col: int, value: Any) -> Cell:
        c = self.cell(row, col)
        c.value = value
        return c

    def set_column_width(self, col: int, width: float) -> None:
        self.worksheet.column_dimensions[get_column_letter(col + 1)].width = width
