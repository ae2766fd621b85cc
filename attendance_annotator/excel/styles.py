from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

"""Visual categories for annotated cells.

Each category is a complete style (fill, font, border, alignment). Applying a
category replaces all four attributes so a cell always shows exactly one
category. The enum order is the precedence order used when several categories
could apply to the same day cell.
"""

__all__ = [
    "StyleCategory",
    "CellStyle",
    "STYLES",
    "apply_style",
    "resolve_category",
]


class StyleCategory(IntEnum):
    DEFAULT = 0
    WEEKEND = 1
    LATE = 2
    SUMMARY = 3
    HEADER = 4


_thin = Side(style="thin")
_border = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
_center_wrap = Alignment(horizontal="center", vertical="center", wrap_text=True)
_center = Alignment(horizontal="center", vertical="center")


@dataclass(frozen=True)
class CellStyle:
    fill: PatternFill
    font: Font
    alignment: Alignment
    border: Border = _border


STYLES: dict[StyleCategory, CellStyle] = {
    StyleCategory.DEFAULT: CellStyle(
        fill=PatternFill(fill_type=None),
        font=Font(),
        alignment=_center_wrap,
    ),
    StyleCategory.WEEKEND: CellStyle(
        fill=PatternFill(start_color="FFCCEAFF", end_color="FFCCEAFF", fill_type="solid"),
        font=Font(),
        alignment=_center_wrap,
    ),
    StyleCategory.LATE: CellStyle(
        fill=PatternFill(start_color="FFFF0000", end_color="FFFF0000", fill_type="solid"),
        font=Font(color="FFFFFFFF", bold=True),
        alignment=_center_wrap,
    ),
    StyleCategory.SUMMARY: CellStyle(
        fill=PatternFill(start_color="FFFFF2CC", end_color="FFFFF2CC", fill_type="solid"),
        font=Font(bold=True),
        alignment=_center,
    ),
    StyleCategory.HEADER: CellStyle(
        fill=PatternFill(start_color="FF333333", end_color="FF333333", fill_type="solid"),
        font=Font(color="FFFFFFFF", bold=True),
        alignment=_center,
    ),
}

# Accent for a non-zero late total
ACCENT_FONT = Font(color="FFFF0000", bold=True)
LEFT_ALIGN = Alignment(horizontal="left", vertical="center")


def apply_style(
    cell: Cell,
    category: StyleCategory,
    *,
    font: Font | None = None,
    alignment: Alignment | None = None,
) -> None:
    """Replace the cell's style with the given category.

    font / alignment override the category's own value (accent colouring of
    the late total, left aligned label) without mixing in any other category.
    """
    style = STYLES[category]
    cell.fill = style.fill
    cell.font = font if font is not None else style.font
    cell.alignment = alignment if alignment is not None else style.alignment
    cell.border = style.border


def resolve_category(*candidates: StyleCategory | None) -> StyleCategory | None:
    """Highest-precedence category among the applicable ones (None if none)."""
    present = [c for c in candidates if c is not None]
    if not present:
        return None
    return max(present)
