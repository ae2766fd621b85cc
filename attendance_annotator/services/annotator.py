from __future__ import annotations

import logging
from collections.abc import Iterable

from ..excel.styles import ACCENT_FONT, LEFT_ALIGN, StyleCategory, apply_style, resolve_category
from ..models.analysis_result import StaffSummary
from ..models.config_models import (
    SUMMARY_LABEL_COLUMN,
    SUMMARY_TOTAL_COLUMN,
    AnalysisConfig,
    OutputOptions,
)
from ..models.grid import Grid
from ..models.roster import RosterEntry
from .shift_policy import SATURDAY, evaluate_lateness
from .time_parser import first_line, parse_clock_in_minutes

logger = logging.getLogger(__name__)

"""Grid annotation: per-day lateness styling and per-staff summary cells.

Layout of a staff row (zero-based columns):
    0 .. days_in_month-1   one cell per calendar day (day d -> column d-1)
    31                     total late days for the month
    32                     staff label
"""

__all__ = [
    "GridAnnotator",
    "classify_day",
    "HEADER_TOTAL",
    "HEADER_LABEL",
]

HEADER_TOTAL = "TOTAL LATE"
HEADER_LABEL = "NAME & DEPARTMENT"

TOTAL_COLUMN_WIDTH = 15
LABEL_COLUMN_WIDTH = 30


def classify_day(is_saturday: bool, is_late: bool, has_style: bool) -> StyleCategory | None:
    """Style category to apply to a day cell, or None to leave it as is.

    DEFAULT only fills in cells that carry no style yet; WEEKEND and LATE
    always apply, LATE winning over WEEKEND.
    """
    return resolve_category(
        StyleCategory.DEFAULT if not has_style else None,
        StyleCategory.WEEKEND if is_saturday else None,
        StyleCategory.LATE if is_late else None,
    )


class GridAnnotator:
    """Annotates one log grid for one period."""

    def __init__(self, grid: Grid, config: AnalysisConfig, options: OutputOptions | None = None) -> None:
        self.grid = grid
        self.config = config
        self.options = options or OutputOptions()

    def prepare(self, roster: Iterable[RosterEntry]) -> None:
        """Widen the extent, size the summary columns and write their headers.

        Called once per run, before any staff row is annotated.
        """
        rows = [e.grid_row for e in roster]
        cur_row, _ = self.grid.extent
        max_row = max([cur_row, self.options.header_row, self.options.minimum_rows - 1, *rows])
        self.grid.ensure_extent(max_row, SUMMARY_LABEL_COLUMN)
        logger.debug("grid=%s extent=%s", self.grid.title, self.grid.extent)

        self.grid.set_column_width(SUMMARY_TOTAL_COLUMN, TOTAL_COLUMN_WIDTH)
        self.grid.set_column_width(SUMMARY_LABEL_COLUMN, LABEL_COLUMN_WIDTH)

        header = self.options.header_row
        apply_style(self.grid.write(header, SUMMARY_TOTAL_COLUMN, HEADER_TOTAL), StyleCategory.HEADER)
        apply_style(self.grid.write(header, SUMMARY_LABEL_COLUMN, HEADER_LABEL), StyleCategory.HEADER)

    def annotate_staff(self, entry: RosterEntry) -> StaffSummary:
        """Classify every day of the month for one staff row and write its summary."""
        r = entry.grid_row
        late_days: list[int] = []

        for day in range(1, self.config.days_in_month + 1):
            col = day - 1
            dow = self.config.weekday(day)
            text = self.grid.read_text(r, col).strip()

            is_late = False
            if text:
                clock_in = parse_clock_in_minutes(first_line(text))
                if clock_in is None:
                    logger.debug("row=%d day=%d no clock-in in %r", entry.row, day, text)
                else:
                    is_late = evaluate_lateness(entry.department, dow, clock_in).is_late

            category = classify_day(dow == SATURDAY, is_late, self.grid.has_style(r, col))
            if category is not None:
                apply_style(self.grid.cell(r, col), category)
            if is_late:
                late_days.append(day)

        late_count = len(late_days)
        total_cell = self.grid.write(r, SUMMARY_TOTAL_COLUMN, late_count)
        apply_style(total_cell, StyleCategory.SUMMARY, font=ACCENT_FONT if late_count > 0 else None)
        label_cell = self.grid.write(r, SUMMARY_LABEL_COLUMN, self.options.label_format.render(entry))
        apply_style(label_cell, StyleCategory.SUMMARY, alignment=LEFT_ALIGN)

        logger.debug("row=%d name=%s late=%d days=%s", entry.row, entry.name, late_count, late_days)
        return StaffSummary(
            row=entry.row,
            name=entry.name,
            department=entry.department,
            late_count=late_count,
            late_days=late_days,
        )
