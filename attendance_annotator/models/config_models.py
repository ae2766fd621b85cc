from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .roster import RosterEntry

"""Config dataclasses for the attendance annotator.

AnalysisConfig is the per-run period (year/month) chosen by the caller.
AnalysisSettings is the static configuration loaded from config/analysis.yml:
the roster plus the output format options.
"""

SUMMARY_TOTAL_COLUMN = 31  # zero-based, sheet column AF
SUMMARY_LABEL_COLUMN = 32  # zero-based, sheet column AG


class LabelFormat(Enum):
    """Format of the staff label written into the label column."""
    NAME_DEPARTMENT = "name_department"  # "HARIZAN (ADMIN)"
    ROW_NAME = "row_name"  # "9-harizan"

    def render(self, entry: RosterEntry) -> str:
        if self is LabelFormat.ROW_NAME:
            return f"{entry.row}-{entry.name}"
        return f"{entry.name.upper()} ({entry.department.value})"


@dataclass(frozen=True)
class AnalysisConfig:
    """Period under analysis."""
    year: int
    month: int  # 1-12

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be within 1-12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"year out of range: {self.year}")

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def weekday(self, day: int) -> int:
        """Day of week for a day of this month, 0=Sunday .. 6=Saturday."""
        # date.weekday() is Monday=0
        return (date(self.year, self.month, day).weekday() + 1) % 7

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class OutputOptions:
    """Output layout options.

    header_row and label_format differ between deployments of the log
    template, so both are configuration rather than fixed behaviour.
    """
    directory: str = "./output"
    label_format: LabelFormat = LabelFormat.NAME_DEPARTMENT
    header_row: int = 0  # zero-based row receiving the summary headers
    sheet_title: str = "Logs Analyzed"
    minimum_rows: int = 301  # declared extent always covers this many rows

    def __post_init__(self) -> None:
        if self.header_row < 0:
            raise ValueError(f"header_row must be >= 0, got {self.header_row}")
        if self.minimum_rows < 1:
            raise ValueError(f"minimum_rows must be >= 1, got {self.minimum_rows}")


@dataclass(frozen=True)
class AnalysisSettings:
    """Root configuration object (roster + output options)."""
    roster: tuple[RosterEntry, ...]
    output: OutputOptions = field(default_factory=OutputOptions)
