from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import pandas as pd

from .config_models import AnalysisConfig
from .roster import Department

"""Result models for one annotation run.

LatenessResult is transient (one per staff/day). StaffSummary is what the
annotator folds the month into for one roster entry, and AnalysisResult
aggregates a whole run for the SUMMARY line and the optional CSV export.
"""


@dataclass(frozen=True)
class LatenessResult:
    is_late: bool
    limit_minutes: int | None  # None when no shift rule applies


@dataclass(frozen=True)
class StaffSummary:
    """Per-staff monthly outcome."""
    row: int  # 1-based physical row
    name: str
    department: Department
    late_count: int
    late_days: list[int] = field(default_factory=list)  # days of month flagged LATE


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregated outcome of one run."""
    config: AnalysisConfig
    summaries: list[StaffSummary]
    output_name: str
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: Path | None = None  # None until the workbook is saved

    @property
    def total_late(self) -> int:
        return sum(s.late_count for s in self.summaries)

    @property
    def late_staff(self) -> int:
        return sum(1 for s in self.summaries if s.late_count > 0)

    def to_frame(self) -> pd.DataFrame:
        """One row per rostered staff member, in roster order."""
        return pd.DataFrame(
            [
                {
                    "row": s.row,
                    "name": s.name,
                    "department": s.department.value,
                    "late_count": s.late_count,
                    "late_days": " ".join(str(d) for d in s.late_days),
                }
                for s in self.summaries
            ],
            columns=["row", "name", "department", "late_count", "late_days"],
        )
