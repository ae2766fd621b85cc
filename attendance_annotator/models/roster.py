from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Roster domain model: physical sheet row -> staff identity.

The roster couples a staff member to the 1-based row that holds their punches
in the monthly log sheet. It is loaded once from configuration
(see attendance_annotator.config.loader) and never mutated during a run.
"""

__all__ = [
    "Department",
    "RosterEntry",
]


class Department(Enum):
    """Department whose shift policy applies to a staff member.

    - ADMIN: fixed office hours (weekday 08:30, Saturday 14:00)
    - CLINICAL: morning/afternoon shift inferred from the clock-in time
    - DOCTOR: nearest of a fixed set of shift starts
    """
    ADMIN = "ADMIN"
    CLINICAL = "CLINICAL"
    DOCTOR = "DOCTOR"

    @classmethod
    def parse(cls, raw: str) -> Department:
        """Parse a department name, accepting the legacy log labels.

        Raises:
            ValueError: unknown department name
        """
        key = str(raw).strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown department: {raw!r}") from None


# Malay spellings used in clinic rosters
_ALIASES = {
    "DOKTOR": "DOCTOR",
    "KLINIKAL": "CLINICAL",
}


@dataclass(frozen=True)
class RosterEntry:
    """One rostered staff member."""
    row: int  # 1-based physical row in the log sheet
    name: str
    department: Department

    def __post_init__(self) -> None:
        if self.row < 1:
            raise ValueError(f"roster row must be >= 1, got {self.row}")

    @property
    def grid_row(self) -> int:
        """Zero-based row index used by Grid addressing."""
        return self.row - 1
