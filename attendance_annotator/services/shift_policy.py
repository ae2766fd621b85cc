from __future__ import annotations

from ..models.analysis_result import LatenessResult
from ..models.roster import Department

"""Per-department shift policies.

All times are minutes since midnight; day_of_week uses 0=Sunday .. 6=Saturday.

- ADMIN: Monday-Thursday 08:30, Saturday 14:00. Friday and Sunday have no
  rule, so ADMIN staff are never late on those days.
- CLINICAL: the shift is inferred from the punch itself. Before 12:00 it is
  the morning shift (08:00), otherwise the afternoon shift (16:00).
- DOCTOR: the shift start closest to the punch applies
  (Friday 09:00/15:00, other days 09:00/14:30/20:00).

A punch is late only when it is more than GRACE_MINUTES past the limit.
"""

__all__ = [
    "GRACE_MINUTES",
    "compute_limit_minutes",
    "nearest_shift",
    "evaluate_lateness",
]

GRACE_MINUTES = 4

SUNDAY, FRIDAY, SATURDAY = 0, 5, 6

ADMIN_WEEKDAY_LIMIT = 8 * 60 + 30
ADMIN_SATURDAY_LIMIT = 14 * 60

CLINICAL_SHIFT_SPLIT = 12 * 60
CLINICAL_MORNING_LIMIT = 8 * 60
CLINICAL_AFTERNOON_LIMIT = 16 * 60

DOCTOR_FRIDAY_SHIFTS = (9 * 60, 15 * 60)
DOCTOR_SHIFTS = (9 * 60, 14 * 60 + 30, 20 * 60)


def nearest_shift(candidates: tuple[int, ...], clock_in: int) -> int:
    """Candidate closest to clock_in; on a tie the earlier candidate wins."""
    best = candidates[0]
    for cand in candidates[1:]:
        if abs(cand - clock_in) < abs(best - clock_in):
            best = cand
    return best


def compute_limit_minutes(department: Department, day_of_week: int, clock_in: int) -> int | None:
    """Latest on-time clock-in (before grace) or None when no rule applies."""
    if department is Department.ADMIN:
        if 1 <= day_of_week <= 4:
            return ADMIN_WEEKDAY_LIMIT
        if day_of_week == SATURDAY:
            return ADMIN_SATURDAY_LIMIT
        return None
    if department is Department.CLINICAL:
        if clock_in < CLINICAL_SHIFT_SPLIT:
            return CLINICAL_MORNING_LIMIT
        return CLINICAL_AFTERNOON_LIMIT
    if department is Department.DOCTOR:
        shifts = DOCTOR_FRIDAY_SHIFTS if day_of_week == FRIDAY else DOCTOR_SHIFTS
        return nearest_shift(shifts, clock_in)
    raise ValueError(f"unsupported department: {department!r}")


def evaluate_lateness(department: Department, day_of_week: int, clock_in: int | None) -> LatenessResult:
    if clock_in is None:
        return LatenessResult(is_late=False, limit_minutes=None)
    limit = compute_limit_minutes(department, day_of_week, clock_in)
    if limit is None:
        return LatenessResult(is_late=False, limit_minutes=None)
    return LatenessResult(is_late=clock_in > limit + GRACE_MINUTES, limit_minutes=limit)
