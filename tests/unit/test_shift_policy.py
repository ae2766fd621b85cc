from __future__ import annotations

import pytest

from attendance_annotator.models.roster import Department
from attendance_annotator.services.shift_policy import (
    GRACE_MINUTES,
    compute_limit_minutes,
    evaluate_lateness,
    nearest_shift,
)
from attendance_annotator.services.time_parser import parse_clock_in_minutes

SUN, MON, TUE, WED, THU, FRI, SAT = range(7)


def _late(dept: Department, dow: int, text: str) -> bool:
    return evaluate_lateness(dept, dow, parse_clock_in_minutes(text)).is_late


class TestAdmin:
    @pytest.mark.parametrize("dow", [MON, TUE, WED, THU])
    def test_weekday_limit(self, dow: int):
        assert compute_limit_minutes(Department.ADMIN, dow, 500) == 510

    def test_grace_boundary_weekday(self):
        assert _late(Department.ADMIN, MON, "08:34") is False
        assert _late(Department.ADMIN, MON, "08:35") is True

    def test_saturday_limit_and_grace(self):
        assert compute_limit_minutes(Department.ADMIN, SAT, 840) == 840
        assert _late(Department.ADMIN, SAT, "14:04") is False
        assert _late(Department.ADMIN, SAT, "14:05") is True

    @pytest.mark.parametrize("dow", [SUN, FRI])
    def test_no_rule_on_sunday_and_friday(self, dow: int):
        assert compute_limit_minutes(Department.ADMIN, dow, 700) is None
        result = evaluate_lateness(Department.ADMIN, dow, 23 * 60)
        assert result.is_late is False
        assert result.limit_minutes is None


class TestClinical:
    def test_morning_shift(self):
        assert compute_limit_minutes(Department.CLINICAL, TUE, 478) == 480
        assert _late(Department.CLINICAL, TUE, "07:58") is False
        assert _late(Department.CLINICAL, TUE, "08:04") is False
        assert _late(Department.CLINICAL, TUE, "08:05") is True

    def test_afternoon_shift(self):
        assert compute_limit_minutes(Department.CLINICAL, TUE, 720) == 960
        assert _late(Department.CLINICAL, TUE, "15:50") is False
        assert _late(Department.CLINICAL, TUE, "16:10") is True

    def test_late_morning_punch_still_uses_morning_limit(self):
        assert _late(Department.CLINICAL, SUN, "11:59") is True

    def test_no_day_of_week_dependency(self):
        limits = {compute_limit_minutes(Department.CLINICAL, dow, 485) for dow in range(7)}
        assert limits == {480}


class TestDoctor:
    def test_nearest_shift_selection(self):
        # 12:00: 180 min from 09:00, 150 min from 14:30
        assert compute_limit_minutes(Department.DOCTOR, MON, 720) == 870
        assert _late(Department.DOCTOR, MON, "12:00") is False

    def test_friday_candidates(self):
        assert compute_limit_minutes(Department.DOCTOR, FRI, 14 * 60) == 900
        assert compute_limit_minutes(Department.DOCTOR, FRI, 20 * 60) == 900

    def test_tie_goes_to_first_candidate(self):
        # 11:45 is 165 minutes from both 09:00 and 14:30
        assert compute_limit_minutes(Department.DOCTOR, MON, 705) == 540
        # 12:00 is 180 minutes from both Friday shifts
        assert compute_limit_minutes(Department.DOCTOR, FRI, 720) == 540

    def test_grace(self):
        assert _late(Department.DOCTOR, MON, "14:34") is False
        assert _late(Department.DOCTOR, MON, "14:35") is True
        assert _late(Department.DOCTOR, SAT, "20:04") is False
        assert _late(Department.DOCTOR, TUE, "09:10") is True


def test_nearest_shift_helper():
    assert nearest_shift((540, 870, 1200), 1000) == 870
    assert nearest_shift((540,), 0) == 540


def test_grace_constant():
    assert GRACE_MINUTES == 4


def test_unparsed_time_is_never_late():
    result = evaluate_lateness(Department.CLINICAL, MON, None)
    assert result.is_late is False
    assert result.limit_minutes is None


def test_limit_reported_with_result():
    result = evaluate_lateness(Department.ADMIN, MON, 520)
    assert result.is_late is True
    assert result.limit_minutes == 510
