# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest
from openpyxl import Workbook

from attendance_annotator.logging.init import reset_logging

# February 2024: the 1st is a Thursday, 3rd/10th/17th/24th are Saturdays,
# 2nd/9th/16th/23rd Fridays, 4th/11th/18th/25th Sundays; 29 days.
YEAR, MONTH = 2024, 2


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ATTENDANCE_OUTPUT_DIR", raising=False)
        monkeypatch.delenv("ATTENDANCE_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """roster:
  - {row: 3, name: alice, department: ADMIN}
  - {row: 4, name: bob, department: CLINICAL}
  - {row: 5, name: carol, department: DOCTOR}
output:
  directory: ./output
  label_format: name_department
  header_row: 0
  sheet_title: Logs Analyzed
  minimum_rows: 301
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "analysis.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _build_workbook(punches: dict[tuple[int, int], object] | None = None, *, sheets: int = 2) -> Workbook:
    """Workbook shaped like the device export: summary sheet first, log sheet second.

    punches maps (1-based row, day of month) to the cell value; day d lands in
    sheet column d.
    """
    wb = Workbook()
    wb.active.title = "Summary"
    wb.active["A1"] = "Monthly summary"
    for i in range(1, sheets):
        ws = wb.create_sheet("Logs" if i == 1 else f"Extra{i}")
        ws["A1"] = "Attendance log"
    if sheets >= 2:
        logs = wb.worksheets[1]
        for (row, day), value in (punches or {}).items():
            logs.cell(row=row, column=day, value=value)
    return wb


@pytest.fixture()
def make_workbook() -> Callable[..., Workbook]:
    return _build_workbook


@pytest.fixture()
def sample_punches() -> dict[tuple[int, int], object]:
    return {
        # alice, ADMIN
        (3, 1): "08:20",  # Thu on time
        (3, 2): "10:00",  # Fri, no ADMIN rule
        (3, 3): "14:05",  # Sat late
        (3, 5): "08:35",  # Mon late
        (3, 6): "08:34",  # Tue within grace
        # bob, CLINICAL
        (4, 1): "08:05",  # morning late
        (4, 5): "15:50",  # afternoon on time
        (4, 6): "16:10",  # afternoon late
        # carol, DOCTOR
        (5, 5): "12:00",  # nearest 14:30, not late
        (5, 6): "09:10\n17:00",  # late
    }


@pytest.fixture()
def write_workbook(temp_workdir: Path, make_workbook, sample_punches) -> Path:
    path = temp_workdir / "data" / "logs.xlsx"
    make_workbook(sample_punches).save(path)
    return path
