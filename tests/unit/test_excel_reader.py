from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pandas as pd
import pytest

from attendance_annotator.excel.reader import (
    LogSheetMissingError,
    WorkbookReadError,
    load_attendance_workbook,
    read_log_frame,
    select_log_sheet,
)


def test_load_xlsx_and_select_second_sheet(write_workbook: Path):
    wb = load_attendance_workbook(write_workbook)
    ws = select_log_sheet(wb)
    assert ws.title == "Logs"
    assert ws.cell(row=3, column=5).value == "08:35"


def test_selection_is_by_position_not_name(temp_workdir: Path, make_workbook):
    wb = make_workbook({(2, 1): "08:00"}, sheets=3)
    wb.worksheets[1].title = "Feb 2024"
    path = temp_workdir / "data" / "renamed.xlsx"
    wb.save(path)
    ws = select_log_sheet(load_attendance_workbook(path))
    assert ws.title == "Feb 2024"
    assert ws["A2"].value == "08:00"


def test_missing_second_sheet(make_workbook):
    with pytest.raises(LogSheetMissingError, match="second sheet"):
        select_log_sheet(make_workbook(sheets=1))


def test_missing_file(temp_workdir: Path):
    with pytest.raises(WorkbookReadError, match="input file not found"):
        load_attendance_workbook(temp_workdir / "data" / "nope.xlsx")


def test_unsupported_suffix(temp_workdir: Path):
    p = temp_workdir / "data" / "logs.csv"
    p.write_text("a,b\n", encoding="utf-8")
    with pytest.raises(WorkbookReadError, match="unsupported file type"):
        load_attendance_workbook(p)


def test_corrupt_xlsx(temp_workdir: Path):
    p = temp_workdir / "data" / "broken.xlsx"
    p.write_bytes(b"not a zip")
    with pytest.raises(WorkbookReadError, match="cannot read workbook broken.xlsx"):
        load_attendance_workbook(p)


def test_legacy_xls_copied_value_only(temp_workdir: Path):
    p = temp_workdir / "data" / "old.xls"
    p.write_bytes(b"")
    frames = {
        "Summary": pd.DataFrame([["Monthly summary"]]),
        "Logs": pd.DataFrame([["Attendance log", None], [None, "08:35"]]),
    }
    with patch("attendance_annotator.excel.reader.pd.read_excel", return_value=frames) as mock_read:
        wb = load_attendance_workbook(p)
    mock_read.assert_called_once_with(p, sheet_name=None, header=None, engine="xlrd")
    assert wb.sheetnames == ["Summary", "Logs"]
    ws = select_log_sheet(wb)
    assert ws["A1"].value == "Attendance log"
    assert ws["B2"].value == "08:35"
    assert ws["A2"].value is None


def test_read_log_frame(write_workbook: Path):
    df = read_log_frame(write_workbook)
    assert df.iloc[0, 0] == "Attendance log"
    assert df.iloc[2, 4] == "08:35"


def test_read_log_frame_missing_sheet(temp_workdir: Path, make_workbook):
    p = temp_workdir / "data" / "single.xlsx"
    make_workbook(sheets=1).save(p)
    with pytest.raises(LogSheetMissingError):
        read_log_frame(p)
