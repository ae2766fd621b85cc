from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

"""Attendance workbook reading.

The monthly log lives on the second sheet of the workbook; the first sheet is
the device's summary page and is ignored. Sheets are selected by position, not
by name, because the device export names them per month.

.xlsx/.xlsm files are loaded with openpyxl so existing styling survives into
the output. Legacy .xls files are read value-only through pandas (xlrd engine)
and copied into a fresh openpyxl workbook.
"""

__all__ = [
    "LOG_SHEET_INDEX",
    "SUPPORTED_SUFFIXES",
    "WorkbookReadError",
    "LogSheetMissingError",
    "load_attendance_workbook",
    "select_log_sheet",
    "read_log_frame",
]

LOG_SHEET_INDEX = 1
OPENPYXL_SUFFIXES = {".xlsx", ".xlsm"}
LEGACY_SUFFIXES = {".xls"}
SUPPORTED_SUFFIXES = OPENPYXL_SUFFIXES | LEGACY_SUFFIXES


class WorkbookReadError(Exception):
    """Raised when the input workbook cannot be located or opened."""


class LogSheetMissingError(WorkbookReadError):
    """Raised when the workbook has no second (log) sheet."""


def _check_path(path: Path) -> str:
    if not path.exists():
        raise WorkbookReadError(f"input file not found: {path}")
    if not path.is_file():
        raise WorkbookReadError(f"input path is not a file: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise WorkbookReadError(
            f"unsupported file type '{path.suffix}': expected one of {sorted(SUPPORTED_SUFFIXES)}"
        )
    return suffix


def _load_legacy(path: Path) -> Workbook:
    frames = pd.read_excel(path, sheet_name=None, header=None, engine="xlrd")
    wb = Workbook()
    wb.remove(wb.active)
    for name, df in frames.items():
        ws = wb.create_sheet(title=str(name))
        for r, row in enumerate(df.itertuples(index=False), start=1):
            for c, val in enumerate(row, start=1):
                if pd.isna(val):
                    continue
                ws.cell(row=r, column=c, value=val)
    return wb


def load_attendance_workbook(path: Path) -> Workbook:
    """Open an attendance workbook (.xlsx, .xlsm or .xls).

    Raises:
        WorkbookReadError: missing file, unsupported type or unreadable content
    """
    suffix = _check_path(path)
    try:
        if suffix in LEGACY_SUFFIXES:
            return _load_legacy(path)
        return load_workbook(path)
    except WorkbookReadError:
        raise
    except Exception as e:
        raise WorkbookReadError(f"cannot read workbook {path.name}: {e}") from e


def select_log_sheet(workbook: Workbook) -> Worksheet:
    """Return the log sheet (second sheet) of the workbook.

    Raises:
        LogSheetMissingError: fewer than two sheets
    """
    sheets = workbook.worksheets
    if len(sheets) <= LOG_SHEET_INDEX:
        raise LogSheetMissingError(
            f"log sheet (second sheet) not found: workbook has {len(sheets)} sheet(s)"
        )
    return sheets[LOG_SHEET_INDEX]


def read_log_frame(path: Path) -> pd.DataFrame:
    """Read the log sheet as a raw DataFrame (no header row) for inspection."""
    suffix = _check_path(path)
    engine = "xlrd" if suffix in LEGACY_SUFFIXES else "openpyxl"
    with pd.ExcelFile(path, engine=engine) as xls:
        if len(xls.sheet_names) <= LOG_SHEET_INDEX:
            raise LogSheetMissingError(
                f"log sheet (second sheet) not found: workbook has {len(xls.sheet_names)} sheet(s)"
            )
        return xls.parse(xls.sheet_names[LOG_SHEET_INDEX], header=None)
