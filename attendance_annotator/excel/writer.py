from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..models.config_models import AnalysisConfig

"""Output workbook assembly and saving."""

__all__ = [
    "OUTPUT_SUFFIX",
    "output_name",
    "isolate_sheet",
    "save_workbook",
]

OUTPUT_SUFFIX = ".xlsx"


def output_name(config: AnalysisConfig) -> str:
    """Analysis_<month>_<year>.xlsx (month not zero padded)."""
    return f"Analysis_{config.month}_{config.year}{OUTPUT_SUFFIX}"


def isolate_sheet(workbook: Workbook, sheet: Worksheet, title: str) -> Workbook:
    """Drop every other sheet and rename the kept one.

    openpyxl cannot move a worksheet between workbooks, so the input workbook
    is reduced in place instead; cell layout and styles stay untouched.
    """
    for ws in list(workbook.worksheets):
        if ws is not sheet:
            workbook.remove(ws)
    sheet.title = title
    workbook.active = 0
    return workbook


def save_workbook(workbook: Workbook, directory: Path, name: str) -> Path:
    """Save into directory (created if missing); returns the absolute path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = (directory / name).resolve()
    workbook.save(path)
    return path
