from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import Workbook

from ..excel.reader import WorkbookReadError, load_attendance_workbook, select_log_sheet
from ..excel.writer import isolate_sheet, output_name, save_workbook
from ..models.analysis_result import AnalysisResult, StaffSummary
from ..models.config_models import AnalysisConfig, AnalysisSettings, OutputOptions
from ..models.grid import Grid
from ..models.roster import RosterEntry
from .annotator import GridAnnotator
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Run orchestration for the attendance annotator.

    analyze_file      path -> load -> analyze_workbook -> save
    analyze_workbook  select log sheet -> run -> single-sheet workbook
    run               annotate the roster over one grid

Precondition failures (missing file, missing log sheet) raise AnalysisError
before any staff row is touched. Once annotation starts no per-cell condition
aborts the run.
"""

__all__ = [
    "AnalysisError",
    "run",
    "analyze_workbook",
    "analyze_file",
]


class AnalysisError(Exception):
    """Fatal precondition failure for a run."""


def run(
    grid: Grid,
    config: AnalysisConfig,
    roster: Iterable[RosterEntry],
    options: OutputOptions | None = None,
    progress: ProgressTracker | None = None,
) -> list[StaffSummary]:
    """Annotate every roster entry on the grid, in roster order."""
    entries = list(roster)
    annotator = GridAnnotator(grid, config, options)
    annotator.prepare(entries)

    summaries: list[StaffSummary] = []
    total_late = 0
    for entry in entries:
        if progress is not None:
            progress.start_staff(entry)
        summary = annotator.annotate_staff(entry)
        summaries.append(summary)
        total_late += summary.late_count
        if progress is not None:
            progress.finish_staff()
            progress.set_postfix(late=total_late)
    return summaries


def analyze_workbook(workbook: Workbook, config: AnalysisConfig, settings: AnalysisSettings) -> AnalysisResult:
    """Annotate the log sheet of an already loaded workbook.

    The workbook is reduced in place to the single annotated sheet.

    Raises:
        AnalysisError: the workbook has no second sheet
    """
    start_time = datetime.now(UTC)
    try:
        sheet = select_log_sheet(workbook)
    except WorkbookReadError as e:
        raise AnalysisError(str(e)) from e

    logger.info(
        "Analyzing sheet '%s' for %s (%d staff)", sheet.title, config.period, len(settings.roster)
    )
    grid = Grid(sheet)
    with ProgressTracker(len(settings.roster)) as progress:
        summaries = run(grid, config, settings.roster, settings.output, progress=progress)

    isolate_sheet(workbook, sheet, settings.output.sheet_title)

    end_time = datetime.now(UTC)
    return AnalysisResult(
        config=config,
        summaries=summaries,
        output_name=output_name(config),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )


def analyze_file(
    path: Path,
    config: AnalysisConfig,
    settings: AnalysisSettings,
    output_dir: Path | None = None,
) -> AnalysisResult:
    """Load, annotate and save one attendance workbook.

    Output goes to output_dir (default: settings.output.directory) as
    Analysis_<month>_<year>.xlsx.

    Raises:
        AnalysisError: input missing/unreadable or log sheet absent; nothing
            is written in that case
    """
    start_time = datetime.now(UTC)
    try:
        workbook = load_attendance_workbook(path)
    except WorkbookReadError as e:
        raise AnalysisError(str(e)) from e

    result = analyze_workbook(workbook, config, settings)

    directory = output_dir if output_dir is not None else Path(settings.output.directory)
    try:
        saved = save_workbook(workbook, directory, result.output_name)
    except OSError as e:
        raise AnalysisError(f"cannot write output {directory / result.output_name}: {e}") from e
    logger.info("Saved %s", saved)

    end_time = datetime.now(UTC)
    return AnalysisResult(
        config=result.config,
        summaries=result.summaries,
        output_name=result.output_name,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        output_path=saved,
    )
