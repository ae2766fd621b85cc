from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from attendance_annotator.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from attendance_annotator.logging.error_log import ErrorLogBuffer, ErrorRecord
from attendance_annotator.logging.init import log_summary, set_debug, setup_logging
from attendance_annotator.models.config_models import AnalysisConfig, AnalysisSettings, LabelFormat
from attendance_annotator.services.orchestrator import AnalysisError, analyze_file
from attendance_annotator.services.summary import render_summary_line

"""CLI entrypoint.

    python -m attendance_annotator.cli LOGS.xlsx --year 2024 --month 2

Flow: load .env -> load config -> annotate the workbook -> save output ->
optional CSV of per-staff totals -> SUMMARY line.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

CONFIG_ENV = "ATTENDANCE_CONFIG"
INSPECT_ROWS = 10


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    today = date.today()
    p = argparse.ArgumentParser(description="Flag late clock-ins in a monthly attendance log")
    p.add_argument("input", type=Path, help="Attendance workbook (.xlsx, .xlsm or .xls)")
    p.add_argument("--year", type=int, default=today.year, help="Year of the log (default: current)")
    p.add_argument(
        "--month", type=int, choices=range(1, 13), default=today.month, metavar="1-12",
        help="Month of the log (default: current)",
    )
    p.add_argument("--config", type=Path, default=None, help="Config YAML (default: config/analysis.yml)")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for the annotated workbook")
    p.add_argument(
        "--label-format", choices=[f.value for f in LabelFormat], default=None,
        help="Staff label written in the label column",
    )
    p.add_argument("--header-row", type=_non_negative_int, default=None, help="Zero-based row for the summary headers")
    p.add_argument("--summary-csv", type=Path, default=None, help="Also write per-staff totals as CSV")
    p.add_argument("--inspect-data", action="store_true", help="Print the first rows of the log sheet then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _apply_overrides(settings: AnalysisSettings, args: argparse.Namespace) -> AnalysisSettings:
    changes: dict[str, object] = {}
    if args.label_format is not None:
        changes["label_format"] = LabelFormat(args.label_format)
    if args.header_row is not None:
        changes["header_row"] = args.header_row
    if not changes:
        return settings
    return dataclasses.replace(settings, output=dataclasses.replace(settings.output, **changes))


def _inspect_data(path: Path) -> int:
    from attendance_annotator.excel.reader import WorkbookReadError, read_log_frame

    try:
        df = read_log_frame(path)
    except WorkbookReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name} rows={df.shape[0]} cols={df.shape[1]}")
    print(df.head(INSPECT_ROWS).fillna("").to_string())
    return EXIT_SUCCESS


def _record_fatal(path: Path, error_type: str, message: str) -> None:
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create(path.name, "<FILE_LEVEL>", -1, error_type, message))
    buf.flush()


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read the real argv when called without arguments (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(args.input)

    _load_env_file(Path(".env"), override=True)
    config_path = args.config or Path(os.getenv(CONFIG_ENV) or DEFAULT_CONFIG_PATH)
    try:
        settings = _apply_overrides(load_config(config_path), args)
    except (ConfigError, ValueError) as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        period = AnalysisConfig(year=args.year, month=args.month)
    except ValueError as e:
        logger.error(f"analysis: {e}")
        return EXIT_FATAL

    logger.info(f"Processing {args.input} for {period.period} ({len(settings.roster)} staff)")
    try:
        result = analyze_file(args.input, period, settings, output_dir=args.output_dir)
    except AnalysisError as e:
        logger.error(f"analysis: {e}")
        _record_fatal(args.input, "PRECONDITION_FAILED", str(e))
        return EXIT_FATAL

    for s in result.summaries:
        if s.late_count:
            logger.info(f"late row={s.row} name={s.name} dept={s.department.value} count={s.late_count}")

    if args.summary_csv is not None:
        args.summary_csv.parent.mkdir(parents=True, exist_ok=True)
        result.to_frame().to_csv(args.summary_csv, index=False)
        logger.info(f"Wrote summary CSV {args.summary_csv}")

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
