from __future__ import annotations

from ..models.analysis_result import AnalysisResult

"""SUMMARY line rendering.

Format:
SUMMARY period={YYYY-MM} staff={n} late_staff={n} late_days={n}
output={file name} elapsed_sec={seconds}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return str(round(seconds, 3))


def render_summary_line(result: AnalysisResult) -> str:
    """Render the SUMMARY line for one run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from attendance_annotator.models.config_models import AnalysisConfig
        >>> t = datetime(2024, 3, 1, tzinfo=timezone.utc)
        >>> result = AnalysisResult(
        ...     config=AnalysisConfig(2024, 2), summaries=[],
        ...     output_name="Analysis_2_2024.xlsx", start_time=t, end_time=t,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY period=2024-02 staff=0 late_staff=0 late_days=0 output=Analysis_2_2024.xlsx elapsed_sec=2'
    """
    return (
        f"SUMMARY period={result.config.period} "
        f"staff={len(result.summaries)} "
        f"late_staff={result.late_staff} "
        f"late_days={result.total_late} "
        f"output={result.output_name} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
