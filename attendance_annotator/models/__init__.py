"""Domain models for the attendance annotator."""

from .analysis_result import AnalysisResult, LatenessResult, StaffSummary
from .config_models import AnalysisConfig, AnalysisSettings, LabelFormat, OutputOptions
from .grid import Grid
from .roster import Department, RosterEntry

__all__ = [
    # Configuration models
    "AnalysisConfig",
    "AnalysisSettings",
    "LabelFormat",
    "OutputOptions",
    "Department",
    "RosterEntry",
    # Processing models
    "Grid",
    "LatenessResult",
    "StaffSummary",
    "AnalysisResult",
]
