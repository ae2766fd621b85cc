"""Monthly attendance lateness annotator."""

__version__ = "0.1.0"
