from __future__ import annotations

import re

"""Clock-in time extraction from raw log cell text.

A day cell may hold several newline-separated punches; only the first line is
the clock-in. Hours are not range checked: "25:10" yields 1510 and the policy
comparison still works arithmetically on it.
"""

__all__ = [
    "TIME_RE",
    "first_line",
    "parse_clock_in_minutes",
]

TIME_RE = re.compile(r"(\d{1,2})[:.-](\d{2})")
_LINE_SPLIT_RE = re.compile(r"[\r\n]+")


def first_line(raw: object) -> str:
    """First line of a cell's trimmed text ("" for empty input)."""
    if raw is None:
        return ""
    text = str(raw).strip()
    if not text:
        return ""
    return _LINE_SPLIT_RE.split(text)[0].strip()


def parse_clock_in_minutes(raw: str | None) -> int | None:
    """Minutes since midnight of the first punch, or None if there is none.

    Accepts "08:30", "8.05", "08-12" (and such a time embedded in other text).

    >>> parse_clock_in_minutes("08:40\\n17:05")
    520
    >>> parse_clock_in_minutes("MC") is None
    True
    """
    if not isinstance(raw, str):
        return None
    m = TIME_RE.search(first_line(raw))
    if not m:
        return None
    return int(m.group(1)) * 60 + int(m.group(2))
