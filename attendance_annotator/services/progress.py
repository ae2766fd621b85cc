from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.roster import RosterEntry

"""Progress display with tqdm (TTY only).

One bar per run, advanced once per roster entry. In non-TTY environments (CI,
redirected output) the bar is disabled so logs are not interleaved with ANSI
control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker over the staff roster."""

    def __init__(self, total_staff: int, *, description: str = "Annotating staff") -> None:
        self.total_staff = total_staff
        self.description = description
        self.current_staff = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_staff,
                desc=description,
                unit="staff",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_staff(self, entry: RosterEntry) -> None:
        self.current_staff += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({entry.name})")

    def finish_staff(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
