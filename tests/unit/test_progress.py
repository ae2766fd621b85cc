from __future__ import annotations

from unittest.mock import Mock, patch

from attendance_annotator.models.roster import Department, RosterEntry
from attendance_annotator.services.progress import ProgressTracker, is_tty_enabled

ENTRY = RosterEntry(row=9, name="harizan", department=Department.ADMIN)


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_init_with_tty_enabled(self):
        with patch("attendance_annotator.services.progress.is_tty_enabled", return_value=True), \
             patch("attendance_annotator.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(5, description="Staff")

            assert tracker.total_staff == 5
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Staff",
                unit="staff",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch("attendance_annotator.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(5)
            assert tracker.enabled is False
            assert tracker.pbar is None

    def test_staff_lifecycle_updates_bar(self):
        mock_pbar = Mock()
        with patch("attendance_annotator.services.progress.is_tty_enabled", return_value=True), \
             patch("attendance_annotator.services.progress.tqdm", return_value=mock_pbar):
            tracker = ProgressTracker(3, description="Annotating")
            tracker.start_staff(ENTRY)
            assert tracker.current_staff == 1
            mock_pbar.set_description.assert_called_with("Annotating (harizan)")

            tracker.finish_staff()
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_description.assert_called_with("Annotating")

            tracker.set_postfix(late=2)
            mock_pbar.set_postfix.assert_called_once_with(late=2)

    def test_disabled_tracker_is_inert(self):
        with patch("attendance_annotator.services.progress.is_tty_enabled", return_value=False):
            with ProgressTracker(2) as tracker:
                tracker.start_staff(ENTRY)
                tracker.finish_staff()
                tracker.set_postfix(late=0)
            assert tracker.current_staff == 1

    def test_context_manager_closes(self):
        mock_pbar = Mock()
        with patch("attendance_annotator.services.progress.is_tty_enabled", return_value=True), \
             patch("attendance_annotator.services.progress.tqdm", return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                pass
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
