"""Tests for progress bar utilities."""

from io import StringIO

from rich.console import Console
from rich.progress import Progress

from src.helpers.progress import create_scan_progress, describe_block, track_progress


class TestCreateScanProgress:
    """Tests for create_scan_progress function."""

    def test_creates_progress_instance(self) -> None:
        """Test that function creates Progress instance."""
        progress = create_scan_progress()
        assert isinstance(progress, Progress)

    def test_uses_provided_console(self) -> None:
        """Test that function uses provided console."""
        console = Console(file=StringIO())
        progress = create_scan_progress(console=console)
        assert progress.console == console

    def test_expand_parameter(self) -> None:
        """Test expand parameter is applied."""
        progress = create_scan_progress(expand=True)
        assert progress.expand is True

    def test_has_counter_and_time_columns(self) -> None:
        """Test that progress shows M of N and elapsed/remaining time."""
        progress = create_scan_progress()
        column_types = [type(col).__name__ for col in progress.columns]

        assert "MofNCompleteColumn" in column_types
        assert "TimeElapsedColumn" in column_types
        assert "TimeRemainingColumn" in column_types


class TestTrackProgress:
    """Tests for track_progress context manager."""

    def test_yields_progress_and_task(self) -> None:
        """Test that the task is created with the given total."""
        console = Console(file=StringIO())

        with track_progress("Scanning blocks", total=101, console=console) as (
            progress,
            task_id,
        ):
            task = progress.tasks[task_id]
            assert task.description == "Scanning blocks"
            assert task.total == 101

    def test_disabled_progress(self) -> None:
        """Test that a disabled bar writes nothing."""
        output = StringIO()
        console = Console(file=output)

        with track_progress("Scanning", total=3, console=console, disable=True) as (
            progress,
            task_id,
        ):
            progress.update(task_id, advance=3)

        assert output.getvalue() == ""


class TestDescribeBlock:
    """Tests for describe_block function."""

    def test_advances_and_describes(self) -> None:
        """Test each call advances by one and names the last block."""
        console = Console(file=StringIO())

        with track_progress("Scanning", total=2, console=console, disable=True) as (
            progress,
            task_id,
        ):
            describe_block(progress, task_id, 1_000, ok=True)
            describe_block(progress, task_id, 1_001, ok=False)

            task = progress.tasks[task_id]
            assert task.completed == 2
            assert "1,001" in task.description
            assert "✗" in task.description
