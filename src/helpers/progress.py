"""Shared progress bar utilities for Rich console displays."""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


def create_scan_progress(
    console: Console | None = None, *, expand: bool = False, disable: bool = False
) -> Progress:
    """Create the progress bar shown while a block range is scanned.

    Args:
        console: Rich console instance (optional)
        expand: Whether to expand the progress bar to full width
        disable: Build the progress object without rendering it

    Returns:
        Configured Progress instance with spinner, description, bar,
        M of N counter, elapsed and remaining time
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        TextColumn("•"),
        TimeRemainingColumn(),
        console=console,
        expand=expand,
        disable=disable,
    )


@contextmanager
def track_progress(
    description: str,
    total: int,
    console: Console | None = None,
    *,
    disable: bool = False,
) -> Iterator[tuple[Progress, TaskID]]:
    """Context manager for tracking progress with automatic cleanup.

    Args:
        description: Task description to display
        total: Total number of items to process
        console: Rich console instance (optional)
        disable: Build the progress object without rendering it

    Yields:
        Tuple of (Progress instance, TaskID) for updating progress

    Example:
        ```python
        from src.helpers.progress import track_progress

        with track_progress("Scanning blocks", total=101) as (progress, task):
            for number in range(start, end + 1):
                await processor.process_block(number)
                progress.update(task, advance=1)
        ```
    """
    progress = create_scan_progress(console, disable=disable)

    with progress:
        task_id = progress.add_task(description, total=total)
        yield progress, task_id


def describe_block(
    progress: Progress, task_id: TaskID, block_number: int, *, ok: bool
) -> None:
    """Advance the scan bar by one block and show the last outcome."""
    mark = "[green]✓[/green]" if ok else "[red]✗[/red]"
    progress.update(
        task_id, advance=1, description=f"Block {block_number:,} {mark}"
    )


__all__ = [
    "TaskID",
    "create_scan_progress",
    "describe_block",
    "track_progress",
]
