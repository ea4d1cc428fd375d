"""Event system for scan observers.

Decouples task execution from presentation. Observers are notified, never
consulted: nothing they do changes what the runner writes.
"""

from typing import Protocol

from tblanalyzer.models import Task, TaskSummary


class ScanObserver(Protocol):
    """Observer interface for task runner events."""

    def on_task_start(self, task: Task, total_files: int) -> None:
        """Called once the task's files are enumerated."""
        ...

    def on_file_processed(self, path: str, skipped: bool) -> None:
        """Called after each enumerated file is folded into the aggregate."""
        ...

    def on_task_complete(self, summary: TaskSummary) -> None:
        """Called after both reports of a task are written."""
        ...

    def on_log(self, message: str, is_error: bool = False) -> None:
        """Called for free-form status lines."""
        ...


class NullObserver:
    """Observer that ignores every event."""

    def on_task_start(self, task: Task, total_files: int) -> None:
        pass

    def on_file_processed(self, path: str, skipped: bool) -> None:
        pass

    def on_task_complete(self, summary: TaskSummary) -> None:
        pass

    def on_log(self, message: str, is_error: bool = False) -> None:
        pass

