"""Rich progress-bar observer for the task runner."""
import sys

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn, TimeElapsedColumn
from rich.text import Text

from tblanalyzer.models import Task, TaskSummary
from tblanalyzer.utils.logging import restore_stderr_sink, swap_to_rich_sink

from .ui import ANALYZER_THEME


class RichProgressRenderer:
    """Shows one progress bar per task while files are processed.

    Only active on a TTY; elsewhere it degrades to plain status lines. Call
    start() before the run and stop() after it, including on failure.
    """

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.is_tty = sys.stdout.isatty()
        self.console = Console(theme=ANALYZER_THEME, force_terminal=self.is_tty)

        self._progress: Progress | None = None
        self._bar: TaskID | None = None
        self._loguru_handler_id: int | None = None

    def start(self) -> None:
        if self.is_tty and not self.quiet:
            self._progress = Progress(
                TextColumn("[bold cyan]{task.description}"),
                BarColumn(bar_width=50),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=self.console,
            )
            self._progress.start()
            # Logs go above the bars instead of being overwritten by them
            self._loguru_handler_id = swap_to_rich_sink(self.log_message)

    def stop(self) -> None:
        if self._progress:
            self._progress.stop()
            self._progress = None
            restore_stderr_sink(self._loguru_handler_id)
            self._loguru_handler_id = None

    def log_message(self, message) -> None:
        """Loguru sink that prints through the progress console."""
        if self._progress:
            self._progress.console.print(Text.from_ansi(str(message).rstrip("\n")))
        else:
            sys.stderr.write(str(message))

    def _write(self, text: str, is_error: bool = False) -> None:
        if self.quiet and not is_error:
            return
        if self._progress:
            self._progress.console.print(text, style="bold red" if is_error else None)
        else:
            print(text, file=sys.stderr if is_error else sys.stdout, flush=True)

    # ScanObserver implementation

    def on_task_start(self, task: Task, total_files: int) -> None:
        if self._progress:
            self._bar = self._progress.add_task(f"Processing {task.name}", total=total_files)
        else:
            self._write(f"\n[TASK] {task.name}: {total_files} files")

    def on_file_processed(self, path: str, skipped: bool) -> None:
        if self._progress and self._bar is not None:
            self._progress.advance(self._bar)

    def on_task_complete(self, summary: TaskSummary) -> None:
        self._write(
            f"[OK] {summary.name}: {summary.tables} tables, {summary.unique_indexes} indexes, "
            f"{summary.skipped} skipped -> {summary.output_dir}"
        )
        self._bar = None

    def on_log(self, message: str, is_error: bool = False) -> None:
        self._write(str(message) if message is not None else "", is_error=is_error)
