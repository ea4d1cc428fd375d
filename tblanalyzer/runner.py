"""Task runner: enumerate -> extract -> aggregate -> write, one task at a time.

Within a task, schema extraction and stat calls run on a bounded thread
pool. Results are folded into the accumulator by the calling thread only, so
the aggregate structures have a single owner. The first failure cancels the
remaining work and aborts the task, and with it the whole run.
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from tblanalyzer.aggregation import TableAccumulator
from tblanalyzer.config import AnalyzerConfig, default_workers
from tblanalyzer.events import NullObserver, ScanObserver
from tblanalyzer.exceptions import (
    ConfigInvalidError,
    ExtractionFailedError,
    TableAnalyzerError,
    TaskFailedError,
)
from tblanalyzer.indexer.core import TABLE_NAME_RULES, TableFileWalker, is_supported_table, stat_file
from tblanalyzer.indexer.extractor import BaseSchemaExtractor, DirectiveSchemaExtractor
from tblanalyzer.models import ExtractionOutcome, Task, TaskSummary
from tblanalyzer.reports import write_task_reports
from tblanalyzer.utils.logging import logger


def extract_file(extractor: BaseSchemaExtractor, path: str) -> ExtractionOutcome:
    """Extract schema and metadata for one supported file (runs on a worker)."""
    schema = extractor.extract(path)
    stat = stat_file(path)
    return ExtractionOutcome.processed(path, schema, stat)


class TaskRunner:
    """Runs configured tasks sequentially."""

    def __init__(
        self,
        output_dir: Path,
        extractor: BaseSchemaExtractor | None = None,
        observer: ScanObserver | None = None,
        workers: int | None = None,
        name_rule: str = "stem",
    ):
        """Initialize the runner.

        Args:
            output_dir: Shared output root; each task writes to a subdirectory
            extractor: Schema extractor (DirectiveSchemaExtractor by default)
            observer: Progress observer (no-op by default)
            workers: Upper bound on concurrent extractions
            name_rule: How table names derive from paths

        Raises:
            ConfigInvalidError: If name_rule is not a known rule.
        """
        if name_rule not in TABLE_NAME_RULES:
            raise ConfigInvalidError(
                f"Unknown table name rule: {name_rule!r} (expected one of {TABLE_NAME_RULES})"
            )
        self.output_dir = Path(output_dir)
        self.extractor = extractor or DirectiveSchemaExtractor()
        self.observer = observer or NullObserver()
        self.workers = workers or default_workers()
        self.name_rule = name_rule

    @classmethod
    def from_config(
        cls,
        config: AnalyzerConfig,
        observer: ScanObserver | None = None,
        workers: int | None = None,
        extractor: BaseSchemaExtractor | None = None,
    ) -> "TaskRunner":
        return cls(
            output_dir=config.output_dir,
            extractor=extractor,
            observer=observer,
            workers=workers or config.workers,
            name_rule=config.table_name,
        )

    def _collect(self, task: Task, paths: list[str]) -> TableAccumulator:
        """Extract every path and fold the outcomes into a fresh accumulator."""
        accumulator = TableAccumulator(name_rule=self.name_rule)

        supported = []
        for path in paths:
            if is_supported_table(path):
                supported.append(path)
            else:
                accumulator.add(ExtractionOutcome.unextracted(path))
                self.observer.on_file_processed(path, skipped=True)

        if not supported:
            return accumulator

        executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix=f"tba-{task.name}")
        try:
            futures = {executor.submit(extract_file, self.extractor, path): path for path in supported}
            for future in as_completed(futures):
                path = futures[future]
                try:
                    outcome = future.result()
                except TableAnalyzerError as e:
                    outcome = ExtractionOutcome.failed(path, e)
                except Exception as e:
                    # Custom extractors may raise anything; report it as an extraction failure
                    error = ExtractionFailedError(path, e)
                    error.__cause__ = e
                    outcome = ExtractionOutcome.failed(path, error)
                # Raises for failed outcomes
                accumulator.add(outcome)
                self.observer.on_file_processed(path, skipped=False)
        finally:
            # Drop queued work after a failure; running extractions finish on their own
            executor.shutdown(wait=True, cancel_futures=True)

        return accumulator

    def process_task(self, task: Task) -> TaskSummary:
        """Run one task end to end.

        Raises:
            TableAnalyzerError: The first failure; no report is written then.
        """
        start = time.time()
        logger.info("Running task: {name} ({dirs})", name=task.name, dirs=", ".join(task.directories))

        walker = TableFileWalker(recursive=task.recursive)
        paths = walker.walk(list(task.directories))
        self.observer.on_task_start(task, len(paths))

        accumulator = self._collect(task, paths)
        result = accumulator.finalize()

        task_dir = self.output_dir / task.name
        self.observer.on_log(f"Writing reports for {task.name} to {task_dir}")
        write_task_reports(task_dir, result)

        summary = TaskSummary(
            name=task.name,
            tables=len(result.records),
            skipped=len(result.skipped),
            unique_indexes=len(result.vocabulary),
            output_dir=task_dir,
            elapsed=time.time() - start,
        )
        logger.info(
            "Task {name} complete: {tables} tables, {indexes} unique indexes -> {out}",
            name=task.name,
            tables=summary.tables,
            indexes=summary.unique_indexes,
            out=task_dir,
        )
        self.observer.on_task_complete(summary)
        return summary

    def run(self, tasks: tuple[Task, ...] | list[Task]) -> list[TaskSummary]:
        """Run tasks in order, stopping at the first failure.

        Raises:
            TaskFailedError: Wrapping the failure and naming the task.
        """
        summaries = []
        for task in tasks:
            try:
                summaries.append(self.process_task(task))
            except TableAnalyzerError as e:
                raise TaskFailedError(task.name, e) from e
        return summaries


def run_tasks(
    config: AnalyzerConfig,
    task_names: list[str] | tuple[str, ...] = (),
    observer: ScanObserver | None = None,
    workers: int | None = None,
) -> list[TaskSummary]:
    """Run the configured tasks (or the named subset) sequentially."""
    tasks = config.select(task_names)
    runner = TaskRunner.from_config(config, observer=observer, workers=workers)
    return runner.run(tasks)
