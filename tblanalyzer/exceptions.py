"""Exception hierarchy for tblanalyzer.

Every error here is fatal to the task that raised it and to the whole run.
Nothing is retried and no partial report is salvaged. Files skipped for an
unsupported extension are not errors and never show up here.
"""


class TableAnalyzerError(Exception):
    """Base class for all tblanalyzer failures.

    Attributes:
        message: Human-readable error description
        details: Dict with extra context for debugging
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigInvalidError(TableAnalyzerError):
    """Raised when the task configuration cannot be loaded or fails validation."""


class DirectoryUnreadableError(TableAnalyzerError):
    """Raised when a configured source directory is missing or cannot be listed."""

    def __init__(self, directory: str, cause: BaseException | str):
        super().__init__(
            f"Cannot read directory {directory}: {cause}",
            {"directory": directory},
        )
        self.directory = directory
        self.cause = cause


class ExtractionFailedError(TableAnalyzerError):
    """Raised when the schema extractor cannot read a table file."""

    def __init__(self, path: str, cause: BaseException | str):
        super().__init__(f"Failed to extract schema from {path}: {cause}", {"path": path})
        self.path = path
        self.cause = cause


class MetadataUnavailableError(TableAnalyzerError):
    """Raised when size or modification time of a table file cannot be read."""

    def __init__(self, path: str, cause: BaseException | str):
        super().__init__(f"Failed to get file metadata for {path}: {cause}", {"path": path})
        self.path = path
        self.cause = cause


class OutputDirCreateError(TableAnalyzerError):
    """Raised when a task output directory cannot be created."""

    def __init__(self, directory: str, cause: BaseException | str):
        super().__init__(
            f"Failed to create output directory {directory}: {cause}",
            {"directory": directory},
        )
        self.directory = directory
        self.cause = cause


class OutputWriteError(TableAnalyzerError):
    """Raised when a report file cannot be created or written."""

    def __init__(self, path: str, cause: BaseException | str):
        super().__init__(f"Failed to write report {path}: {cause}", {"path": path})
        self.path = path
        self.cause = cause


class AggregationError(TableAnalyzerError):
    """Raised when the accumulator receives inconsistent input (duplicate or empty outcome)."""


class TaskFailedError(TableAnalyzerError):
    """Wraps the first fatal error of a task, naming the task that failed."""

    def __init__(self, task_name: str, cause: BaseException):
        super().__init__(f"Task '{task_name}' failed: {cause}", {"task": task_name})
        self.task_name = task_name
        self.cause = cause
