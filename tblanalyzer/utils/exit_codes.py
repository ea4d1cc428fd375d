"""Centralized exit codes for the tblanalyzer CLI."""


class ExitCodes:
    """Standard exit codes for tblanalyzer commands."""

    SUCCESS = 0

    TASK_FAILED = 1
    CONFIG_INVALID = 2

