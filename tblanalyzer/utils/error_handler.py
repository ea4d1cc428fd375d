"""Centralized error handler for tblanalyzer commands."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from typing import Any

import click

from tblanalyzer.exceptions import ConfigInvalidError, TaskFailedError
from tblanalyzer.utils.logging import logger

from .constants import ERROR_LOG_FILE, STATE_DIR
from .exit_codes import ExitCodes


def exit_code_for(exc: BaseException) -> int:
    """Map an exception to the process exit code."""
    if isinstance(exc, ConfigInvalidError):
        return ExitCodes.CONFIG_INVALID
    if isinstance(exc, TaskFailedError) and isinstance(exc.cause, ConfigInvalidError):
        return ExitCodes.CONFIG_INVALID
    return ExitCodes.TASK_FAILED


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that logs command failures and converts them to ClickException."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            STATE_DIR.mkdir(parents=True, exist_ok=True)
            with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
                f.write("\n" + "=" * 80 + "\n")
                f.write(f"[{datetime.now().isoformat()}] Error in command: {func.__name__}\n")
                f.write("=" * 80 + "\n")
                f.write(f"{error_type}: {error_msg}\n\n")
                f.write(traceback.format_exc())
                f.write("=" * 80 + "\n\n")

            exc = click.ClickException(
                f"{error_type}: {error_msg}\n\nFull traceback logged to: {ERROR_LOG_FILE}"
            )
            exc.exit_code = exit_code_for(e)
            raise exc from e

    return wrapper
