"""Centralized logging configuration using Loguru.

Human-readable output goes to stderr by default; NDJSON output is available
for machine consumption (one JSON object per line on stdout).

Usage:
    from tblanalyzer.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if TBLANALYZER_LOG_LEVEL=DEBUG

Environment Variables:
    TBLANALYZER_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    TBLANALYZER_LOG_JSON: 0|1 (default: 0, human-readable)
    TBLANALYZER_LOG_FILE: path to an NDJSON log file (optional)
"""

import json
import os
import sys

from loguru import logger

# Remove default handler
logger.remove()

# Numeric levels for NDJSON records
JSON_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("TBLANALYZER_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("TBLANALYZER_LOG_JSON", "0") == "1"
_log_file = os.environ.get("TBLANALYZER_LOG_FILE")


def _json_record(record) -> dict:
    """Flatten a loguru record into a JSON-serializable dict."""
    entry = {
        "level": JSON_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }
    for key, value in record["extra"].items():
        entry[key] = value if isinstance(value, (str, int, float, bool)) else str(value)

    if record["exception"]:
        exc = record["exception"]
        entry["err"] = {
            "type": exc.type.__name__ if exc.type else "Error",
            "message": str(exc.value) if exc.value else "",
        }
    return entry


def json_sink(message):
    """Write log records as NDJSON to stdout.

    Never call logger.* inside a sink - it recurses.
    """
    sys.stdout.write(json.dumps(_json_record(message.record)) + "\n")
    sys.stdout.flush()


# No emojis: output must stay CP1252-safe on Windows consoles
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

# Track the human-mode handler ID so it can be swapped for Rich integration
_human_handler_id: int | None = None

if _json_mode:
    logger.add(json_sink, level=_log_level, colorize=False)
else:
    _human_handler_id = logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:
    def _file_json_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(_json_record(message.record)) + "\n")

    logger.add(_file_json_sink, level="DEBUG")


def swap_to_rich_sink(rich_sink_fn) -> int | None:
    """Swap the stderr handler for a Rich-aware sink while a progress display runs.

    Logs written straight to stderr get clobbered by Rich's refresh, so they
    are routed through the Rich console instead.

    Args:
        rich_sink_fn: Callable accepting loguru message objects.

    Returns:
        The new handler ID, or None in JSON mode (nothing to swap).
    """
    global _human_handler_id

    if _json_mode or _human_handler_id is None:
        return None

    logger.remove(_human_handler_id)
    _human_handler_id = None

    return logger.add(
        rich_sink_fn,
        level=_log_level,
        format=_human_format,
        colorize=True,  # Rich renders the ANSI codes
    )


def restore_stderr_sink(rich_handler_id: int | None) -> None:
    """Restore the stderr handler after the Rich display ends.

    Args:
        rich_handler_id: The handler ID returned by swap_to_rich_sink().
    """
    global _human_handler_id

    if _json_mode or rich_handler_id is None:
        return

    try:
        logger.remove(rich_handler_id)
    except ValueError:
        pass  # Already removed

    _human_handler_id = logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,
    )


__all__ = [
    "logger",
    "swap_to_rich_sink",
    "restore_stderr_sink",
]
