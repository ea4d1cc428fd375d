"""tblanalyzer utilities package."""

from .constants import (
    DEFAULT_CONFIG_PATH,
    ERROR_LOG_FILE,
    STATE_DIR,
    SUPPORTED_EXTENSIONS,
    TABLE_INDEX_FILE,
    TABLE_INFO_FILE,
)
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ERROR_LOG_FILE",
    "STATE_DIR",
    "SUPPORTED_EXTENSIONS",
    "TABLE_INDEX_FILE",
    "TABLE_INFO_FILE",
    "handle_exceptions",
    "ExitCodes",
    "logger",
]
