"""Centralized constants for tblanalyzer.

Single source of truth for file names, supported extensions and defaults
used across the package.
"""

from pathlib import Path

# ============================================================================
# WORKING DIRECTORIES
# ============================================================================

# Local state directory (error log, optional rotating log)
STATE_DIR = Path("./.tblanalyzer")
ERROR_LOG_FILE = STATE_DIR / "error.log"

DEFAULT_CONFIG_PATH = Path("inputs/config.yaml")

# ============================================================================
# INPUT FILES
# ============================================================================

# Case-sensitive suffix match
SUPPORTED_EXTENSIONS: tuple[str, ...] = (".fac", ".txt", ".csv")

# ============================================================================
# REPORTS
# ============================================================================

TABLE_INFO_FILE = "table_info.csv"
TABLE_INDEX_FILE = "table_index_analysis.csv"

INVENTORY_HEADER: tuple[str, ...] = (
    "Table Path",
    "Modified at",
    "Table Size (in M)",
    "Table Name",
    "Indexes",
    "ColKeys",
)
PIVOT_PATH_HEADER = "Table Path"

MULTI_VALUE_SEPARATOR = ";"
BYTES_PER_MEGABYTE = 1024 * 1024
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# ============================================================================
# EXECUTION
# ============================================================================

MAX_DEFAULT_WORKERS = 8
ENV_WORKERS = "TBLANALYZER_WORKERS"
