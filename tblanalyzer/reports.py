"""CSV report writers.

Two files per task:
- table_info.csv: one row per table, sorted by table name then path
- table_index_analysis.csv: table x index pivot, rows sorted by path,
  one column per index in vocabulary order, cells "1" / "0"

Output is byte-identical for identical logical input: fixed headers, fixed
number formatting, sorted multi-valued fields and "\\n" line endings.
"""

import csv
from collections.abc import Iterable, Sequence
from pathlib import Path

from tblanalyzer.exceptions import OutputDirCreateError, OutputWriteError
from tblanalyzer.models import AggregationResult, MembershipMatrix, TableRecord
from tblanalyzer.utils.constants import (
    BYTES_PER_MEGABYTE,
    INVENTORY_HEADER,
    MULTI_VALUE_SEPARATOR,
    PIVOT_PATH_HEADER,
    TABLE_INDEX_FILE,
    TABLE_INFO_FILE,
    TIMESTAMP_FORMAT,
)
from tblanalyzer.utils.logging import logger


def format_size_mb(size_bytes: int) -> str:
    """Render a byte count in megabytes with two decimals."""
    return f"{size_bytes / BYTES_PER_MEGABYTE:.2f}"


def join_values(values: Iterable[str]) -> str:
    """Join a multi-valued field in ordinal order."""
    return MULTI_VALUE_SEPARATOR.join(sorted(values))


def inventory_rows(records: Sequence[TableRecord]) -> list[list[str]]:
    """Build the table_info.csv rows, header first.

    Records are written in the order given; the aggregation engine already
    sorted them.
    """
    rows = [list(INVENTORY_HEADER)]
    for record in records:
        modified = record.modified_at.strftime(TIMESTAMP_FORMAT) if record.modified_at else ""
        rows.append([
            record.path,
            modified,
            format_size_mb(record.size_bytes),
            record.name,
            join_values(record.index_names),
            join_values(record.column_keys),
        ])
    return rows


def pivot_rows(
    vocabulary: Sequence[str],
    membership: MembershipMatrix,
    row_order: Sequence[str],
) -> list[list[str]]:
    """Build the table_index_analysis.csv rows, header first."""
    rows = [[PIVOT_PATH_HEADER, *vocabulary]]
    for path in row_order:
        rows.append([path] + ["1" if membership.contains(path, idx) else "0" for idx in vocabulary])
    return rows


def _write_rows(path: Path, rows: list[list[str]]) -> None:
    """Write rows as UTF-8 CSV, closing the handle on every exit path."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerows(rows)
    except (OSError, UnicodeError) as e:
        raise OutputWriteError(str(path), e) from e


def write_inventory(path: Path, records: Sequence[TableRecord]) -> None:
    """Write table_info.csv."""
    _write_rows(path, inventory_rows(records))


def write_pivot(
    path: Path,
    vocabulary: Sequence[str],
    membership: MembershipMatrix,
    row_order: Sequence[str],
) -> None:
    """Write table_index_analysis.csv."""
    _write_rows(path, pivot_rows(vocabulary, membership, row_order))


def write_task_reports(task_dir: Path, result: AggregationResult) -> list[Path]:
    """Create the task output directory and write both reports.

    Args:
        task_dir: ``<output root>/<task name>``
        result: Finalized aggregation for the task

    Returns:
        Paths of the written reports (inventory, pivot)
    """
    try:
        task_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirCreateError(str(task_dir), e) from e

    info_path = task_dir / TABLE_INFO_FILE
    pivot_path = task_dir / TABLE_INDEX_FILE

    logger.debug("Writing {path}", path=info_path)
    write_inventory(info_path, result.records)

    logger.debug("Writing {path}", path=pivot_path)
    write_pivot(pivot_path, result.vocabulary, result.membership, result.row_order)

    return [info_path, pivot_path]
