"""Aggregation engine: per-file outcomes -> inventory, vocabulary and pivot.

The accumulator is owned by a single thread. Workers extract schemas in
parallel, but only the owner calls ``add``; nothing here takes a lock.

Ordering rules (all ordinal, case-sensitive string comparison):
- vocabulary: distinct index names, ascending
- inventory records: ascending by (table name, path)
- pivot rows: ascending by path

None of them depends on discovery order or on the order outcomes arrive in,
so the same set of outcomes always produces the same reports.
"""

from collections.abc import Iterable

from tblanalyzer.exceptions import AggregationError
from tblanalyzer.indexer.core import is_supported_table, table_name
from tblanalyzer.models import AggregationResult, ExtractionOutcome, MembershipMatrix, TableRecord
from tblanalyzer.utils.constants import SUPPORTED_EXTENSIONS
from tblanalyzer.utils.logging import logger


class TableAccumulator:
    """Folds extraction outcomes for one task into the aggregate structures."""

    def __init__(self, name_rule: str = "stem"):
        self.name_rule = name_rule
        self._records: dict[str, TableRecord] = {}
        self._index_counts: dict[str, int] = {}
        self._skipped: list[str] = []

    def add(self, outcome: ExtractionOutcome) -> TableRecord | None:
        """Fold one outcome in.

        Returns:
            The new TableRecord, or None when the file was skipped.

        Raises:
            ExtractionFailedError, MetadataUnavailableError: Re-raised from a
                failed outcome; the task must abort.
            AggregationError: On a duplicate path or an empty supported outcome.
        """
        path = outcome.path

        if not is_supported_table(path):
            logger.info(
                "Skipping file with unsupported extension: {path} (supported: {exts})",
                path=path,
                exts=", ".join(SUPPORTED_EXTENSIONS),
            )
            self._skipped.append(path)
            return None

        if outcome.error is not None:
            raise outcome.error

        if outcome.schema is None or outcome.stat is None:
            raise AggregationError(f"No schema or file metadata for {path}", {"path": path})

        if path in self._records:
            raise AggregationError(f"Table path processed twice: {path}", {"path": path})

        record = TableRecord(
            name=table_name(path, self.name_rule),
            path=path,
            size_bytes=outcome.stat.size_bytes,
            modified_at=outcome.stat.modified_at,
            index_names=frozenset(outcome.schema.indexes),
            column_keys=frozenset(outcome.schema.col_keys),
        )
        self._records[path] = record

        for idx in record.index_names:
            self._index_counts[idx] = self._index_counts.get(idx, 0) + 1

        return record

    @property
    def table_count(self) -> int:
        return len(self._records)

    @property
    def index_counts(self) -> dict[str, int]:
        """Number of tables declaring each index."""
        return dict(self._index_counts)

    def finalize(self) -> AggregationResult:
        """Materialize the sorted, immutable result."""
        vocabulary = tuple(sorted(self._index_counts))
        records = tuple(sorted(self._records.values(), key=lambda r: (r.name, r.path)))
        row_order = tuple(sorted(self._records))
        membership = MembershipMatrix(
            {path: record.index_names for path, record in self._records.items()}
        )

        logger.info("Found {count} unique indexes across all tables", count=len(vocabulary))
        return AggregationResult(
            records=records,
            vocabulary=vocabulary,
            membership=membership,
            row_order=row_order,
            skipped=tuple(sorted(self._skipped)),
        )


def aggregate(outcomes: Iterable[ExtractionOutcome], name_rule: str = "stem") -> AggregationResult:
    """Aggregate every outcome of a task in one call.

    Args:
        outcomes: One outcome per enumerated path, in any order
        name_rule: How table names derive from paths (see ``table_name``)

    Returns:
        AggregationResult ready for the report writers
    """
    accumulator = TableAccumulator(name_rule=name_rule)
    for outcome in outcomes:
        accumulator.add(outcome)
    return accumulator.finalize()
