"""Data contracts shared by the extractor, the aggregation engine and the writers."""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from tblanalyzer.utils.constants import TABLE_INDEX_FILE, TABLE_INFO_FILE


@dataclass(frozen=True)
class TableSchema:
    """What the schema extractor reports for one file.

    Both tuples keep declaration order with duplicates removed.
    """
    indexes: tuple[str, ...] = ()
    col_keys: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileStat:
    """Size and modification time of a table file."""
    size_bytes: int
    modified_at: datetime | None = None


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of processing one enumerated path.

    Exactly one of these shapes is valid:
    - schema and stat set: the file was processed
    - error set: extraction or stat failed, the task must abort
    - nothing set: the file was never extracted (unsupported extension)
    """
    path: str
    schema: TableSchema | None = None
    stat: FileStat | None = None
    error: Exception | None = None

    @classmethod
    def processed(cls, path: str, schema: TableSchema, stat: FileStat) -> "ExtractionOutcome":
        return cls(path=path, schema=schema, stat=stat)

    @classmethod
    def failed(cls, path: str, error: Exception) -> "ExtractionOutcome":
        return cls(path=path, error=error)

    @classmethod
    def unextracted(cls, path: str) -> "ExtractionOutcome":
        return cls(path=path)


@dataclass(frozen=True)
class TableRecord:
    """One successfully processed table file. Identity is the path."""
    name: str
    path: str
    size_bytes: int
    modified_at: datetime | None
    index_names: frozenset[str]
    column_keys: frozenset[str]


@dataclass(frozen=True)
class MembershipMatrix:
    """Table path -> set of indexes present in that table.

    Pairs that are not stored are implicitly False.
    """
    rows: dict[str, frozenset[str]] = field(default_factory=dict)

    def contains(self, path: str, index: str) -> bool:
        return index in self.rows.get(path, frozenset())

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class AggregationResult:
    """Everything the report writers need for one task."""
    records: tuple[TableRecord, ...]
    vocabulary: tuple[str, ...]
    membership: MembershipMatrix
    row_order: tuple[str, ...]
    skipped: tuple[str, ...] = ()


@dataclass(frozen=True)
class Task:
    """One configured scan-and-report unit."""
    name: str
    directories: tuple[str, ...]
    recursive: bool = False


@dataclass
class TaskSummary:
    """Counters reported after a task finishes."""
    name: str
    tables: int
    skipped: int
    unique_indexes: int
    output_dir: Path
    elapsed: float = 0.0

    @property
    def report_paths(self) -> list[Path]:
        return [self.output_dir / TABLE_INFO_FILE, self.output_dir / TABLE_INDEX_FILE]
