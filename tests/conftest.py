"""Pytest configuration and fixtures."""
import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from tblanalyzer.models import ExtractionOutcome, FileStat, TableSchema


def write_table(path: Path, indexes=(), keys=(), header="id,value", rows=("1,a",)) -> Path:
    """Write a generic table file with a directive preamble."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [f"#index {idx}" for idx in indexes] + [f"#key {key}" for key in keys]
    lines.append(header)
    lines.extend(rows)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def outcome(path, indexes=(), keys=(), size=0, modified=None) -> ExtractionOutcome:
    """Build a processed outcome without touching the file system."""
    return ExtractionOutcome.processed(
        path,
        TableSchema(indexes=tuple(indexes), col_keys=tuple(keys)),
        FileStat(size_bytes=size, modified_at=modified),
    )


@pytest.fixture
def fixed_time():
    return datetime(2024, 3, 1, 12, 30, 45, tzinfo=UTC)


@pytest.fixture
def sample_tree(tmp_path):
    """Directory with two supported tables and one unsupported file."""
    data = tmp_path / "data"
    write_table(data / "a.csv", indexes=["X", "Y"], keys=["id"])
    write_table(data / "b.txt", indexes=["Y", "Z"], keys=["id", "value"])
    (data / "c.dat").write_text("#index W\nid\n", encoding="utf-8")
    return data


@pytest.fixture
def make_table():
    return write_table


@pytest.fixture
def make_outcome():
    return outcome


@pytest.fixture
def make_non_utf8_table():
    """Create a table whose file name holds a byte that is not valid UTF-8."""
    def _make(directory: Path) -> Path:
        path = directory / os.fsdecode(b"bad\xff.csv")
        try:
            return write_table(path, indexes=["A"])
        except (OSError, UnicodeError):
            pytest.skip("file system does not accept non UTF-8 file names")
    return _make
