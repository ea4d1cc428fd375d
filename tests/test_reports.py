"""Tests for the CSV report writers."""

import pytest

from tblanalyzer.aggregation import aggregate
from tblanalyzer.exceptions import OutputDirCreateError, OutputWriteError
from tblanalyzer.reports import (
    format_size_mb,
    inventory_rows,
    join_values,
    pivot_rows,
    write_inventory,
    write_task_reports,
)


@pytest.fixture
def reference_result(make_outcome, fixed_time):
    return aggregate([
        make_outcome("d/b.txt", indexes=["Z", "Y"], keys=["k2", "k1"], size=1048576, modified=fixed_time),
        make_outcome("d/a.csv", indexes=["X", "Y"], keys=["id"], size=1572864, modified=fixed_time),
    ])


def test_format_size_mb():
    assert format_size_mb(0) == "0.00"
    assert format_size_mb(1048576) == "1.00"
    assert format_size_mb(1572864) == "1.50"
    assert format_size_mb(5000) == "0.00"
    assert format_size_mb(10 * 1048576 + 5243) == "10.01"


def test_join_values_sorts_ordinal():
    assert join_values({"b", "B", "a"}) == "B;a;b"
    assert join_values(()) == ""


def test_inventory_rows(reference_result):
    rows = inventory_rows(reference_result.records)

    assert rows[0] == ["Table Path", "Modified at", "Table Size (in M)", "Table Name", "Indexes", "ColKeys"]
    assert rows[1:] == [
        ["d/a.csv", "2024-03-01 12:30:45", "1.50", "a", "X;Y", "id"],
        ["d/b.txt", "2024-03-01 12:30:45", "1.00", "b", "Y;Z", "k1;k2"],
    ]


def test_inventory_row_without_timestamp(make_outcome):
    result = aggregate([make_outcome("d/a.csv", size=0)])
    assert inventory_rows(result.records)[1] == ["d/a.csv", "", "0.00", "a", "", ""]


def test_pivot_rows(reference_result):
    rows = pivot_rows(reference_result.vocabulary, reference_result.membership, reference_result.row_order)

    assert rows == [
        ["Table Path", "X", "Y", "Z"],
        ["d/a.csv", "1", "1", "0"],
        ["d/b.txt", "0", "1", "1"],
    ]
    # Column count = vocabulary + path column, row count = inventory row count
    assert all(len(row) == len(reference_result.vocabulary) + 1 for row in rows)
    assert len(rows) == len(inventory_rows(reference_result.records))


def test_write_task_reports_content(tmp_path, reference_result):
    paths = write_task_reports(tmp_path / "out" / "task", reference_result)

    info, pivot = paths
    assert info.name == "table_info.csv"
    assert pivot.name == "table_index_analysis.csv"
    assert info.read_bytes() == (
        b"Table Path,Modified at,Table Size (in M),Table Name,Indexes,ColKeys\n"
        b"d/a.csv,2024-03-01 12:30:45,1.50,a,X;Y,id\n"
        b"d/b.txt,2024-03-01 12:30:45,1.00,b,Y;Z,k1;k2\n"
    )
    assert pivot.read_bytes() == (
        b"Table Path,X,Y,Z\n"
        b"d/a.csv,1,1,0\n"
        b"d/b.txt,0,1,1\n"
    )


def test_values_needing_quotes_are_quoted(tmp_path, make_outcome):
    result = aggregate([make_outcome("d/a,b.csv", indexes=['ix "q"'])])
    write_task_reports(tmp_path, result)

    pivot = (tmp_path / "table_index_analysis.csv").read_text(encoding="utf-8")
    assert pivot == 'Table Path,"ix ""q"""\n"d/a,b.csv",1\n'


def test_utf8_output(tmp_path, make_outcome):
    result = aggregate([make_outcome("d/größe.csv", indexes=["índice"])])
    write_task_reports(tmp_path, result)

    text = (tmp_path / "table_index_analysis.csv").read_bytes().decode("utf-8")
    assert "índice" in text
    assert "d/größe.csv,1" in text


def test_rewrite_leaves_no_stale_rows(tmp_path, make_outcome):
    first = aggregate([make_outcome("d/a.csv", indexes=["X"]), make_outcome("d/b.csv", indexes=["Y"])])
    second = aggregate([make_outcome("d/a.csv", indexes=["X"])])

    write_task_reports(tmp_path, first)
    write_task_reports(tmp_path, second)

    assert (tmp_path / "table_index_analysis.csv").read_text(encoding="utf-8") == "Table Path,X\nd/a.csv,1\n"
    assert "d/b.csv" not in (tmp_path / "table_info.csv").read_text(encoding="utf-8")


def test_output_dir_blocked_by_file(tmp_path, reference_result):
    blocker = tmp_path / "task"
    blocker.write_text("not a directory")

    with pytest.raises(OutputDirCreateError):
        write_task_reports(blocker, reference_result)


def test_write_failure_raises_output_write_error(tmp_path, reference_result):
    target = tmp_path / "table_info.csv"
    target.mkdir()

    with pytest.raises(OutputWriteError) as exc_info:
        write_inventory(target, reference_result.records)
    assert exc_info.value.path == str(target)


def test_same_input_same_bytes(tmp_path, make_outcome, fixed_time):
    outcomes = [
        make_outcome("d/c.fac", indexes=["B", "A"], keys=["k"], size=7, modified=fixed_time),
        make_outcome("d/a.csv", indexes=["C"], size=9, modified=fixed_time),
    ]
    write_task_reports(tmp_path / "one", aggregate(outcomes))
    write_task_reports(tmp_path / "two", aggregate(list(reversed(outcomes))))

    for name in ("table_info.csv", "table_index_analysis.csv"):
        assert (tmp_path / "one" / name).read_bytes() == (tmp_path / "two" / name).read_bytes()


def test_unencodable_path_raises_output_write_error(tmp_path, make_outcome):
    result = aggregate([make_outcome("d/bad\udcff.csv", indexes=["A"])])

    with pytest.raises(OutputWriteError) as exc_info:
        write_task_reports(tmp_path, result)
    assert isinstance(exc_info.value.cause, UnicodeEncodeError)
