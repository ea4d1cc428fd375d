"""Tests for the aggregation engine (vocabulary, membership, ordering)."""

import itertools

import pytest

from tblanalyzer.aggregation import TableAccumulator, aggregate
from tblanalyzer.exceptions import AggregationError, ExtractionFailedError, MetadataUnavailableError
from tblanalyzer.models import ExtractionOutcome


def test_reference_example(make_outcome):
    """a.csv {X,Y}, b.txt {Y,Z}, c.dat skipped -> [X,Y,Z] with 1,1,0 / 0,1,1."""
    result = aggregate([
        make_outcome("d/a.csv", indexes=["X", "Y"]),
        make_outcome("d/b.txt", indexes=["Y", "Z"]),
        ExtractionOutcome.unextracted("d/c.dat"),
    ])

    assert result.vocabulary == ("X", "Y", "Z")
    assert result.row_order == ("d/a.csv", "d/b.txt")
    assert result.skipped == ("d/c.dat",)

    cells = {
        path: [int(result.membership.contains(path, idx)) for idx in result.vocabulary]
        for path in result.row_order
    }
    assert cells == {"d/a.csv": [1, 1, 0], "d/b.txt": [0, 1, 1]}


def test_vocabulary_sorted_ordinal_and_unique(make_outcome):
    result = aggregate([
        make_outcome("t1.csv", indexes=["idx_b", "IDX_A", "idx_a"]),
        make_outcome("t2.csv", indexes=["idx_a", "Idx_c", "_x"]),
        make_outcome("t3.csv", indexes=[]),
    ])

    # Ordinal: uppercase before underscore before lowercase
    assert result.vocabulary == ("IDX_A", "Idx_c", "_x", "idx_a", "idx_b")
    assert len(set(result.vocabulary)) == len(result.vocabulary)


def test_membership_matches_extracted_sets(make_outcome):
    tables = {
        "p/one.fac": {"A", "B"},
        "p/two.fac": {"B"},
        "p/three.fac": set(),
    }
    result = aggregate(make_outcome(path, indexes=sorted(idx)) for path, idx in tables.items())

    for path, indexes in tables.items():
        for idx in result.vocabulary:
            assert result.membership.contains(path, idx) == (idx in indexes)

    # Unknown pairs default to false
    assert not result.membership.contains("p/missing.fac", "A")
    assert not result.membership.contains("p/one.fac", "NOPE")


def test_inventory_sorted_by_name_then_path(make_outcome):
    result = aggregate([
        make_outcome("z/orders.csv"),
        make_outcome("a/orders.txt"),
        make_outcome("m/customers.fac"),
    ])

    assert [(r.name, r.path) for r in result.records] == [
        ("customers", "m/customers.fac"),
        ("orders", "a/orders.txt"),
        ("orders", "z/orders.csv"),
    ]
    # Pivot rows follow path order, independent of the inventory order
    assert result.row_order == ("a/orders.txt", "m/customers.fac", "z/orders.csv")


def test_basename_rule_keeps_extension(make_outcome):
    result = aggregate([make_outcome("d/orders.csv")], name_rule="basename")
    assert result.records[0].name == "orders.csv"


def test_input_order_does_not_change_result(make_outcome):
    outcomes = [
        make_outcome("d/a.csv", indexes=["X", "Y"], size=10),
        make_outcome("d/b.txt", indexes=["Y", "Z"], size=20),
        make_outcome("d/c.fac", indexes=["Q"], size=30),
        ExtractionOutcome.unextracted("d/skip.dat"),
    ]

    seen = set()
    for perm in itertools.permutations(outcomes):
        r = aggregate(list(perm))
        seen.add((r.records, r.vocabulary, r.row_order, r.skipped, tuple(sorted(r.membership.rows.items()))))
    assert len(seen) == 1


def test_unsupported_extension_is_case_sensitive(make_outcome):
    accumulator = TableAccumulator()

    assert accumulator.add(make_outcome("d/upper.CSV", indexes=["X"])) is None
    assert accumulator.add(make_outcome("d/notes.md", indexes=["Y"])) is None
    assert accumulator.add(make_outcome("d/real.csv", indexes=["Z"])) is not None

    result = accumulator.finalize()
    assert result.vocabulary == ("Z",)
    assert result.skipped == ("d/notes.md", "d/upper.CSV")


def test_failed_outcome_aborts():
    accumulator = TableAccumulator()
    error = ExtractionFailedError("d/bad.csv", "boom")

    with pytest.raises(ExtractionFailedError) as exc_info:
        accumulator.add(ExtractionOutcome.failed("d/bad.csv", error))
    assert exc_info.value is error


def test_metadata_failure_aborts():
    error = MetadataUnavailableError("d/gone.txt", "vanished")
    with pytest.raises(MetadataUnavailableError):
        aggregate([ExtractionOutcome.failed("d/gone.txt", error)])


def test_supported_outcome_without_schema_is_rejected():
    with pytest.raises(AggregationError):
        aggregate([ExtractionOutcome.unextracted("d/a.csv")])


def test_duplicate_path_is_rejected(make_outcome):
    accumulator = TableAccumulator()
    accumulator.add(make_outcome("d/a.csv", indexes=["X"]))

    with pytest.raises(AggregationError, match="processed twice"):
        accumulator.add(make_outcome("d/a.csv", indexes=["Y"]))


def test_index_counts(make_outcome):
    accumulator = TableAccumulator()
    accumulator.add(make_outcome("a.csv", indexes=["X", "Y"]))
    accumulator.add(make_outcome("b.csv", indexes=["Y"]))

    assert accumulator.table_count == 2
    assert accumulator.index_counts == {"X": 1, "Y": 2}


def test_empty_task():
    result = aggregate([])
    assert result.records == ()
    assert result.vocabulary == ()
    assert result.row_order == ()
    assert len(result.membership) == 0


def test_records_keep_names_verbatim(make_outcome, fixed_time):
    result = aggregate([
        make_outcome("d/t.csv", indexes=[" Ix ", "ix"], keys=["Key"], size=5, modified=fixed_time)
    ])
    record = result.records[0]

    assert record.index_names == frozenset({" Ix ", "ix"})
    assert record.column_keys == frozenset({"Key"})
    assert record.size_bytes == 5
    assert record.modified_at == fixed_time
