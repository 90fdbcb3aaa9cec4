"""Tests for offense selection."""
from colcheck.core.aggregate import aggregate
from colcheck.core.select import find_mismatched_columns, select_offenses


def _scenario(record_factory):
    return [
        record_factory(table_name="T1", column_name="id", base_type="int"),
        record_factory(table_name="T2", column_name="id", base_type="int"),
        record_factory(table_name="T3", column_name="id", base_type="varchar", type_parameters=["10"]),
    ]


def test_select_reports_every_member_of_contested_name(record_factory):
    """Test function."""
    offenses = find_mismatched_columns(_scenario(record_factory))

    assert len(offenses) == 3
    assert [o.table_name for o in offenses] == ["T1", "T2", "T3"]
    assert [o.this_signature for o in offenses] == ["int", "int", "varchar(10)"]
    for offense in offenses:
        assert offense.dominant_signature == "int"
        assert offense.definition_count == 2
        assert offense.total_occurrences == 3
        assert offense.dominant_count == 2
    assert [o.occurrence_of_this_signature for o in offenses] == [2, 2, 1]


def test_select_marks_minority(record_factory):
    """Test function."""
    offenses = find_mismatched_columns(_scenario(record_factory))
    assert [o.is_minority for o in offenses] == [False, False, True]


def test_select_passes_source_references_through(record_factory):
    """Test function."""
    offenses = find_mismatched_columns(_scenario(record_factory))
    assert offenses[2].table == "ref:T3"
    assert offenses[2].column == "ref:T3.id"


def test_select_ignores_uncontested_names(record_factory):
    """Test function."""
    records = _scenario(record_factory) + [
        record_factory(table_name="T1", column_name="amount", base_type="decimal", type_parameters=["18", "2"]),
        record_factory(table_name="T2", column_name="amount", base_type="decimal", type_parameters=["18", "2"]),
    ]
    offenses = find_mismatched_columns(records)
    assert {o.column_name for o in offenses} == {"id"}


def test_select_case_insensitive_names(record_factory):
    """Test function."""
    records = [
        record_factory(table_name="T1", column_name="UserId", base_type="INT"),
        record_factory(table_name="T2", column_name="userid", base_type="int"),
        record_factory(table_name="T3", column_name="USERID", base_type="bigint"),
    ]
    offenses = find_mismatched_columns(records)
    assert len(offenses) == 3
    assert offenses[2].this_signature == "bigint"
    assert offenses[2].dominant_signature == "INT"


def test_select_skips_untyped_records(record_factory):
    """Test function."""
    records = _scenario(record_factory) + [
        record_factory(table_name="T4", column_name="id", base_type=None),
    ]
    offenses = find_mismatched_columns(records)
    assert "T4" not in [o.table_name for o in offenses]


def test_select_empty_input():
    """Test function."""
    assert select_offenses([], {}) == []
    assert find_mismatched_columns([]) == []


def test_select_is_idempotent(record_factory):
    """Test function."""
    records = _scenario(record_factory)
    first = select_offenses(records, aggregate(records))
    second = select_offenses(records, aggregate(records))
    assert [o.model_dump() for o in first] == [o.model_dump() for o in second]
