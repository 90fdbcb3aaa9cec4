"""Tests for record extraction and exclusions."""
from colcheck.core.extract import extract_records


def test_extract_records_flattens_tables(table_factory):
    """Test function."""
    tables = [
        table_factory(table_name="A", columns=[("ID", "INT"), ("NAME", "VARCHAR", ["50"])]),
        table_factory(table_name="B", columns=[("ID", "BIGINT")]),
    ]
    records = extract_records(tables)
    assert [(r.table_name, r.column_name) for r in records] == [("A", "ID"), ("A", "NAME"), ("B", "ID")]
    assert records[1].signature == "VARCHAR(50)"
    assert records[0].table is tables[0]
    assert records[0].column is tables[0].columns[0]


def test_extract_keeps_untyped_columns_as_untyped(table_factory):
    """Test function."""
    tables = [table_factory(table_name="A", columns=[("TOTAL", None)])]
    records = extract_records(tables)
    assert len(records) == 1
    assert records[0].has_type is False


def test_extract_excludes_tables_by_pattern(table_factory):
    """Test function."""
    tables = [
        table_factory(table_name="ORDERS", columns=[("ID", "INT")]),
        table_factory(table_name="ORDERS_BAK", columns=[("ID", "VARCHAR", ["10"])]),
        table_factory(table_name="LOG", schema_name="AUDIT", columns=[("ID", "BIGINT")]),
    ]
    records = extract_records(tables, exclude_tables=["*_bak", "audit.*"])
    assert [r.table_name for r in records] == ["ORDERS"]


def test_extract_excludes_columns_by_pattern(table_factory):
    """Test function."""
    tables = [
        table_factory(table_name="A", columns=[("ID", "INT"), ("ROW_VERSION", "BINARY", ["8"])]),
        table_factory(table_name="B", columns=[("ID", "INT"), ("LEGACY_ID", "INT")]),
    ]
    records = extract_records(tables, exclude_columns=["row_version", "b.legacy_*"])
    assert [(r.table_name, r.column_name) for r in records] == [("A", "ID"), ("B", "ID")]


def test_extract_honours_ignored_rules(table_factory, column_factory):
    """Test function."""
    suppressed = column_factory(table_name="A", column_name="CODE", ignored_rules=["srd0047"])
    suppress_all = column_factory(table_name="A", column_name="REF", ignored_rules=["*"])
    other_rule = column_factory(table_name="A", column_name="KEY", ignored_rules=["SRD0001"])
    tables = [table_factory(table_name="A", columns=[suppressed, suppress_all, other_rule])]

    records = extract_records(tables, rule_id="SRD0047")
    assert [r.column_name for r in records] == ["KEY"]


def test_extract_empty():
    """Test function."""
    assert extract_records([]) == []
