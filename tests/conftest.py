"""Common test fixtures."""
# pylint: disable=redefined-outer-name,too-many-arguments,too-many-positional-arguments
from pathlib import Path
import pytest
from colcheck.models.columns import ColumnRecord
from colcheck.models.schema import ColumnSchema, TableSchema

@pytest.fixture
def fixtures_dir():
    """Fixture for the directory containing test data files."""
    return Path(__file__).parent / "fixtures"

@pytest.fixture
def record_factory():
    """Factory to create ColumnRecord instances for testing."""
    def _make_record(
        table_name="T1",
        column_name="ID",
        base_type="int",
        type_parameters=None
    ):
        return ColumnRecord(
            table_name=table_name,
            column_name=column_name,
            base_type=base_type,
            type_parameters=type_parameters or [],
            table=f"ref:{table_name}",
            column=f"ref:{table_name}.{column_name}"
        )
    return _make_record

@pytest.fixture
def column_factory():
    """Factory to create ColumnSchema instances for testing."""
    def _make_column(
        schema_name="DBO",
        table_name="TEST_TABLE",
        column_name="TEST_COL",
        data_type="INT",
        type_parameters=None,
        is_nullable=True,
        ordinal_position=1,
        ignored_rules=None
    ):
        return ColumnSchema(
            schema_name=schema_name,
            table_name=table_name,
            column_name=column_name,
            data_type=data_type,
            type_parameters=type_parameters or [],
            is_nullable=is_nullable,
            ordinal_position=ordinal_position,
            ignored_rules=ignored_rules or []
        )
    return _make_column

@pytest.fixture
def table_factory(column_factory):
    """Factory to create TableSchema instances for testing.

    ``columns`` may hold ColumnSchema objects or (name, type, params) tuples.
    """
    def _make_table(
        table_name="TEST_TABLE",
        columns=None,
        schema_name="DBO"
    ):
        if columns is None:
            columns = [column_factory(table_name=table_name)]
        built = []
        for position, col in enumerate(columns, start=1):
            if isinstance(col, tuple):
                name, data_type, params = (list(col) + [None])[:3]
                col = column_factory(
                    schema_name=schema_name, table_name=table_name, column_name=name,
                    data_type=data_type, type_parameters=params,
                    ordinal_position=position
                )
            built.append(col)
        return TableSchema(
            schema_name=schema_name,
            table_name=table_name,
            columns=built
        )
    return _make_table
