"""Flattening of table definitions into column records."""
import logging
from typing import Iterable, List, Optional, Sequence

from colcheck.core.utils import matches_any, qualified_names
from colcheck.models.columns import ColumnRecord
from colcheck.models.schema import ColumnSchema, TableSchema

logger = logging.getLogger(__name__)

IGNORE_ALL = '*'


def extract_records(
    tables: Iterable[TableSchema],
    rule_id: Optional[str] = None,
    exclude_tables: Sequence[str] = (),
    exclude_columns: Sequence[str] = ()
) -> List[ColumnRecord]:
    """Turn table definitions into ColumnRecords, applying exclusions.

    Args:
        tables: Parsed table definitions
        rule_id: Rule the records are extracted for; columns suppressing it
            through ``ignored_rules`` are skipped
        exclude_tables: Table patterns matched against TABLE, SCHEMA.TABLE
            and DATABASE.SCHEMA.TABLE
        exclude_columns: Column patterns matched against COLUMN and TABLE.COLUMN

    Returns:
        One record per remaining column, in declaration order
    """
    records = []
    for table in tables:
        names = qualified_names(table.table_name, table.schema_name, table.database_name)
        if matches_any(names, exclude_tables):
            logger.debug("Skipping excluded table %s", names[-1])
            continue

        for column in table.columns:
            if _is_excluded(table, column, rule_id, exclude_columns):
                continue
            records.append(ColumnRecord(
                table_name=table.table_name,
                column_name=column.column_name,
                base_type=column.data_type or None,
                type_parameters=list(column.type_parameters),
                table=table,
                column=column,
            ))
    return records


def _is_excluded(
    table: TableSchema,
    column: ColumnSchema,
    rule_id: Optional[str],
    exclude_columns: Sequence[str]
) -> bool:
    ignored = {r.upper() for r in column.ignored_rules}
    if IGNORE_ALL in ignored or (rule_id and rule_id.upper() in ignored):
        logger.debug("Column %s.%s suppresses %s", table.table_name,
                     column.column_name, rule_id or 'all rules')
        return True

    names = [column.column_name, f"{table.table_name}.{column.column_name}"]
    if matches_any(names, exclude_columns):
        logger.debug("Skipping excluded column %s.%s", table.table_name, column.column_name)
        return True
    return False
