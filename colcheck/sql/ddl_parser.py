"""DDL (Data Definition Language) parser producing table definitions."""
import bisect
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

import sqlglot
from sqlglot import exp
from sqlglot.tokens import Token

from colcheck.models.schema import ColumnSchema, TableSchema

logger = logging.getLogger(__name__)

# Registry of dialect-specific preprocessors
# Key: dialect name (e.g., 'tsql', 'snowflake')
# Value: List of preprocessor functions
_DIALECT_PREPROCESSORS: Dict[str, List[Callable[[str], str]]] = {}

# Schema assumed for unqualified table names
_DEFAULT_SCHEMAS = {'tsql': 'DBO'}

# Inline suppression, e.g. "-- colcheck: ignore SRD0047" or "/* colcheck: ignore */"
_IGNORE_COMMENT = re.compile(r'colcheck:\s*ignore\b([\w\s,]*)', re.IGNORECASE)

# Keywords that may sit between a column name and its type in ALTER COLUMN
_TYPE_LEAD_WORDS = {'SET', 'DATA', 'TYPE'}

_TYPE_WORD = re.compile(r'^[A-Za-z_][\w ]*$')

TableKey = Tuple[str, str, str]


def register_dialect_preprocessor(dialect: str, func: Callable[[str], str]) -> None:
    """Register a dialect-specific SQL preprocessor.

    Preprocessors run before sqlglot parsing to convert dialect-specific
    syntax that sqlglot doesn't natively handle to standard forms.

    Args:
        dialect: SQL dialect name (e.g., 'tsql', 'snowflake')
        func: Preprocessor function that takes SQL string and returns modified SQL
    """
    if dialect not in _DIALECT_PREPROCESSORS:
        _DIALECT_PREPROCESSORS[dialect] = []
    _DIALECT_PREPROCESSORS[dialect].append(func)
    logger.debug("Registered preprocessor for dialect '%s': %s", dialect, func.__name__)


def _preprocess_sql(sql: str, dialect: str) -> str:
    """Apply dialect-specific preprocessors to SQL."""
    if dialect not in _DIALECT_PREPROCESSORS:
        return sql

    original_sql = sql
    for preprocessor in _DIALECT_PREPROCESSORS[dialect]:
        try:
            sql = preprocessor(sql)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Preprocessor %s failed: %s", preprocessor.__name__, e)

    if sql != original_sql:
        logger.debug("SQL was modified by preprocessor for dialect '%s'", dialect)

    return sql


def _preprocess_tsql_batch_separators(sql: str) -> str:
    """Turn SQL Server 'GO' batch separator lines into statement terminators.

    Examples:
        CREATE TABLE t (id INT)\\nGO -> CREATE TABLE t (id INT)\\n;
    """
    return re.sub(r'^\s*GO\s*(\d+)?\s*$', ';', sql, flags=re.IGNORECASE | re.MULTILINE)


def _preprocess_snowflake_modify_column(sql: str) -> str:
    """Convert Snowflake 'ALTER TABLE ... MODIFY COLUMN' to 'ALTER TABLE ... ALTER COLUMN ... TYPE'.

    Examples:
        ALTER TABLE t MODIFY COLUMN c VARCHAR(255) -> ALTER TABLE t ALTER COLUMN c TYPE VARCHAR(255)
    """
    pattern = re.compile(
        r'ALTER\s+TABLE\s+(\S+)\s+MODIFY(?:\s+COLUMN)?\s+(\S+)\s+(\S+(?:\([^)]*\))?)',
        re.IGNORECASE
    )
    return pattern.sub(
        lambda m: f"ALTER TABLE {m.group(1)} ALTER COLUMN {m.group(2)} TYPE {m.group(3)}",
        sql
    )


register_dialect_preprocessor('tsql', _preprocess_tsql_batch_separators)
register_dialect_preprocessor('snowflake', _preprocess_snowflake_modify_column)


class _ParseContext:  # pylint: disable=too-few-public-methods
    """Dialect and source tokens of the DDL being parsed.

    sqlglot folds synonymous type keywords (REAL and FLOAT, NUMERIC and
    DECIMAL) into one DataType; the tokens keep the spelling the user wrote.
    """

    def __init__(self, sql: str, dialect: str):
        self.dialect = dialect
        try:
            self.tokens: List[Token] = list(sqlglot.tokenize(sql, read=dialect))
        except Exception as e:  # pylint: disable=broad-except
            logger.debug("Tokenizing for type spelling failed: %s", e)
            self.tokens = []
        self._starts = [t.start for t in self.tokens]

    def declared_type(self, identifier) -> Optional[str]:
        """Return the type keyword written right after a column identifier."""
        if identifier is not None and not isinstance(identifier, exp.Identifier):
            identifier = identifier.find(exp.Identifier)
        meta = getattr(identifier, 'meta', None) or {}
        end = meta.get('end')
        if end is None or not self.tokens:
            return None

        index = bisect.bisect_right(self._starts, end)
        while index < len(self.tokens) and self.tokens[index].text.upper() in _TYPE_LEAD_WORDS:
            index += 1
        if index >= len(self.tokens):
            return None

        text = self.tokens[index].text
        return text.upper() if _TYPE_WORD.match(text) else None


def parse_ddl_to_schema(
    ddl_sql: str,
    base_schemas: Optional[List[TableSchema]] = None,
    dialect: str = 'tsql'
) -> List[TableSchema]:
    """Parse CREATE TABLE and ALTER TABLE DDL statements to schema objects.

    Supports:
    - CREATE TABLE (with column definitions)
    - ALTER TABLE ADD COLUMN
    - ALTER TABLE DROP COLUMN
    - ALTER TABLE ALTER/MODIFY COLUMN (type/nullability changes)
    - ALTER TABLE RENAME COLUMN

    Type names are kept as declared (REAL stays REAL, NUMERIC stays NUMERIC).
    Columns without a declared type (e.g. computed columns) are kept with
    ``data_type=None``. Never raises; returns the base schemas (or an empty
    list) on complete failure.

    Args:
        ddl_sql: DDL SQL text (one or more statements)
        base_schemas: Optional tables that ALTER statements may target
        dialect: SQL dialect for parsing (default: 'tsql')

    Returns:
        List of TableSchema objects, base schemas first.
    """
    schemas: Dict[TableKey, TableSchema] = {}

    if base_schemas:
        for schema in base_schemas:
            schemas[_table_key(schema)] = schema.model_copy(deep=True)

    try:
        processed_sql = _preprocess_sql(ddl_sql, dialect)
        statements = sqlglot.parse(processed_sql, read=dialect)
    except Exception as e:  # pylint: disable=broad-except
        logger.warning("DDL parsing failed: %s", e)
        return list(schemas.values())

    context = _ParseContext(processed_sql, dialect)

    for stmt in statements:
        if not stmt:
            continue

        if isinstance(stmt, exp.Create):
            schema_obj = _handle_create_table(stmt, context)
            if schema_obj:
                schemas[_table_key(schema_obj)] = schema_obj

        elif isinstance(stmt, exp.Alter):
            _handle_alter_table(stmt, schemas, context)

        else:
            logger.debug("Skipping unsupported statement type: %s", type(stmt).__name__)

    return list(schemas.values())


def _table_key(table: TableSchema) -> TableKey:
    return (
        (table.database_name or '').upper(),
        table.schema_name.upper(),
        table.table_name.upper(),
    )


def _handle_create_table(stmt: exp.Create, context: _ParseContext) -> Optional[TableSchema]:
    """Extract TableSchema from CREATE TABLE statement."""
    try:
        schema_def = stmt.args.get('this')
        if not isinstance(schema_def, exp.Schema):
            logger.debug("No column list found in CREATE %s", stmt.args.get('kind'))
            return None

        table_expr = schema_def.this
        if not isinstance(table_expr, exp.Table):
            logger.debug("No table definition found in CREATE TABLE")
            return None

        table_context = _extract_table_context(table_expr, context.dialect)
        if not table_context:
            return None

        table_name, schema_name, db_name = table_context

        columns = []
        for col_expr in schema_def.expressions:
            if isinstance(col_expr, exp.ColumnDef):
                col = _extract_column_from_columndef(
                    col_expr, schema_name, table_name,
                    len(columns) + 1, context, db_name=db_name
                )
                if col:
                    columns.append(col)

        if not columns:
            logger.warning("CREATE TABLE %s has no columns", table_name)
            return None

        return TableSchema(
            database_name=db_name,
            schema_name=schema_name,
            table_name=table_name,
            columns=columns
        )

    except Exception as e:  # pylint: disable=broad-except
        logger.warning("Failed to extract CREATE TABLE: %s", e)
        return None


def _identifier_name(part) -> Optional[str]:
    if part is None:
        return None
    name = part.name if hasattr(part, 'name') else str(part)
    return name or None


def _extract_table_context(table_expr: exp.Table, dialect: str):
    """Extract table name, schema, and db from table expression."""
    table_name = _identifier_name(table_expr.this)
    if not table_name:
        logger.debug("No table name found in CREATE TABLE")
        return None

    schema_name = table_expr.db
    if not schema_name or str(schema_name).upper() == 'NONE':
        schema_name = _DEFAULT_SCHEMAS.get(dialect, 'PUBLIC')

    db_name = table_expr.catalog or None

    return (
        table_name.upper(),
        schema_name.upper(),
        db_name.upper() if db_name else None,
    )


def _extract_type(
    kind: Optional[exp.DataType],
    context: _ParseContext,
    identifier=None
) -> Tuple[Optional[str], List[str]]:
    """Split a column type into its declared base name and parameter tokens.

    Examples:
        VARCHAR(20) -> ('VARCHAR', ['20'])
        NUMERIC(18, 2) -> ('NUMERIC', ['18', '2'])
        NVARCHAR(MAX) -> ('NVARCHAR', ['MAX'])
    """
    if kind is None:
        return None, []

    if kind.this == exp.DataType.Type.USERDEFINED:
        base_type = kind.args.get('kind')
    else:
        base_type = context.declared_type(identifier)
        if not base_type and isinstance(kind.this, exp.DataType.Type):
            # Spelling unavailable, render the bare type back through the dialect
            base_type = exp.DataType(this=kind.this).sql(dialect=context.dialect)
        elif not base_type:
            base_type = _identifier_name(kind.this)

    params = [p.sql(dialect=context.dialect) for p in kind.expressions]
    return (str(base_type).upper() if base_type else None), params


def _extract_ignored_rules(col_expr: exp.ColumnDef) -> List[str]:
    """Collect rule ids suppressed by comments attached to a column definition."""
    ignored: List[str] = []
    for node in col_expr.find_all(exp.Expression):
        for comment in node.comments or []:
            match = _IGNORE_COMMENT.search(comment)
            if not match:
                continue
            rules = [r.upper() for r in re.split(r'[\s,]+', match.group(1)) if r]
            ignored.extend(rules or ['*'])
    return ignored


def _is_not_null(col_expr: exp.ColumnDef) -> bool:
    for constraint in col_expr.constraints or []:
        if isinstance(constraint, exp.ColumnConstraint):
            if isinstance(constraint.kind, exp.NotNullColumnConstraint):
                return not constraint.kind.args.get('allow_null')
        elif isinstance(constraint, exp.NotNullColumnConstraint):
            return True
    return False


def _extract_column_from_columndef(
    col_expr: exp.ColumnDef,
    schema_name: str,
    table_name: str,
    ordinal_pos: int,
    context: _ParseContext,
    db_name: Optional[str] = None
) -> Optional[ColumnSchema]:
    """Extract ColumnSchema from ColumnDef expression.

    Args:
        col_expr: sqlglot ColumnDef expression
        schema_name: Schema name
        table_name: Table name
        ordinal_pos: Column ordinal position
        context: Dialect and source tokens of the statement
        db_name: Optional database name

    Returns:
        ColumnSchema object or None if extraction fails
    """
    try:
        col_name = col_expr.name
        if not col_name:
            return None

        data_type, type_parameters = _extract_type(col_expr.kind, context, col_expr.this)
        if not data_type:
            logger.debug("Column %s.%s has no declared type", table_name, col_name)

        return ColumnSchema(
            database_name=db_name,
            schema_name=schema_name,
            table_name=table_name,
            column_name=col_name.upper(),
            data_type=data_type,
            type_parameters=type_parameters,
            is_nullable=not _is_not_null(col_expr),
            ordinal_position=ordinal_pos,
            ignored_rules=_extract_ignored_rules(col_expr)
        )

    except Exception as e:  # pylint: disable=broad-except
        logger.warning("Failed to extract column definition: %s", e)
        return None


def _handle_alter_actions(
    stmt: exp.Alter,
    table_schema: TableSchema,
    context: _ParseContext
) -> None:
    """Process specific actions within an ALTER TABLE statement."""
    for action in stmt.args.get('actions') or []:
        if isinstance(action, exp.ColumnDef):
            _handle_add_column(action, table_schema, context)
        elif isinstance(action, exp.Drop) and action.args.get('kind') == 'COLUMN':
            _handle_drop_column(action, table_schema)
        elif isinstance(action, exp.RenameColumn):
            _handle_rename_column(action, table_schema)
        elif isinstance(action, exp.AlterColumn):
            _handle_modify_column(action, table_schema, context)


def _handle_add_column(action: exp.ColumnDef, table_schema: TableSchema,
                       context: _ParseContext) -> None:
    """Handle ADD COLUMN action."""
    new_col = _extract_column_from_columndef(
        action, table_schema.schema_name, table_schema.table_name,
        len(table_schema.columns) + 1, context, db_name=table_schema.database_name
    )
    if new_col:
        table_schema.columns.append(new_col)


def _dropped_column_names(action: exp.Drop) -> List[str]:
    # Newer sqlglot keeps the dropped column(s) under 'tables' rather than 'this'
    targets = [action.this] if action.this is not None else action.args.get('tables') or []
    return [_identifier_name(t).upper() for t in targets if _identifier_name(t)]


def _handle_drop_column(action: exp.Drop, table_schema: TableSchema) -> None:
    """Handle DROP COLUMN action."""
    dropped = set(_dropped_column_names(action))
    if not dropped:
        logger.debug("DROP COLUMN without a column name on %s", table_schema.table_name)
        return
    table_schema.columns = [
        c for c in table_schema.columns
        if c.column_name.upper() not in dropped
    ]


def _handle_rename_column(action: exp.RenameColumn, table_schema: TableSchema) -> None:
    """Handle RENAME COLUMN action."""
    old_name = action.this.name.upper()
    new_name = action.args.get('to').name.upper()
    for col in table_schema.columns:
        if col.column_name.upper() == old_name:
            col.column_name = new_name


def _handle_modify_column(action: exp.AlterColumn, table_schema: TableSchema,
                          context: _ParseContext) -> None:
    """Handle MODIFY/ALTER COLUMN action."""
    col_name = action.this.name.upper()
    for col in table_schema.columns:
        if col.column_name.upper() == col_name:
            dtype = action.args.get('dtype')
            if dtype:
                col.data_type, col.type_parameters = _extract_type(dtype, context, action.this)

            allow_null = action.args.get('allow_null')
            if allow_null is not None:
                col.is_nullable = bool(allow_null)


def _find_table(schemas: Dict[TableKey, TableSchema],
                db_name: Optional[str], schema_name: str,
                table_name: str) -> Optional[TableSchema]:
    """Locate an ALTER target; an unqualified database matches a single candidate."""
    exact = schemas.get(((db_name or ''), schema_name, table_name))
    if exact is not None or db_name:
        return exact

    candidates = [
        table for (_, schema, table_key), table in schemas.items()
        if schema == schema_name and table_key == table_name
    ]
    if len(candidates) > 1:
        logger.warning("ALTER TABLE %s.%s is ambiguous across databases; skipped",
                       schema_name, table_name)
        return None
    return candidates[0] if candidates else None


def _handle_alter_table(stmt: exp.Alter, schemas: Dict[TableKey, TableSchema],
                        context: _ParseContext) -> None:
    """Handle ALTER TABLE statement and update schemas accordingly."""
    try:
        table_expr = stmt.this
        if not isinstance(table_expr, exp.Table):
            return

        table_context = _extract_table_context(table_expr, context.dialect)
        if not table_context:
            return
        table_name, schema_name, db_name = table_context

        table_schema = _find_table(schemas, db_name, schema_name, table_name)
        if table_schema is None:
            logger.debug("Table %s.%s not found for ALTER", schema_name, table_name)
            return

        _handle_alter_actions(stmt, table_schema, context)

    except Exception as e:  # pylint: disable=broad-except
        logger.warning("Failed to parse ALTER TABLE: %s", e)
