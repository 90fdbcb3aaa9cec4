"""Lint rules over a whole schema snapshot."""
from typing import List, Optional

from colcheck.config.settings import LintConfig
from colcheck.core.extract import extract_records
from colcheck.core.select import find_mismatched_columns
from colcheck.models.columns import Offense
from colcheck.models.finding import Finding, FindingType, Location
from colcheck.models.schema import TableSchema

MISMATCHED_COLUMNS_RULE_ID = "SRD0047"
MISMATCHED_COLUMNS_DISPLAY_NAME = (
    "Avoid using columns that match other columns by name, "
    "but are different in type or size."
)
MISMATCHED_COLUMNS_MESSAGE = (
    "Column name {column_name} has {definition_count} definition(s) across "
    "{total_occurrences} tables. The definition '{this_signature}' differs "
    "from '{dominant_signature}' by size or type."
)

def format_offense(offense: Offense) -> str:
    """Render an offense with the mismatched-columns message template."""
    return MISMATCHED_COLUMNS_MESSAGE.format(
        column_name=offense.column_name,
        definition_count=offense.definition_count,
        total_occurrences=offense.total_occurrences,
        this_signature=offense.this_signature,
        dominant_signature=offense.dominant_signature,
    )

def _location(offense: Offense) -> Location:
    table = offense.table
    if isinstance(table, TableSchema):
        return Location(
            database_name=table.database_name,
            schema_name=table.schema_name,
            table_name=table.table_name,
            column_name=offense.column_name,
        )
    return Location(table_name=offense.table_name, column_name=offense.column_name)

def rule_mismatched_columns(tables: List[TableSchema],
                            config: Optional[LintConfig] = None) -> List[Finding]:
    """Detect column names used with inconsistent types across tables."""
    config = config or LintConfig()
    records = extract_records(
        tables,
        rule_id=MISMATCHED_COLUMNS_RULE_ID,
        exclude_tables=config.exclude_tables,
        exclude_columns=config.exclude_columns,
    )

    findings = []
    for offense in find_mismatched_columns(records):
        if config.minority_only and not offense.is_minority:
            continue
        findings.append(Finding(
            rule_id=MISMATCHED_COLUMNS_RULE_ID,
            finding_type=FindingType.MISMATCHED_COLUMN,
            severity=config.severity,
            location=_location(offense),
            evidence={
                "table": offense.table_name,
                "column": offense.column_name,
                "this_signature": offense.this_signature,
                "dominant_signature": offense.dominant_signature,
                "definition_count": offense.definition_count,
                "occurrence_of_this_signature": offense.occurrence_of_this_signature,
                "dominant_count": offense.dominant_count,
                "total_occurrences": offense.total_occurrences,
            },
            description=format_offense(offense)
        ))
    return findings

ALL_RULES = [
    rule_mismatched_columns,
]

def apply_rules(tables: List[TableSchema],
                config: Optional[LintConfig] = None) -> List[Finding]:
    """Apply all lint rules to a schema snapshot.

    Args:
        tables: Table definitions of the whole schema
        config: Optional lint configuration

    Returns:
        List of findings from all rules
    """
    all_findings = []
    for rule in ALL_RULES:
        all_findings.extend(rule(tables, config))
    return all_findings
