"""Command-line interface for colcheck - column type consistency linter."""
import argparse
import json  # pylint: disable=import-self
import logging
import sys
from typing import List, Tuple

from colcheck.config.loader import load_lint_config
from colcheck.config.settings import FAIL_ON_CHOICES, SUPPORTED_DIALECTS
from colcheck.core.analyze import analyze
from colcheck.input.resolver import InputType, resolve_inputs
from colcheck.models.schema import TableSchema
from colcheck.output.json import render_json
from colcheck.output.markdown import render_markdown
from colcheck.sql.ddl_parser import parse_ddl_to_schema

logger = logging.getLogger(__name__)

def load_schema_file(path: str) -> List[TableSchema]:
    """Internal helper to load schema from JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
        if isinstance(data, list):
            return [TableSchema(**t) for t in data]
        return [TableSchema(**data)]

def load_tables(sources, dialect: str) -> Tuple[List[TableSchema], List[str]]:
    """Load every resolved source into one schema snapshot.

    SQL files are parsed on top of the tables loaded so far, so ALTER
    statements may target tables from earlier files.
    """
    tables: List[TableSchema] = []
    warnings = []
    for input_type, path in sources:
        if input_type == InputType.JSON:
            tables.extend(load_schema_file(path))
            continue

        with open(path, 'r', encoding='utf-8') as f:
            ddl = f.read()
        before = tables
        tables = parse_ddl_to_schema(ddl, base_schemas=before, dialect=dialect)
        if tables == before and ddl.strip():
            logger.debug("Nothing applied from %s", path)
            warnings.append(f"No table definitions parsed from {path}")
    return tables, warnings

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr
    )

def run_lint(args):
    """Execution wrapper for the lint command."""
    try:
        overrides = {
            'dialect': args.dialect,
            'severity': args.severity,
            'fail_on': args.fail_on,
            'minority_only': True if args.minority_only else None,
            'exclude_tables': args.exclude_table,
            'exclude_columns': args.exclude_column,
        }
        config = load_lint_config(args.config, overrides)

        sources = resolve_inputs(args.paths)
        tables, warnings = load_tables(sources, config.dialect)

        report = analyze(tables, config, warnings=warnings)

        if args.format == "json":
            print(render_json(report))
        else:
            print(render_markdown(report))

    except Exception as e:  # pylint: disable=broad-except
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(1 if report.fails(config.fail_on) else 0)

def main():
    """Parse command line arguments and execute appropriate command."""
    parser = argparse.ArgumentParser(
        description="colcheck - cross-table column type consistency linter",
        epilog="Examples:\n"
               "  colcheck lint schema/\n"
               "  colcheck lint tables.sql --dialect snowflake --format markdown\n"
               "  colcheck lint tables.json --exclude-table 'audit.*' --minority-only",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command")

    lint_parser = subparsers.add_parser(
        "lint",
        help="Report columns whose type differs from other columns of the same name",
        description="Scan a schema (JSON or SQL DDL files) for mismatched column definitions"
    )
    lint_parser.add_argument(
        "paths", nargs="+",
        help="Schema sources: JSON files, SQL DDL files, or directories containing them"
    )
    lint_parser.add_argument(
        "--config",
        help="Path to config file (default: ./.colcheck.yaml or ~/.colcheck/config.yaml)"
    )
    lint_parser.add_argument(
        "--dialect", choices=SUPPORTED_DIALECTS,
        help="SQL dialect for parsing SQL files (default: tsql)"
    )
    lint_parser.add_argument(
        "--format", choices=["json", "markdown"], default="json",
        help="Output format (default: json)"
    )
    lint_parser.add_argument(
        "--severity", choices=["HIGH", "MEDIUM", "LOW"],
        help="Severity assigned to findings (default: MEDIUM)"
    )
    lint_parser.add_argument(
        "--fail-on", choices=FAIL_ON_CHOICES,
        help="Exit with code 1 if a finding meets or exceeds this severity (default: MEDIUM)"
    )
    lint_parser.add_argument(
        "--minority-only", action="store_true",
        help="Only report columns that differ from the dominant definition"
    )
    lint_parser.add_argument(
        "--exclude-table", action="append", default=None, metavar="PATTERN",
        help="Skip tables matching PATTERN (TABLE, SCHEMA.TABLE; wildcards allowed). Repeatable."
    )
    lint_parser.add_argument(
        "--exclude-column", action="append", default=None, metavar="PATTERN",
        help="Skip columns matching PATTERN (COLUMN or TABLE.COLUMN; wildcards allowed). Repeatable."
    )
    lint_parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging on stderr"
    )

    args = parser.parse_args()

    if args.command == "lint":
        _configure_logging(args.verbose)
        run_lint(args)
    else:
        parser.print_help()
        sys.exit(1)

if __name__ == "__main__":
    main()
