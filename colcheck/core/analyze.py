"""Schema consistency analysis."""
import logging
from typing import List, Optional

from colcheck.config.settings import LintConfig
from colcheck.core.report import LintReport
from colcheck.core.rules import apply_rules
from colcheck.models.schema import TableSchema

logger = logging.getLogger(__name__)

def analyze(
    tables: List[TableSchema],
    config: Optional[LintConfig] = None,
    warnings: Optional[List[str]] = None
) -> LintReport:
    """Core analysis orchestration.

    Args:
        tables: Table definitions of the whole schema snapshot
        config: Optional lint configuration (defaults apply when omitted)
        warnings: Optional warnings collected while loading the schema

    Returns:
        LintReport with findings and classification
    """
    config = config or LintConfig()
    warnings = list(warnings or [])

    if not tables:
        warnings.append("No tables found in input.")

    findings = apply_rules(tables, config)
    logger.debug("Analyzed %d table(s), %d finding(s)", len(tables), len(findings))

    return LintReport(findings, warnings=warnings, tables_scanned=len(tables))
