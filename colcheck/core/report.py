"""Lint report aggregation and classification."""
from typing import Dict, List, Optional

from colcheck.models.finding import SEVERITY_RANK, Finding, Severity

class LintReport:  # pylint: disable=too-few-public-methods
    """Aggregate findings into a classified report."""

    def __init__(self, findings: List[Finding], warnings: Optional[List[str]] = None,
                 tables_scanned: int = 0):
        """Initialize with findings and compute the classification."""
        self.findings = findings
        self.warnings = warnings or []
        self.tables_scanned = tables_scanned
        self.counts = self._count_by_severity(findings)
        self.classification = self._classify(findings)

    @staticmethod
    def _count_by_severity(findings: List[Finding]) -> Dict[str, int]:
        counts = {s.value: 0 for s in Severity}
        for f in findings:
            counts[f.severity.value] += 1
        return counts

    @staticmethod
    def _classify(findings: List[Finding]) -> str:
        """Classify by the most severe finding, NONE when clean."""
        if not findings:
            return "NONE"
        worst = max(findings, key=lambda f: SEVERITY_RANK[f.severity])
        return worst.severity.value

    def fails(self, fail_on: str) -> bool:
        """Whether any finding meets or exceeds the ``fail_on`` threshold."""
        if fail_on == "NONE" or self.classification == "NONE":
            return False
        return SEVERITY_RANK[Severity(self.classification)] >= SEVERITY_RANK[Severity(fail_on)]

    def to_dict(self):
        """Convert to dictionary representation."""
        return {
            "classification": self.classification,
            "tables_scanned": self.tables_scanned,
            "finding_count": len(self.findings),
            "counts": self.counts,
            "findings": [f.model_dump(mode="json") for f in self.findings],
            "warnings": self.warnings
        }
