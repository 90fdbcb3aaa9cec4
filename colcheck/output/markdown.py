"""Markdown output rendering for lint reports."""
from colcheck.core.report import LintReport
from colcheck.models.finding import SEVERITY_RANK

_EMOJI = {"HIGH": "🔴", "MEDIUM": "🟡", "LOW": "🟢", "NONE": "✅"}

def render_markdown(report: LintReport) -> str:
    """Render lint report as Markdown, one table per contested column name."""
    lines = [
        "# Column Consistency Report",
        f"**Tables Scanned:** {report.tables_scanned}",
        f"**Findings:** {len(report.findings)}",
        f"**Classification:** {_EMOJI[report.classification]} {report.classification}",
        ""
    ]

    if report.warnings:
        lines.append("### ⚠️ Warnings")
        for warning in report.warnings:
            lines.append(f"- {warning}")
        lines.append("")

    lines.extend([
        "## Findings",
        ""
    ])

    if not report.findings:
        lines.append("No mismatched columns detected.")
        return "\n".join(lines)

    # Group by column name, most severe first, keeping scan order within a group
    groups = {}
    for finding in report.findings:
        key = finding.evidence["column"].lower()
        groups.setdefault(key, []).append(finding)

    ordered = sorted(
        groups.values(),
        key=lambda fs: -max(SEVERITY_RANK[f.severity] for f in fs)
    )

    for findings in ordered:
        first = findings[0]
        evidence = first.evidence
        emoji = _EMOJI[first.severity.value]
        lines.append(f"### {emoji} {evidence['column']} ({first.rule_id})")
        lines.append(
            f"- **Definitions:** {evidence['definition_count']} across "
            f"{evidence['total_occurrences']} tables"
        )
        lines.append(
            f"- **Dominant Signature:** `{evidence['dominant_signature']}` "
            f"({evidence['dominant_count']} tables)"
        )
        lines.append("")
        lines.append("| Location | Signature | Tables With Signature | Matches Dominant |")
        lines.append("|----------|-----------|-----------------------|------------------|")
        for f in findings:
            matches = (f.evidence['this_signature'].lower() ==
                       f.evidence['dominant_signature'].lower())
            lines.append(
                f"| {f.location.qualified_name()} | `{f.evidence['this_signature']}` | "
                f"{f.evidence['occurrence_of_this_signature']} | {'Yes' if matches else 'No'} |"
            )
        lines.append("")

    return "\n".join(lines)
