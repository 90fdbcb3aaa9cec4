"""JSON output rendering for lint reports."""
import json  # pylint: disable=import-self,redefined-builtin

from colcheck.core.report import LintReport

def render_json(report: LintReport) -> str:
    """Render lint report as JSON string."""
    # pylint: disable=no-member
    return json.dumps(report.to_dict(), indent=2)
