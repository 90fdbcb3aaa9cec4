"""Lint configuration model."""
from typing import List

from pydantic import BaseModel, ConfigDict, field_validator

from colcheck.models.finding import Severity

SUPPORTED_DIALECTS = (
    "tsql", "snowflake", "postgres", "mysql", "bigquery", "databricks", "redshift", "oracle",
)
FAIL_ON_CHOICES = ("HIGH", "MEDIUM", "LOW", "NONE")


class LintConfig(BaseModel):
    """Settings controlling extraction, exclusions and reporting."""

    dialect: str = "tsql"
    severity: Severity = Severity.MEDIUM
    fail_on: str = "MEDIUM"
    minority_only: bool = False
    exclude_tables: List[str] = []
    exclude_columns: List[str] = []

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "dialect": "tsql",
                "severity": "MEDIUM",
                "fail_on": "MEDIUM",
                "minority_only": False,
                "exclude_tables": ["dbo.__*", "staging.*"],
                "exclude_columns": ["row_version", "*.legacy_id"]
            }
        }
    )

    @field_validator("dialect")
    @classmethod
    def _check_dialect(cls, value: str) -> str:
        value = value.lower()
        if value not in SUPPORTED_DIALECTS:
            raise ValueError(
                f"Unsupported dialect '{value}'. "
                f"Supported: {', '.join(SUPPORTED_DIALECTS)}"
            )
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _upper_severity(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("fail_on")
    @classmethod
    def _check_fail_on(cls, value: str) -> str:
        value = value.upper()
        if value not in FAIL_ON_CHOICES:
            raise ValueError(
                f"fail_on must be one of {', '.join(FAIL_ON_CHOICES)}, got '{value}'"
            )
        return value
