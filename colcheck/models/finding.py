"""Lint finding models and classifications."""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

class FindingType(str, Enum):
    """Types of schema design findings."""

    MISMATCHED_COLUMN = "MISMATCHED_COLUMN"

class Severity(str, Enum):
    """Severity levels for findings."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}

class Location(BaseModel):
    """Where a finding was raised."""

    database_name: Optional[str] = None
    schema_name: Optional[str] = None
    table_name: str
    column_name: Optional[str] = None

    def qualified_name(self) -> str:
        parts = [self.database_name, self.schema_name, self.table_name, self.column_name]
        return ".".join(p for p in parts if p)

class Finding(BaseModel):
    """Represents a single finding from a lint rule."""

    rule_id: str
    finding_type: FindingType
    severity: Severity
    location: Location
    evidence: Dict[str, Any]
    description: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rule_id": "SRD0047",
                "finding_type": "MISMATCHED_COLUMN",
                "severity": "MEDIUM",
                "location": {
                    "schema_name": "DBO",
                    "table_name": "ORDERS",
                    "column_name": "CUSTOMER_ID"
                },
                "evidence": {
                    "this_signature": "VARCHAR(20)",
                    "dominant_signature": "INT",
                    "definition_count": 2,
                    "total_occurrences": 5
                },
                "description": (
                    "Column name CUSTOMER_ID has 2 definition(s) across 5 tables. "
                    "The definition 'VARCHAR(20)' differs from 'INT' by size or type."
                )
            }
        }
    )
