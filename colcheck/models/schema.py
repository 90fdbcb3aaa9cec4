from typing import List, Optional

from pydantic import BaseModel, field_validator

class ColumnSchema(BaseModel):
    """Represents a database column definition."""

    database_name: Optional[str] = None
    schema_name: str = "PUBLIC"
    table_name: str
    column_name: str
    data_type: Optional[str] = None
    type_parameters: List[str] = []
    is_nullable: bool = True
    ordinal_position: int = 1
    ignored_rules: List[str] = []

    @field_validator("type_parameters", mode="before")
    @classmethod
    def _stringify_parameters(cls, value):
        # JSON snapshots may carry lengths as numbers, e.g. [18, 2] or [-1]
        if isinstance(value, (list, tuple)):
            return [str(p) for p in value]
        return value

class TableSchema(BaseModel):
    """Represents a database table definition."""

    database_name: Optional[str] = None
    schema_name: str = "PUBLIC"
    table_name: str
    columns: List[ColumnSchema] = []
