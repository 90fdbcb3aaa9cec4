"""Column occurrence models used by the signature consistency check."""
from typing import Any, List, NamedTuple, Optional

from pydantic import BaseModel

from colcheck.core.signature import normalize_signature


class SignatureKey(NamedTuple):
    """Case-folded (column name, signature) pair used for grouping."""

    column_name: str
    signature: str


class ColumnRecord(BaseModel):
    """One column declaration encountered during a schema scan."""

    table_name: str
    column_name: str
    base_type: Optional[str] = None
    type_parameters: List[str] = []
    # Source references, passed through to offenses untouched
    table: Any = None
    column: Any = None

    @property
    def has_type(self) -> bool:
        return bool(self.base_type and self.base_type.strip())

    @property
    def signature(self) -> Optional[str]:
        if not self.has_type:
            return None
        return normalize_signature(self.base_type, self.type_parameters)

    @property
    def key(self) -> SignatureKey:
        return SignatureKey(self.column_name.lower(), (self.signature or "").lower())


class SignatureBucket(BaseModel):
    """All occurrences of one column name with one signature."""

    signature: str
    records: List[ColumnRecord] = []

    @property
    def count(self) -> int:
        return len(self.records)


class NameGroup(BaseModel):
    """Statistics for every occurrence of a case-insensitive column name."""

    column_name: str
    buckets: List[SignatureBucket]
    definition_count: int
    total_occurrences: int
    dominant_signature: str
    dominant_count: int

    @property
    def is_contested(self) -> bool:
        return (self.definition_count > 1 and
                self.dominant_count != self.total_occurrences)

    def bucket_for(self, signature: str) -> Optional[SignatureBucket]:
        """Return the bucket matching ``signature`` (case-insensitive)."""
        wanted = signature.lower()
        for bucket in self.buckets:
            if bucket.signature.lower() == wanted:
                return bucket
        return None


class Offense(BaseModel):
    """A column taking part in a contested name, with the name's statistics."""

    table: Any = None
    column: Any = None
    table_name: str
    column_name: str
    this_signature: str
    definition_count: int
    occurrence_of_this_signature: int
    total_occurrences: int
    dominant_count: int
    dominant_signature: str

    @property
    def is_minority(self) -> bool:
        """True when this column does not use the dominant signature."""
        return self.this_signature.lower() != self.dominant_signature.lower()
