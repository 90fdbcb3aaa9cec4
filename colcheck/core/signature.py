"""Type signature normalization."""
from typing import Optional, Sequence

# Length parameter reported for unbounded types such as VARCHAR(MAX)
MAX_LENGTH_SENTINEL = "-1"
MAX_LENGTH_TOKEN = "MAX"


def normalize_signature(base_type: str, params: Optional[Sequence[str]] = None) -> str:
    """Build the canonical signature string for a column type.

    Examples:
        normalize_signature("int") -> "int"
        normalize_signature("decimal", ["18", "2"]) -> "decimal(18,2)"
        normalize_signature("varchar", ["-1"]) -> "varchar(MAX)"

    Args:
        base_type: Type keyword, must be non-empty
        params: Length/precision/scale tokens in declared order

    Returns:
        Base type with an optional parenthesized parameter list. Case is
        preserved; callers compare signatures case-insensitively.
    """
    if not params:
        return base_type

    rendered = [
        MAX_LENGTH_TOKEN if str(p).strip() == MAX_LENGTH_SENTINEL else str(p).strip()
        for p in params
    ]
    return f"{base_type}({','.join(rendered)})"
