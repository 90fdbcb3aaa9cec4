"""Core utility functions for colcheck."""
from fnmatch import fnmatchcase
from typing import Iterable, List, Optional

def qualified_names(table: str, schema: Optional[str] = None,
                    database: Optional[str] = None) -> List[str]:
    """List the spellings a table can be matched by.

    Returns:
        [TABLE, SCHEMA.TABLE, DATABASE.SCHEMA.TABLE], omitting the forms whose
        parts are missing.
    """
    names = [table]
    if schema:
        names.append(f"{schema}.{table}")
        if database:
            names.append(f"{database}.{schema}.{table}")
    return names

def matches_any(names: Iterable[str], patterns: Iterable[str]) -> bool:
    """Check whether any name matches any shell-style pattern, ignoring case."""
    lowered = [p.lower() for p in patterns]
    if not lowered:
        return False
    return any(fnmatchcase(name.lower(), p) for name in names for p in lowered)
