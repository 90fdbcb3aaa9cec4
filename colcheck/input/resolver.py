"""Input source detection and resolution."""
import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)


class InputType(Enum):
    """Types of schema input sources."""

    JSON = "json"  # JSON files holding TableSchema definitions
    SQL = "sql"    # SQL DDL files


class InputResolutionError(ValueError):
    """Raised when input resolution fails."""


_SUFFIXES = {
    '.json': InputType.JSON,
    '.sql': InputType.SQL,
}


def resolve_inputs(paths: Sequence[str]) -> List[Tuple[InputType, str]]:
    """Resolve CLI paths into typed schema sources.

    Each path may be:
    - a *.json file containing one TableSchema or a list of them
    - a *.sql file containing DDL statements
    - a directory, expanded (recursively, sorted) to the .json and .sql
      files beneath it

    Args:
        paths: File or directory paths, in the order given by the user

    Returns:
        List of (InputType, file path) tuples. Order follows ``paths``, so
        ALTER statements in later files apply to tables created earlier.

    Raises:
        InputResolutionError: If a path is missing, has an unsupported
            extension, or nothing could be resolved
    """
    if not paths:
        raise InputResolutionError("No input paths given.")

    sources: List[Tuple[InputType, str]] = []
    for path in paths:
        if not os.path.exists(path):
            raise InputResolutionError(f"Input file not found: {path}")

        if os.path.isdir(path):
            found = _expand_directory(path)
            if not found:
                logger.warning("No .json or .sql files found in %s", path)
            sources.extend(found)
        else:
            sources.append((_detect_format(path), path))

    if not sources:
        raise InputResolutionError(
            f"No schema files found in: {', '.join(paths)}"
        )

    logger.debug("Resolved %d schema source(s)", len(sources))
    return sources


def _expand_directory(directory: str) -> List[Tuple[InputType, str]]:
    found = []
    for candidate in sorted(Path(directory).rglob('*')):
        input_type = _SUFFIXES.get(candidate.suffix.lower())
        if input_type and candidate.is_file():
            found.append((input_type, str(candidate)))
    return found


def _detect_format(path: str) -> InputType:
    """Detect format of an input file from its extension.

    Raises:
        InputResolutionError: If the extension is not .json or .sql
    """
    suffix = Path(path).suffix.lower()
    input_type = _SUFFIXES.get(suffix)
    if input_type is None:
        raise InputResolutionError(
            f"Unsupported input file: {path}. Supported: .json, .sql"
        )
    return input_type
