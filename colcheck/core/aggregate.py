"""Grouping of column occurrences by name and type signature."""
import logging
from typing import Dict, Iterable, List

from colcheck.models.columns import ColumnRecord, NameGroup, SignatureBucket, SignatureKey

logger = logging.getLogger(__name__)


def group_by_signature(records: Iterable[ColumnRecord]) -> Dict[SignatureKey, SignatureBucket]:
    """Group typed records by case-folded (column name, signature).

    Records without a base type are dropped. The first signature spelling
    seen for a key is kept for display.
    """
    buckets: Dict[SignatureKey, SignatureBucket] = {}
    skipped = 0
    for record in records:
        if not record.has_type:
            skipped += 1
            continue
        key = record.key
        bucket = buckets.get(key)
        if bucket is None:
            bucket = SignatureBucket(signature=record.signature)
            buckets[key] = bucket
        bucket.records.append(record)

    if skipped:
        logger.debug("Skipped %d column(s) without a resolvable type", skipped)
    return buckets


def build_name_groups(records: Iterable[ColumnRecord]) -> Dict[str, NameGroup]:
    """Compute per-name statistics for every column name, contested or not."""
    by_name: Dict[str, List[SignatureBucket]] = {}
    display_names: Dict[str, str] = {}
    for key, bucket in group_by_signature(records).items():
        by_name.setdefault(key.column_name, []).append(bucket)
        display_names.setdefault(key.column_name, bucket.records[0].column_name)

    groups = {}
    for name, buckets in by_name.items():
        # Highest count wins; equal counts fall back to the smallest signature
        ranked = sorted(buckets, key=lambda b: (-b.count, b.signature.lower()))
        dominant = ranked[0]
        groups[name] = NameGroup(
            column_name=display_names[name],
            buckets=buckets,
            definition_count=len(buckets),
            total_occurrences=sum(b.count for b in buckets),
            dominant_signature=dominant.signature,
            dominant_count=dominant.count,
        )
    return groups


def aggregate(records: Iterable[ColumnRecord]) -> Dict[str, NameGroup]:
    """Return the contested name groups keyed by lower-cased column name.

    A name is contested when it has more than one distinct signature and the
    dominant signature does not account for every occurrence.

    Args:
        records: Column occurrences from the whole schema

    Returns:
        Mapping of lower-cased column name to its NameGroup
    """
    groups = build_name_groups(records)
    contested = {
        name: group for name, group in groups.items()
        if group.definition_count != 1
        and group.dominant_count != group.total_occurrences
    }
    logger.debug("%d of %d column name(s) are contested", len(contested), len(groups))
    return contested
