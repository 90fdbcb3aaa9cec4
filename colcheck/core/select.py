"""Selection of the columns taking part in a contested name."""
from typing import Dict, Iterable, List

from colcheck.core.aggregate import aggregate
from colcheck.models.columns import ColumnRecord, NameGroup, Offense


def select_offenses(
    records: Iterable[ColumnRecord],
    groups: Dict[str, NameGroup]
) -> List[Offense]:
    """Pair every record of a contested name with that name's statistics.

    Records that use the dominant signature are emitted too; filter on
    ``Offense.is_minority`` to keep only the deviating columns.

    Args:
        records: All column occurrences, in scan order
        groups: Contested name groups as returned by ``aggregate``

    Returns:
        One Offense per matching record, in input order
    """
    offenses = []
    for record in records:
        if not record.has_type:
            continue
        group = groups.get(record.key.column_name)
        if group is None:
            continue
        bucket = group.bucket_for(record.signature)
        if bucket is None:
            continue
        offenses.append(Offense(
            table=record.table,
            column=record.column,
            table_name=record.table_name,
            column_name=record.column_name,
            this_signature=record.signature,
            definition_count=group.definition_count,
            occurrence_of_this_signature=bucket.count,
            total_occurrences=group.total_occurrences,
            dominant_count=group.dominant_count,
            dominant_signature=group.dominant_signature,
        ))
    return offenses


def find_mismatched_columns(records: Iterable[ColumnRecord]) -> List[Offense]:
    """Run aggregation and selection over one schema snapshot."""
    records = list(records)
    return select_offenses(records, aggregate(records))
