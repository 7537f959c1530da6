"""
Per-date threshold aggregation.

Merges manual and recurrence-derived availability records, groups them by
date and keeps the dates where enough distinct participants are available.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from .recurrence_materializer import AvailabilityRecord

logger = logging.getLogger(__name__)


def merge_effective_records(
    manual_records: Iterable[AvailabilityRecord],
    recurrence_records: Iterable[AvailabilityRecord],
) -> List[AvailabilityRecord]:
    """
    Union of manual and recurrence records with exactly one record per
    (participant, date).

    Manual records are taken first, so they always win over a recurrence
    record for the same key; otherwise the first record seen wins.
    """
    effective: Dict[tuple, AvailabilityRecord] = {}

    for record in manual_records:
        effective.setdefault(record.key, record)

    for record in recurrence_records:
        effective.setdefault(record.key, record)

    return list(effective.values())


def group_by_date(records: Iterable[AvailabilityRecord]) -> Dict[date, List[AvailabilityRecord]]:
    """Group records by date, each group ordered by participant name."""
    grouped: Dict[date, List[AvailabilityRecord]] = defaultdict(list)
    for record in records:
        grouped[record.date].append(record)

    for day_records in grouped.values():
        day_records.sort(key=lambda r: (r.participant_name, str(r.participant_id)))

    return dict(grouped)


def distinct_participants(records: Iterable[AvailabilityRecord]) -> int:
    """Number of distinct participant identities (not records)."""
    return len({record.participant_id for record in records})


class ThresholdAggregator:
    """
    Keeps the dates where at least ``threshold`` distinct participants are
    available.
    """

    def __init__(self, threshold: int):
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1, got {threshold}")
        self.threshold = threshold

    def aggregate(
        self,
        manual_records: Iterable[AvailabilityRecord],
        recurrence_records: Iterable[AvailabilityRecord] = (),
    ) -> Dict[date, List[AvailabilityRecord]]:
        """
        Merge, group and threshold availability records.

        Args:
            manual_records: One-off availability records
            recurrence_records: Materialized recurrence occurrences

        Returns:
            Mapping of qualifying date to the records contributing to it,
            ordered by date
        """
        effective = merge_effective_records(manual_records, recurrence_records)
        grouped = group_by_date(effective)

        retained = {
            day: grouped[day]
            for day in sorted(grouped)
            if distinct_participants(grouped[day]) >= self.threshold
        }

        logger.debug(
            "Threshold %d retained %d of %d dates",
            self.threshold,
            len(retained),
            len(grouped),
        )
        return retained
