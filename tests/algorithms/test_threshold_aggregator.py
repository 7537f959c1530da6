from datetime import date

from django.test import SimpleTestCase

from algorithms.availability.recurrence_materializer import (
    SOURCE_MANUAL,
    SOURCE_RECURRENCE,
    AvailabilityRecord,
)
from algorithms.availability.threshold_aggregator import (
    ThresholdAggregator,
    merge_effective_records,
)

DAY_1 = date(2025, 5, 1)
DAY_2 = date(2025, 5, 2)


def manual(pid, name, day, start=None, end=None):
    return AvailabilityRecord(pid, name, day, start, end, source=SOURCE_MANUAL)


def recurring(pid, name, day, start=None, end=None):
    return AvailabilityRecord(pid, name, day, start, end, source=SOURCE_RECURRENCE)


class ThresholdAggregatorTest(SimpleTestCase):
    """Test per-date aggregation"""

    def test_merge_keeps_manual_over_recurrence(self):
        merged = merge_effective_records(
            [manual(1, "Alice", DAY_1, "09:00", "10:00")],
            [recurring(1, "Alice", DAY_1, "18:00", "22:00"), recurring(1, "Alice", DAY_2)],
        )

        by_key = {record.key: record for record in merged}
        self.assertEqual(len(merged), 2)
        self.assertEqual(by_key[(1, DAY_1)].source, SOURCE_MANUAL)
        self.assertEqual(by_key[(1, DAY_2)].source, SOURCE_RECURRENCE)

    def test_threshold_counts_distinct_participants(self):
        aggregator = ThresholdAggregator(threshold=2)

        result = aggregator.aggregate(
            [manual(1, "Alice", DAY_1), manual(1, "Alice", DAY_2)],
            [recurring(1, "Alice", DAY_1), recurring(2, "Bob", DAY_2)],
        )

        self.assertEqual(list(result), [DAY_2])
        self.assertEqual([r.participant_name for r in result[DAY_2]], ["Alice", "Bob"])

    def test_dates_sorted_and_entries_by_name(self):
        result = ThresholdAggregator(threshold=1).aggregate(
            [manual(3, "Chloe", DAY_2), manual(1, "Zoe", DAY_1), manual(2, "Adam", DAY_1)]
        )

        self.assertEqual(list(result), [DAY_1, DAY_2])
        self.assertEqual([r.participant_name for r in result[DAY_1]], ["Adam", "Zoe"])

    def test_no_records(self):
        self.assertEqual(ThresholdAggregator(threshold=1).aggregate([]), {})

    def test_invalid_threshold(self):
        with self.assertRaises(ValueError):
            ThresholdAggregator(threshold=0)
