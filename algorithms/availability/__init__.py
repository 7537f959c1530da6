"""
Availability calculation algorithms.

Key components:
- RecurrenceExpansion: Expands weekly recurrence rules into dated occurrences
- ThresholdAggregator: Keeps dates where enough distinct participants are available
- TimeSlotSegmenter: Finds the time ranges of a date where the threshold is met
"""

from .recurrence_materializer import (
    AvailabilityRecord,
    RecurrenceExpansion,
    RecurrenceRule,
    materialize_recurrences,
)
from .slot_segmenter import ParticipantInterval, TimeSlot, TimeSlotSegmenter
from .threshold_aggregator import ThresholdAggregator

__all__ = [
    "AvailabilityRecord",
    "RecurrenceRule",
    "RecurrenceExpansion",
    "materialize_recurrences",
    "ThresholdAggregator",
    "ParticipantInterval",
    "TimeSlot",
    "TimeSlotSegmenter",
]
