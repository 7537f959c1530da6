"""
Time-slot segmentation.

For a single date, finds the continuous time ranges where at least
``threshold`` participants are available at once.

The day is cut at every participant start/end boundary (plus 00:00 and
23:59). Each resulting segment is covered by the participants whose interval
fully contains it. Consecutive segments that meet the threshold are merged
into one slot; the slot lists every participant that covers any part of it.
"""

import logging
from datetime import datetime, time
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DAY_START_MINUTE = 0
DAY_END_MINUTE = 23 * 60 + 59  # 1439, "23:59"

FULL_DAY_START = "00:00"
FULL_DAY_END = "23:59"

TimeValue = Union[str, time, None]


def minutes_to_time_string(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time_to_minutes(value: TimeValue, default: int) -> int:
    """
    Convert a time-of-day to minutes since midnight.

    Accepts ``datetime.time`` objects and "HH:MM" / "HH:MM:SS" strings.
    ``None`` and malformed values fall back to ``default`` so that one corrupt
    row degrades to the all-day bound instead of breaking the whole day.
    """
    if value is None:
        return default

    if isinstance(value, time):
        return value.hour * 60 + value.minute

    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            parsed = datetime.strptime(str(value).strip(), fmt)
        except ValueError:
            continue
        return parsed.hour * 60 + parsed.minute

    logger.warning("Malformed time value %r, using default %s", value, default)
    return default


class ParticipantInterval:
    """A participant's availability window on one date."""

    def __init__(
        self,
        name: str,
        start_time: TimeValue = None,
        end_time: TimeValue = None,
        note: str = "",
        participant_id=None,
    ):
        self.name = name
        self.start_time = start_time
        self.end_time = end_time
        self.note = note or ""
        self.participant_id = participant_id

    @property
    def identity(self):
        return self.participant_id if self.participant_id is not None else self.name

    def bounds(self) -> Tuple[int, int]:
        """(start, end) in minutes; missing values denote the day boundaries."""
        return (
            parse_time_to_minutes(self.start_time, DAY_START_MINUTE),
            parse_time_to_minutes(self.end_time, DAY_END_MINUTE),
        )

    def covers(self, start: int, end: int) -> bool:
        """True if this interval fully contains [start, end]."""
        own_start, own_end = self.bounds()
        return own_start <= start and own_end >= end

    def is_full_day(self) -> bool:
        return self.bounds() == (DAY_START_MINUTE, DAY_END_MINUTE)

    def __repr__(self) -> str:
        return f"ParticipantInterval({self.name!r}, {self.start_time}-{self.end_time})"


class Segment:
    """The span between two consecutive boundaries and who covers all of it."""

    def __init__(self, start: int, end: int, participants: List[ParticipantInterval]):
        self.start = start
        self.end = end
        self.participants = participants

    @property
    def count(self) -> int:
        return len(self.participants)

    def __repr__(self) -> str:
        return (
            f"Segment({minutes_to_time_string(self.start)}-"
            f"{minutes_to_time_string(self.end)}, count={self.count})"
        )


class TimeSlot:
    """A maximal continuous range on one date where the threshold is met."""

    def __init__(
        self,
        start: int,
        end: int,
        participants: Optional[List[ParticipantInterval]] = None,
        index: int = 0,
    ):
        self.start = start
        self.end = end
        self.participants = list(participants or [])
        # Position among the slots emitted for the date, before duration filtering
        self.index = index

    @property
    def start_time(self) -> str:
        return minutes_to_time_string(self.start)

    @property
    def end_time(self) -> str:
        return minutes_to_time_string(self.end)

    def is_all_day(self) -> bool:
        """Exactly 00:00-23:59, not merely long."""
        return self.start == DAY_START_MINUTE and self.end == DAY_END_MINUTE

    def duration_hours(self) -> float:
        if self.is_all_day():
            return 24.0
        return (self.end - self.start) / 60.0

    def add_participants(self, participants: Iterable[ParticipantInterval]) -> None:
        """Union ``participants`` into the slot, keeping first-seen order."""
        known = {p.identity for p in self.participants}
        for participant in participants:
            if participant.identity not in known:
                known.add(participant.identity)
                self.participants.append(participant)

    def __repr__(self) -> str:
        return (
            f"TimeSlot({self.start_time}-{self.end_time}, "
            f"participants={[p.name for p in self.participants]})"
        )


class SlotState(Enum):
    """States of the merge walk"""

    OUTSIDE = "outside"
    INSIDE = "inside"


class SlotAccumulator:
    """
    Two-state accumulator driving the segment merge walk.

    OUTSIDE + qualifying segment     -> open a slot, go INSIDE
    INSIDE  + qualifying segment     -> extend the slot's end, union participants
    INSIDE  + non-qualifying segment -> close (emit) the slot, go OUTSIDE
    OUTSIDE + non-qualifying segment -> nothing
    """

    def __init__(self, threshold: int):
        self.threshold = threshold
        self.state = SlotState.OUTSIDE
        self.current: Optional[TimeSlot] = None
        self.slots: List[TimeSlot] = []

    def qualifies(self, segment: Segment) -> bool:
        return segment.count >= self.threshold

    def feed(self, segment: Segment) -> None:
        if self.qualifies(segment):
            if self.state is SlotState.OUTSIDE:
                self._open(segment)
            else:
                self._extend(segment)
        elif self.state is SlotState.INSIDE:
            self._close()

    def finish(self) -> List[TimeSlot]:
        """Close any open slot (end of day) and return all emitted slots."""
        if self.state is SlotState.INSIDE:
            self._close()
        return self.slots

    def _open(self, segment: Segment) -> None:
        self.current = TimeSlot(
            segment.start, segment.end, segment.participants, index=len(self.slots)
        )
        self.state = SlotState.INSIDE

    def _extend(self, segment: Segment) -> None:
        self.current.end = segment.end
        self.current.add_participants(segment.participants)

    def _close(self) -> None:
        self.slots.append(self.current)
        self.current = None
        self.state = SlotState.OUTSIDE


class TimeSlotSegmenter:
    """
    Computes threshold-meeting time slots for one date.

    Args:
        threshold: Minimum number of simultaneous participants
        min_duration_hours: Slots shorter than this are discarded (0 keeps all)
    """

    def __init__(self, threshold: int, min_duration_hours: float = 0):
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1, got {threshold}")
        self.threshold = threshold
        self.min_duration_hours = min_duration_hours

    @staticmethod
    def boundaries(intervals: Iterable[ParticipantInterval]) -> List[int]:
        """Sorted distinct boundary minutes, always including 00:00 and 23:59."""
        points = {DAY_START_MINUTE, DAY_END_MINUTE}
        for interval in intervals:
            points.update(interval.bounds())
        return sorted(points)

    def segments(self, intervals: List[ParticipantInterval]) -> List[Segment]:
        points = self.boundaries(intervals)
        return [
            Segment(start, end, [p for p in intervals if p.covers(start, end)])
            for start, end in zip(points, points[1:])
        ]

    def merge(self, segments: Iterable[Segment]) -> List[TimeSlot]:
        """Merge consecutive qualifying segments into slots."""
        accumulator = SlotAccumulator(self.threshold)
        for segment in segments:
            accumulator.feed(segment)
        return accumulator.finish()

    def compute_slots(self, intervals: Iterable[ParticipantInterval]) -> List[TimeSlot]:
        """
        Full segmentation for one date: boundaries, coverage, merge and the
        minimum-duration filter (all-day slots always pass it).

        A discarded slot keeps its place in the numbering of ``TimeSlot.index``
        so the remaining slots have the same index whatever the minimum
        duration is.
        """
        intervals = list(intervals)
        if not intervals:
            return []

        slots = self.merge(self.segments(intervals))

        if self.min_duration_hours > 0:
            slots = [
                s
                for s in slots
                if s.is_all_day() or s.duration_hours() >= self.min_duration_hours
            ]

        return slots

    def max_coverage(self, intervals: Iterable[ParticipantInterval]) -> int:
        """Highest number of participants available at the same time."""
        intervals = list(intervals)
        if not intervals:
            return 0
        return max(segment.count for segment in self.segments(intervals))


def compute_time_slots(
    intervals: Iterable[ParticipantInterval], threshold: int, min_duration_hours: float = 0
) -> List[TimeSlot]:
    """Shortcut for ``TimeSlotSegmenter(threshold, min_duration_hours).compute_slots()``."""
    return TimeSlotSegmenter(threshold, min_duration_hours).compute_slots(intervals)
