"""
Recurring availability expansion.

This module turns weekly recurrence rules ("every Tuesday from 18:00 to 22:00,
from March until June") into concrete per-date availability records over a
bounded date window. Manual (one-off) entries always take precedence: a
recurrence never produces an occurrence for a (participant, date) pair that
already has a manual record.
"""

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .slot_segmenter import ParticipantInterval

logger = logging.getLogger(__name__)

SOURCE_MANUAL = "manual"
SOURCE_RECURRENCE = "recurrence"


def to_schema_weekday(day: date) -> int:
    """Convert Python's weekday (0 = Monday) to our schema (0 = Sunday)."""
    return (day.weekday() + 1) % 7


def add_one_year(day: date) -> date:
    """Same day next year; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day.replace(year=day.year + 1, day=28)


class AvailabilityRecord:
    """
    One participant's availability on one date.

    Start and end are "HH:MM" strings; ``None`` on either side means the day
    boundary on that side, and ``None`` on both means "all day".
    """

    def __init__(
        self,
        participant_id,
        participant_name: str,
        day: date,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        note: str = "",
        source: str = SOURCE_MANUAL,
    ):
        self.participant_id = participant_id
        self.participant_name = participant_name
        self.date = day
        self.start_time = start_time
        self.end_time = end_time
        self.note = note or ""
        self.source = source

    @property
    def key(self) -> Tuple[object, date]:
        return (self.participant_id, self.date)

    def to_interval(self) -> ParticipantInterval:
        """The record as an interval for time-slot segmentation"""
        return ParticipantInterval(
            name=self.participant_name,
            start_time=self.start_time,
            end_time=self.end_time,
            note=self.note,
            participant_id=self.participant_id,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, AvailabilityRecord):
            return NotImplemented
        return (
            self.key == other.key
            and self.participant_name == other.participant_name
            and self.start_time == other.start_time
            and self.end_time == other.end_time
            and self.note == other.note
            and self.source == other.source
        )

    def __repr__(self) -> str:
        return (
            f"AvailabilityRecord({self.participant_name!r}, {self.date.isoformat()}, "
            f"{self.start_time}-{self.end_time}, source={self.source})"
        )


class RecurrenceRule:
    """A weekly availability pattern with its excluded dates."""

    def __init__(
        self,
        recurrence_id,
        participant_id,
        participant_name: str,
        day_of_week: int,
        start_date: date,
        end_date: Optional[date] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        note: str = "",
        excluded_dates: Optional[Iterable[date]] = None,
    ):
        if not 0 <= day_of_week <= 6:
            raise ValueError(f"day_of_week must be between 0 and 6, got {day_of_week}")

        self.recurrence_id = recurrence_id
        self.participant_id = participant_id
        self.participant_name = participant_name
        self.day_of_week = day_of_week
        self.start_date = start_date
        self.end_date = end_date
        self.start_time = start_time
        self.end_time = end_time
        self.note = note or ""
        self.excluded_dates = frozenset(excluded_dates or ())

    def occurs_on(self, day: date) -> bool:
        """True if the rule produces an occurrence on ``day`` (ignoring manual entries)."""
        if to_schema_weekday(day) != self.day_of_week:
            return False
        if day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return day not in self.excluded_dates

    def occurrence(self, day: date) -> AvailabilityRecord:
        return AvailabilityRecord(
            participant_id=self.participant_id,
            participant_name=self.participant_name,
            day=day,
            start_time=self.start_time,
            end_time=self.end_time,
            note=self.note,
            source=SOURCE_RECURRENCE,
        )

    def __repr__(self) -> str:
        return (
            f"RecurrenceRule({self.participant_name!r}, dow={self.day_of_week}, "
            f"{self.start_date}..{self.end_date or 'open'})"
        )


def materialization_window(
    rules: Iterable[RecurrenceRule], today: date
) -> Optional[Tuple[date, date]]:
    """
    Compute the date window recurrences are expanded over.

    The window runs from the earliest rule start date to the latest rule end
    date; an open-ended rule contributes ``today`` plus one year. Returns
    ``None`` when there are no rules.
    """
    rules = list(rules)
    if not rules:
        return None

    horizon = add_one_year(today)
    start = min(rule.start_date for rule in rules)
    end = max(rule.end_date if rule.end_date is not None else horizon for rule in rules)
    return start, end


class RecurrenceExpansion:
    """
    Lazy, finite and restartable expansion of recurrence rules.

    Iterating yields ``(date, AvailabilityRecord)`` pairs in date order over
    the inclusive ``window``. Each iteration starts from scratch, so the same
    expansion object can be consumed several times with identical results.

    Guarantees:
    - no occurrence for a (participant, date) listed in ``manual_keys``
    - at most one occurrence per (participant, date); when a participant has
      several rules on the same weekday, the rule with the earliest start date
      wins
    """

    def __init__(
        self,
        rules: Iterable[RecurrenceRule],
        window: Optional[Tuple[date, date]],
        manual_keys: Optional[Iterable[Tuple[object, date]]] = None,
    ):
        self.window = window
        self.manual_keys: Set[Tuple[object, date]] = set(manual_keys or ())

        # Deterministic rule order so that duplicate resolution is stable
        ordered = sorted(
            rules, key=lambda rule: (rule.start_date, str(rule.recurrence_id))
        )
        self._rules_by_weekday: Dict[int, List[RecurrenceRule]] = {}
        for rule in ordered:
            self._rules_by_weekday.setdefault(rule.day_of_week, []).append(rule)

    def __iter__(self) -> Iterator[Tuple[date, AvailabilityRecord]]:
        if self.window is None:
            return

        start, end = self.window
        emitted: Set[Tuple[object, date]] = set()
        day = start
        while day <= end:
            for rule in self._rules_by_weekday.get(to_schema_weekday(day), ()):
                if not rule.occurs_on(day):
                    continue

                key = (rule.participant_id, day)
                if key in self.manual_keys or key in emitted:
                    continue

                emitted.add(key)
                yield day, rule.occurrence(day)

            day += timedelta(days=1)

    def records(self) -> List[AvailabilityRecord]:
        """Materialize the whole expansion as a list."""
        return [record for _, record in self]


def materialize_recurrences(
    rules: Iterable[RecurrenceRule],
    manual_records: Iterable[AvailabilityRecord],
    today: date,
    window: Optional[Tuple[date, date]] = None,
) -> List[AvailabilityRecord]:
    """
    Expand ``rules`` into occurrences, suppressing dates covered by manual records.

    Args:
        rules: Recurrence rules of one calendar
        manual_records: Manual availability records of the same calendar
        today: Reference date for the open-ended horizon
        window: Optional explicit window overriding the computed one

    Returns:
        List of recurrence-derived availability records in date order
    """
    rules = list(rules)
    if window is None:
        window = materialization_window(rules, today)

    manual_keys = {record.key for record in manual_records}
    occurrences = RecurrenceExpansion(rules, window, manual_keys).records()

    logger.debug(
        "Materialized %d occurrences from %d recurrence rules over %s",
        len(occurrences),
        len(rules),
        window,
    )
    return occurrences
