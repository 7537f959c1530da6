"""
Feed event model.

A ``CalendarEvent`` is one time slot of one date, numbered and ready to be
rendered. Times are floating: they carry no timezone and are read as local
wall-clock time by the subscriber's calendar application.
"""

from datetime import datetime

from algorithms.availability.slot_segmenter import (
    DAY_END_MINUTE,
    DAY_START_MINUTE,
    FULL_DAY_END,
    FULL_DAY_START,
    parse_time_to_minutes,
)

_UNSET = -1


class ParticipantAvailability:
    """A participant listed on an event, with their own time range"""

    def __init__(self, name, start_time=None, end_time=None, note=""):
        self.name = name
        self.start_time = start_time
        self.end_time = end_time
        self.note = note or ""

    @classmethod
    def from_interval(cls, interval):
        return cls(interval.name, interval.start_time, interval.end_time, interval.note)

    def is_full_day(self):
        """No times at all, or exactly 00:00-23:59"""
        start = self.start_time if self.start_time is not None else FULL_DAY_START
        end = self.end_time if self.end_time is not None else FULL_DAY_END
        return start == FULL_DAY_START and end == FULL_DAY_END

    def time_range(self):
        """Time range as HH:MM-HH:MM, missing bounds shown as the day boundaries"""
        start = self.start_time if self.start_time is not None else FULL_DAY_START
        end = self.end_time if self.end_time is not None else FULL_DAY_END
        return f"{start}-{end}"

    def __repr__(self):
        return f"ParticipantAvailability({self.name!r}, {self.time_range()})"


def _at(day, value):
    """Combine a date and an "HH:MM" string into a naive datetime (None if unparsable)"""
    minutes = parse_time_to_minutes(value, _UNSET)
    if minutes == _UNSET:
        return None
    return datetime(day.year, day.month, day.day, minutes // 60, minutes % 60)


class CalendarEvent:
    """One numbered feed event"""

    def __init__(
        self,
        date,
        calendar_id,
        calendar_name,
        event_number,
        available_count,
        total_participants,
        participants,
        calendar_description="",
        threshold=1,
        timezone="",
        slot_start_time=None,
        slot_end_time=None,
        slot_index=0,
    ):
        self.date = date
        self.calendar_id = calendar_id
        self.calendar_name = calendar_name
        self.calendar_description = calendar_description or ""
        self.event_number = event_number
        self.available_count = available_count
        self.total_participants = total_participants
        self.threshold = threshold
        self.participants = list(participants)
        self.timezone = timezone
        # Slot range ("HH:MM"); when unset, times are derived from participants
        self.slot_start_time = slot_start_time
        self.slot_end_time = slot_end_time
        # Position of the slot within its date, part of the stable UID
        self.slot_index = slot_index

    def has_slot(self):
        return self.slot_start_time is not None and self.slot_end_time is not None

    def event_times(self):
        """
        Floating (start, end) datetimes of the event; either may be None.

        With a slot range, that range is used. Without one, the event spans
        the latest participant start to the earliest participant end.
        """
        if self.has_slot():
            return _at(self.date, self.slot_start_time), _at(self.date, self.slot_end_time)

        latest_start = None
        earliest_end = None
        for participant in self.participants:
            if participant.start_time is not None:
                start = _at(self.date, participant.start_time)
                if start is not None and (latest_start is None or start > latest_start):
                    latest_start = start
            if participant.end_time is not None:
                end = _at(self.date, participant.end_time)
                if end is not None and (earliest_end is None or end < earliest_end):
                    earliest_end = end

        return latest_start, earliest_end

    def is_all_day(self):
        if self.has_slot():
            return (
                parse_time_to_minutes(self.slot_start_time, _UNSET) == DAY_START_MINUTE
                and parse_time_to_minutes(self.slot_end_time, _UNSET) == DAY_END_MINUTE
            )
        return all(participant.is_full_day() for participant in self.participants)

    def __repr__(self):
        return (
            f"CalendarEvent({self.date.isoformat()} #{self.event_number}, "
            f"slot={self.slot_index}, {self.available_count}/{self.total_participants})"
        )
