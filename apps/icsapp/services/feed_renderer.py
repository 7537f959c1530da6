"""
iCalendar serialization of feed events.

Timed events use floating DTSTART/DTEND values (no TZID, no UTC suffix), all
day events use VALUE=DATE. X-WR-TIMEZONE tells clients which timezone the
calendar was planned in without shipping a VTIMEZONE component.
"""

import logging
from datetime import timedelta

from icalendar import Calendar, Event, vCalAddress, vDuration, vText

logger = logging.getLogger(__name__)

PRODUCT_ID = "-//QuorumCal//QuorumCal Calendar//EN"
REFRESH_INTERVAL = timedelta(hours=1)
DEFAULT_DURATION = timedelta(hours=1)


def generate_uid(event, domain):
    """
    Stable identifier of an event.

    Depends only on the date, the slot position within the date, the
    calendar and the serving domain, so subscribers recognize the same event
    across refreshes.
    """
    date_str = event.date.strftime("%Y%m%d")
    if event.slot_index > 0:
        return f"{date_str}-{event.slot_index}-quorumcal-{event.calendar_id}@{domain}"
    return f"{date_str}-quorumcal-{event.calendar_id}@{domain}"


def build_summary(event):
    return (
        f"{event.calendar_name} #{event.event_number} "
        f"({event.available_count}/{event.total_participants})"
    )


def build_description(event):
    """Participant list (with partial-day ranges and notes), then the calendar description"""
    lines = ["Available participants:"]
    for participant in event.participants:
        line = f"- {participant.name}"
        if not participant.is_full_day():
            line += f" ({participant.time_range()})"
        if participant.note:
            line += f": {participant.note}"
        lines.append(line)

    description = "\n".join(lines) + "\n"
    if event.calendar_description:
        description += "\n---\n" + event.calendar_description
    return description


class FeedRenderer:
    """Builds the iCalendar document of a calendar feed"""

    def __init__(self, noreply_email):
        self.noreply_email = noreply_email

    def render(self, calendar, events, domain, now):
        """
        Serialize ``events`` into an iCalendar document.

        Args:
            calendar: CalendarConfig of the feed
            events: Numbered CalendarEvent list, in feed order
            domain: Serving domain, embedded in every UID
            now: Aware datetime used as DTSTAMP

        Returns:
            bytes: The document, CRLF line endings
        """
        cal = Calendar()
        cal.add("version", "2.0")
        cal.add("prodid", PRODUCT_ID)
        cal.add("method", "PUBLISH")
        cal.add("name", calendar.name)
        cal.add("x-wr-calname", calendar.name)
        cal.add("x-wr-timezone", calendar.timezone)
        cal.add("refresh-interval", vDuration(REFRESH_INTERVAL), parameters={"VALUE": "DURATION"})

        for event in events:
            cal.add_component(self.build_event(event, domain, now))

        logger.debug("Rendered %d events for calendar %s", len(events), calendar.calendar_id)
        return cal.to_ical()

    def build_event(self, event, domain, now):
        vevent = Event()
        vevent.add("uid", generate_uid(event, domain))
        vevent.add("dtstamp", now)
        vevent.add("status", "CONFIRMED")
        vevent.add("summary", build_summary(event))
        vevent.add("description", build_description(event))

        for participant in event.participants:
            vevent.add("attendee", self.build_attendee(participant), encode=0)

        self.add_times(vevent, event)
        return vevent

    def build_attendee(self, participant):
        attendee = vCalAddress(f"MAILTO:{self.noreply_email}")
        attendee.params["CN"] = vText(participant.name)
        attendee.params["ROLE"] = vText("REQ-PARTICIPANT")
        attendee.params["PARTSTAT"] = vText("ACCEPTED")
        attendee.params["CUTYPE"] = vText("INDIVIDUAL")
        return attendee

    @staticmethod
    def add_times(vevent, event):
        next_day = event.date + timedelta(days=1)

        if event.is_all_day():
            vevent.add("dtstart", event.date)
            vevent.add("dtend", next_day)
            return

        start, end = event.event_times()

        if start is not None:
            vevent.add("dtstart", start)
        else:
            vevent.add("dtstart", event.date)

        if end is not None:
            vevent.add("dtend", end)
        elif start is not None:
            vevent.add("dtend", start + DEFAULT_DURATION)
        else:
            vevent.add("dtend", next_day)
