import datetime
import uuid

from django.test import SimpleTestCase
from icalendar import Calendar

from apps.calendarapp.services.calendar_service import CalendarConfig
from apps.icsapp.services.calendar_event import CalendarEvent, ParticipantAvailability
from apps.icsapp.services.feed_renderer import (
    FeedRenderer,
    build_description,
    generate_uid,
)

CALENDAR_ID = uuid.UUID("6f1c1f5e-0d0a-4a53-9a43-3c9a1f1b2f70")
NOW = datetime.datetime(2025, 1, 15, 8, 30, tzinfo=datetime.timezone.utc)


def make_config(description="Bring your own board"):
    return CalendarConfig(
        calendar_id=CALENDAR_ID,
        name="Board games",
        description=description,
        threshold=2,
        allowed_weekdays=range(7),
        min_duration_hours=0,
        timezone="Europe/Paris",
        holidays_policy="ignore",
        allow_holiday_eves=False,
        owner_id=1,
        total_participants=5,
    )


def make_event(day, participants, slot=("18:00", "22:00"), number=1, index=0, description=""):
    return CalendarEvent(
        date=day,
        calendar_id=CALENDAR_ID,
        calendar_name="Board games",
        calendar_description=description,
        event_number=number,
        available_count=len(participants),
        total_participants=5,
        participants=participants,
        slot_start_time=slot[0] if slot else None,
        slot_end_time=slot[1] if slot else None,
        slot_index=index,
    )


class FeedRendererHelpersTest(SimpleTestCase):
    def test_uid_without_and_with_slot_index(self):
        day = datetime.date(2025, 3, 4)

        self.assertEqual(
            generate_uid(make_event(day, []), "cal.example.com"),
            f"20250304-quorumcal-{CALENDAR_ID}@cal.example.com",
        )
        self.assertEqual(
            generate_uid(make_event(day, [], index=2), "cal.example.com"),
            f"20250304-2-quorumcal-{CALENDAR_ID}@cal.example.com",
        )

    def test_description(self):
        event = make_event(
            datetime.date(2025, 3, 4),
            [
                ParticipantAvailability("Alice"),
                ParticipantAvailability("Bob", "18:00", None, note="bringing snacks"),
                ParticipantAvailability("Chloe", "00:00", "23:59", note="any time"),
            ],
            description="Bring your own board",
        )

        self.assertEqual(
            build_description(event),
            "Available participants:\n"
            "- Alice\n"
            "- Bob (18:00-23:59): bringing snacks\n"
            "- Chloe: any time\n"
            "\n---\nBring your own board",
        )

    def test_description_without_calendar_description(self):
        event = make_event(datetime.date(2025, 3, 4), [ParticipantAvailability("Alice")])
        self.assertEqual(build_description(event), "Available participants:\n- Alice\n")


class FeedRendererTest(SimpleTestCase):
    """Test the rendered iCalendar document"""

    def setUp(self):
        self.renderer = FeedRenderer("noreply@quorumcal.test")
        self.participants = [
            ParticipantAvailability("Alice", "17:00", "22:00"),
            ParticipantAvailability("Bob"),
        ]

    def render(self, events):
        return self.renderer.render(make_config(), events, "cal.example.com", NOW)

    def test_calendar_properties(self):
        body = self.render([])
        unfolded = body.decode("utf-8").replace("\r\n ", "")

        self.assertIn("\r\n", unfolded)
        self.assertNotIn("\n", unfolded.replace("\r\n", ""))
        self.assertIn("PRODID:-//QuorumCal//QuorumCal Calendar//EN\r\n", unfolded)
        self.assertIn("METHOD:PUBLISH\r\n", unfolded)
        self.assertIn("VERSION:2.0\r\n", unfolded)
        self.assertIn("NAME:Board games\r\n", unfolded)
        self.assertIn("X-WR-CALNAME:Board games\r\n", unfolded)
        self.assertIn("X-WR-TIMEZONE:Europe/Paris\r\n", unfolded)
        self.assertIn("REFRESH-INTERVAL;VALUE=DURATION:PT1H\r\n", unfolded)
        self.assertNotIn("BEGIN:VEVENT", unfolded)

    def test_timed_event(self):
        event = make_event(datetime.date(2025, 3, 4), self.participants, number=3, index=1)

        body = self.render([event])
        unfolded = body.decode("utf-8").replace("\r\n ", "")
        vevent = Calendar.from_ical(body).walk("VEVENT")[0]

        self.assertIn("DTSTART:20250304T180000\r\n", unfolded)
        self.assertIn("DTEND:20250304T220000\r\n", unfolded)
        self.assertIn("DTSTAMP:20250115T083000Z\r\n", unfolded)
        self.assertEqual(str(vevent["uid"]), f"20250304-1-quorumcal-{CALENDAR_ID}@cal.example.com")
        self.assertEqual(str(vevent["summary"]), "Board games #3 (2/5)")
        self.assertEqual(str(vevent["status"]), "CONFIRMED")
        self.assertEqual(
            str(vevent["description"]),
            "Available participants:\n- Alice (17:00-22:00)\n- Bob\n",
        )

    def test_attendees(self):
        event = make_event(datetime.date(2025, 3, 4), self.participants)

        vevent = Calendar.from_ical(self.render([event])).walk("VEVENT")[0]
        attendees = vevent["attendee"]

        self.assertEqual(len(attendees), 2)
        self.assertEqual([str(a.params["CN"]) for a in attendees], ["Alice", "Bob"])
        for attendee in attendees:
            self.assertEqual(str(attendee), "MAILTO:noreply@quorumcal.test")
            self.assertEqual(attendee.params["ROLE"], "REQ-PARTICIPANT")
            self.assertEqual(attendee.params["PARTSTAT"], "ACCEPTED")
            self.assertEqual(attendee.params["CUTYPE"], "INDIVIDUAL")

    def test_all_day_event(self):
        event = make_event(
            datetime.date(2025, 12, 31), [ParticipantAvailability("Bob")], slot=("00:00", "23:59")
        )

        unfolded = self.render([event]).decode("utf-8").replace("\r\n ", "")

        self.assertIn("DTSTART;VALUE=DATE:20251231\r\n", unfolded)
        self.assertIn("DTEND;VALUE=DATE:20260101\r\n", unfolded)

    def test_missing_end_defaults_to_one_hour(self):
        event = make_event(
            datetime.date(2025, 3, 4),
            [ParticipantAvailability("Alice", "09:00", None)],
            slot=None,
        )

        unfolded = self.render([event]).decode("utf-8").replace("\r\n ", "")

        self.assertIn("DTSTART:20250304T090000\r\n", unfolded)
        self.assertIn("DTEND:20250304T100000\r\n", unfolded)

    def test_rendering_is_deterministic(self):
        events = [
            make_event(datetime.date(2025, 3, 4), self.participants, number=1),
            make_event(datetime.date(2025, 3, 5), self.participants, number=2),
        ]
        self.assertEqual(self.render(events), self.render(events))
