import datetime
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from apps.availabilityapp.models import Availability
from apps.calendarapp.models import Calendar, Participant

User = get_user_model()


class GenerateICSFeedCommandTest(TestCase):
    def setUp(self):
        owner = User.objects.create_user(username="owner", password="secret")
        self.calendar = Calendar.objects.create(owner=owner, name="Book club", timezone="UTC")
        alice = Participant.objects.create(calendar=self.calendar, name="Alice")
        Availability.objects.create(participant=alice, date=datetime.date(2025, 9, 1))

    def test_writes_feed(self):
        out = StringIO()

        call_command("generate_ics_feed", self.calendar.ics_token, "--host", "cli.example.com", stdout=out)

        output = out.getvalue()
        self.assertTrue(output.startswith("BEGIN:VCALENDAR"))
        self.assertIn("DTSTART;VALUE=DATE:20250901", output)
        self.assertIn(f"20250901-quorumcal-{self.calendar.id}@cli.example.com", output.replace("\r\n ", ""))

    def test_unknown_token(self):
        with self.assertRaises(CommandError):
            call_command("generate_ics_feed", "missing", stdout=StringIO())
