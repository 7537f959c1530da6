import datetime

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.availabilityapp.models import Availability
from apps.calendarapp.models import Calendar, Participant

User = get_user_model()


class RangeSummaryViewTest(APITestCase):
    """Test the range summary endpoint"""

    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="secret")
        self.calendar = Calendar.objects.create(owner=self.owner, name="Hiking")
        alice = Participant.objects.create(calendar=self.calendar, name="Alice")
        Availability.objects.create(
            participant=alice,
            date=datetime.date(2025, 5, 10),
            start_time=datetime.time(8, 0),
            end_time=datetime.time(12, 0),
            note="morning only",
        )
        self.url = reverse(
            "availabilityapp:range-summary",
            kwargs={"public_token": self.calendar.public_token},
        )

    def test_range_summary(self):
        response = self.client.get(self.url, {"start": "2025-05-01", "end": "2025-05-31"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        item = response.data[0]
        self.assertEqual(item["date"], "2025-05-10")
        self.assertEqual(item["total_count"], 1)
        participant = item["participants"][0]
        self.assertEqual(participant["participant_name"], "Alice")
        self.assertEqual(participant["start_time"], "08:00")
        self.assertEqual(participant["end_time"], "12:00")
        self.assertEqual(participant["note"], "morning only")

    def test_missing_or_invalid_parameters(self):
        for params in (
            {},
            {"start": "2025-05-01"},
            {"start": "not-a-date", "end": "2025-05-31"},
            {"start": "2025-05-31", "end": "2025-05-01"},
            {"start": "2025-01-01", "end": "2026-01-02"},
        ):
            response = self.client.get(self.url, params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, params)

    def test_unknown_token(self):
        url = reverse("availabilityapp:range-summary", kwargs={"public_token": "f" * 64})
        response = self.client.get(url, {"start": "2025-05-01", "end": "2025-05-31"})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "CalendarNotFoundError")

    def test_ics_token_is_not_a_public_token(self):
        url = reverse(
            "availabilityapp:range-summary", kwargs={"public_token": self.calendar.ics_token}
        )
        response = self.client.get(url, {"start": "2025-05-01", "end": "2025-05-31"})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
