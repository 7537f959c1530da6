import datetime
from unittest import mock

from django.contrib.auth import get_user_model
from django.db.utils import OperationalError
from django.test import TestCase, override_settings

from apps.calendarapp.models import Calendar, Participant
from apps.calendarapp.services.calendar_service import CalendarService
from apps.calendarapp.services.quota_service import QuotaService
from core.exceptions import CalendarNotFoundError, UpstreamReadError

User = get_user_model()


class CalendarServiceTest(TestCase):
    """Test the CalendarService"""

    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="secret")
        self.calendar = Calendar.objects.create(
            owner=self.owner,
            name="Climbing",
            description="Weekly climbing sessions",
            threshold=2,
            allowed_weekdays=[1, 3, 5],
            min_duration_hours=2,
            timezone="Europe/Paris",
            holidays_policy="block",
            allow_holiday_eves=True,
            start_date=datetime.date(2025, 1, 1),
            end_date=datetime.date(2025, 12, 31),
        )
        for name in ("Alice", "Bob", "Chloe"):
            Participant.objects.create(calendar=self.calendar, name=name)

    def test_get_by_ics_token(self):
        """The configuration carries every calendar setting and the participant count"""
        config = CalendarService.get_by_ics_token(self.calendar.ics_token)

        self.assertEqual(config.calendar_id, self.calendar.id)
        self.assertEqual(config.name, "Climbing")
        self.assertEqual(config.description, "Weekly climbing sessions")
        self.assertEqual(config.threshold, 2)
        self.assertEqual(config.allowed_weekdays, [1, 3, 5])
        self.assertEqual(config.min_duration_hours, 2)
        self.assertEqual(config.timezone, "Europe/Paris")
        self.assertEqual(config.holidays_policy, "block")
        self.assertTrue(config.allow_holiday_eves)
        self.assertEqual(config.owner_id, self.owner.id)
        self.assertEqual(config.start_date, datetime.date(2025, 1, 1))
        self.assertEqual(config.end_date, datetime.date(2025, 12, 31))
        self.assertEqual(config.total_participants, 3)

    def test_get_by_public_token(self):
        config = CalendarService.get_by_public_token(self.calendar.public_token)
        self.assertEqual(config.calendar_id, self.calendar.id)

    def test_tokens_are_not_interchangeable(self):
        with self.assertRaises(CalendarNotFoundError):
            CalendarService.get_by_ics_token(self.calendar.public_token)

    def test_unknown_or_empty_token(self):
        for token in ("0" * 64, ""):
            with self.assertRaises(CalendarNotFoundError):
                CalendarService.get_by_ics_token(token)

    def test_database_error_becomes_upstream_error(self):
        with mock.patch.object(
            Calendar.objects, "annotate", side_effect=OperationalError("connection lost")
        ):
            with self.assertRaises(UpstreamReadError):
                CalendarService.get_by_ics_token(self.calendar.ics_token)

    def test_contains_date(self):
        config = CalendarService.get_by_ics_token(self.calendar.ics_token)
        self.assertTrue(config.contains_date(datetime.date(2025, 1, 1)))
        self.assertTrue(config.contains_date(datetime.date(2025, 12, 31)))
        self.assertFalse(config.contains_date(datetime.date(2024, 12, 31)))
        self.assertFalse(config.contains_date(datetime.date(2026, 1, 1)))


class QuotaServiceTest(TestCase):
    """Test the QuotaService"""

    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="secret")
        for index in range(3):
            Calendar.objects.create(owner=self.owner, name=f"Calendar {index}")

    @override_settings(QUORUMCAL={"CALENDAR_LIMIT_PER_USER": 0})
    def test_zero_limit_is_unlimited(self):
        self.assertFalse(QuotaService.is_over_quota(self.owner.id))

    @override_settings(QUORUMCAL={"CALENDAR_LIMIT_PER_USER": 3})
    def test_at_limit_is_not_over_quota(self):
        self.assertFalse(QuotaService.is_over_quota(self.owner.id))

    @override_settings(QUORUMCAL={"CALENDAR_LIMIT_PER_USER": 2})
    def test_above_limit_is_over_quota(self):
        self.assertTrue(QuotaService.is_over_quota(self.owner.id))

    @override_settings(QUORUMCAL={"CALENDAR_LIMIT_PER_USER": 2})
    def test_failing_check_does_not_block(self):
        with mock.patch.object(
            Calendar.objects, "filter", side_effect=OperationalError("connection lost")
        ):
            self.assertFalse(QuotaService.is_over_quota(self.owner.id))
