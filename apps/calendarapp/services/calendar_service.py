import logging

from django.db.models import Count
from django.db.utils import DatabaseError

from core.exceptions import CalendarNotFoundError, UpstreamReadError

from ..models import Calendar

logger = logging.getLogger(__name__)


class CalendarConfig:
    """Read-only snapshot of the calendar settings the feed pipeline needs"""

    def __init__(
        self,
        calendar_id,
        name,
        description,
        threshold,
        allowed_weekdays,
        min_duration_hours,
        timezone,
        holidays_policy,
        allow_holiday_eves,
        owner_id,
        start_date=None,
        end_date=None,
        total_participants=0,
        updated_at=None,
    ):
        self.calendar_id = calendar_id
        self.name = name
        self.description = description or ""
        self.threshold = threshold
        self.allowed_weekdays = list(allowed_weekdays)
        self.min_duration_hours = min_duration_hours
        self.timezone = timezone
        self.holidays_policy = holidays_policy
        self.allow_holiday_eves = allow_holiday_eves
        self.owner_id = owner_id
        self.start_date = start_date
        self.end_date = end_date
        self.total_participants = total_participants
        self.updated_at = updated_at

    @classmethod
    def from_calendar(cls, calendar, total_participants):
        return cls(
            calendar_id=calendar.id,
            name=calendar.name,
            description=calendar.description,
            threshold=calendar.threshold,
            allowed_weekdays=calendar.allowed_weekdays,
            min_duration_hours=calendar.min_duration_hours,
            timezone=calendar.timezone,
            holidays_policy=calendar.holidays_policy,
            allow_holiday_eves=calendar.allow_holiday_eves,
            owner_id=calendar.owner_id,
            start_date=calendar.start_date,
            end_date=calendar.end_date,
            total_participants=total_participants,
            updated_at=calendar.updated_at,
        )

    def contains_date(self, day):
        """Check the optional [start_date, end_date] window (bounds inclusive)"""
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False
        return True

    def __repr__(self):
        return f"CalendarConfig({self.calendar_id}, {self.name!r}, threshold={self.threshold})"


class CalendarService:
    """Service for reading calendar configuration"""

    @staticmethod
    def _get_by(**lookup):
        try:
            calendar = (
                Calendar.objects.annotate(participant_count=Count("participants"))
                .filter(**lookup)
                .first()
            )
        except DatabaseError as e:
            logger.error("Failed to read calendar: %s", e)
            raise UpstreamReadError() from e

        if calendar is None:
            raise CalendarNotFoundError()

        return CalendarConfig.from_calendar(calendar, calendar.participant_count)

    @staticmethod
    def get_by_ics_token(token):
        """
        Get the configuration of the calendar behind a feed token.

        Args:
            token: The calendar's ICS token

        Returns:
            CalendarConfig including the total participant count

        Raises:
            CalendarNotFoundError: No calendar has this token
            UpstreamReadError: The database could not be read
        """
        if not token:
            raise CalendarNotFoundError()
        return CalendarService._get_by(ics_token=token)

    @staticmethod
    def get_by_public_token(token):
        """Same as get_by_ics_token, for the public sharing token"""
        if not token:
            raise CalendarNotFoundError()
        return CalendarService._get_by(public_token=token)
