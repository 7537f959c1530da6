import logging

import pytz
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from algorithms.availability import TimeSlotSegmenter
from algorithms.dates import is_date_allowed
from apps.availabilityapp.services.availability_service import AvailabilityService
from apps.calendarapp.services.calendar_service import CalendarService
from apps.calendarapp.services.quota_service import QuotaService
from core.cache.key_generator import generate_cache_key
from core.exceptions import QuotaExceededError

from .calendar_event import CalendarEvent, ParticipantAvailability
from .feed_renderer import FeedRenderer

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "ics_feed"


class ICSService:
    """
    Generates the iCalendar feed of a calendar.

    The pipeline is: calendar lookup, quota gate, thresholded availability per
    date, date range and admissibility filters, time-slot segmentation with
    the minimum duration, sequential numbering, rendering.

    Collaborators are injected so they can be replaced in tests; by default
    the database-backed services and the ``QUORUMCAL`` settings are used.
    """

    def __init__(
        self,
        calendar_service=None,
        availability_service=None,
        quota_checker=None,
        app_domain=None,
        renderer=None,
        cache_ttl=None,
    ):
        app_settings = settings.QUORUMCAL
        self.calendar_service = calendar_service or CalendarService
        self.availability_service = availability_service or AvailabilityService
        self.quota_checker = quota_checker or QuotaService.is_over_quota
        self.app_domain = app_domain or app_settings["APP_DOMAIN"]
        self.renderer = renderer or FeedRenderer(app_settings["NOREPLY_EMAIL"])
        self.cache_ttl = (
            cache_ttl if cache_ttl is not None else int(app_settings.get("ICS_FEED_CACHE_TTL", 0))
        )

    def generate_feed(self, ics_token, host="", now=None):
        """
        Generate the feed of the calendar identified by ``ics_token``.

        Args:
            ics_token: The calendar's ICS token
            host: Serving host from the request, embedded in event UIDs;
                the configured app domain is used when empty
            now: Aware datetime used for DTSTAMP; its date in the calendar's
                timezone is the current date

        Returns:
            str: iCalendar document with CRLF line endings

        Raises:
            CalendarNotFoundError: Unknown token
            QuotaExceededError: The calendar owner is over quota
            UpstreamReadError: The database could not be read
        """
        domain = host or self.app_domain
        now = now or timezone.now()

        calendar = self.calendar_service.get_by_ics_token(ics_token)
        today = self.get_calendar_today(calendar, now)

        if self.quota_checker(calendar.owner_id):
            logger.info("Feed of calendar %s blocked, owner over quota", calendar.calendar_id)
            raise QuotaExceededError()

        cache_key = None
        if self.cache_ttl > 0:
            cache_key = self.get_cache_key(ics_token, domain, calendar, today)
            cached = cache.get(cache_key)
            if cached is not None:
                logger.debug("Feed cache hit for calendar %s", calendar.calendar_id)
                return cached

        events_by_date = self.availability_service.get_events_above_threshold(
            calendar.calendar_id, calendar.threshold, today=today
        )
        events = self.build_calendar_events(calendar, events_by_date)
        feed = self.renderer.render(calendar, events, domain, now).decode("utf-8")

        logger.debug(
            "Generated feed for calendar %s: %d qualifying dates, %d events",
            calendar.calendar_id,
            len(events_by_date),
            len(events),
        )

        if cache_key is not None:
            cache.set(cache_key, feed, self.cache_ttl)

        return feed

    @staticmethod
    def get_calendar_today(calendar, now):
        """Current date in the calendar's own timezone"""
        try:
            tz = pytz.timezone(calendar.timezone)
        except pytz.UnknownTimeZoneError:
            logger.warning(
                "Unknown timezone %r on calendar %s, using server date",
                calendar.timezone,
                calendar.calendar_id,
            )
            return timezone.localdate(now)
        return now.astimezone(tz).date()

    def get_cache_key(self, ics_token, domain, calendar, today):
        """Key covering every input of the feed"""
        return generate_cache_key(
            {
                "token": ics_token,
                "domain": domain,
                "calendar_version": calendar.updated_at,
                "data_version": self.availability_service.get_data_version(calendar.calendar_id),
                "today": today,
            },
            namespace=CACHE_NAMESPACE,
        )

    def build_calendar_events(self, calendar, events_by_date):
        """
        Turn thresholded availability into numbered feed events.

        Event numbers run over the whole feed and only count events that
        survived every filter.
        """
        segmenter = TimeSlotSegmenter(calendar.threshold, calendar.min_duration_hours)
        events = []

        for day in sorted(events_by_date):
            records = events_by_date[day]
            if not records:
                continue

            if not calendar.contains_date(day):
                continue

            if not is_date_allowed(
                day,
                calendar.timezone,
                calendar.allowed_weekdays,
                calendar.holidays_policy,
                calendar.allow_holiday_eves,
            ):
                continue

            for slot in segmenter.compute_slots(record.to_interval() for record in records):
                events.append(
                    CalendarEvent(
                        date=day,
                        calendar_id=calendar.calendar_id,
                        calendar_name=calendar.name,
                        calendar_description=calendar.description,
                        event_number=len(events) + 1,
                        available_count=len(slot.participants),
                        total_participants=calendar.total_participants,
                        threshold=calendar.threshold,
                        participants=[
                            ParticipantAvailability.from_interval(p) for p in slot.participants
                        ],
                        timezone=calendar.timezone,
                        slot_start_time=slot.start_time,
                        slot_end_time=slot.end_time,
                        slot_index=slot.index,
                    )
                )

        return events
