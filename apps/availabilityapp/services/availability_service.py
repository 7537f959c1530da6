import logging
from collections import defaultdict
from datetime import timedelta

from django.db.models import Count, Max
from django.db.utils import DatabaseError
from django.utils import timezone

from algorithms.availability import (
    AvailabilityRecord,
    RecurrenceRule,
    ThresholdAggregator,
    TimeSlotSegmenter,
    materialize_recurrences,
)
from algorithms.availability.threshold_aggregator import group_by_date, merge_effective_records
from apps.calendarapp.models import Participant
from core.exceptions import InvalidDataException, UpstreamReadError

from ..models import Availability, Recurrence, RecurrenceException

logger = logging.getLogger(__name__)

MAX_RANGE_DAYS = 366


def format_time(value):
    """TimeField value to "HH:MM" (None stays None)"""
    if value is None:
        return None
    return value.strftime("%H:%M")


class AvailabilityService:
    """Service for reading and aggregating participant availability"""

    @staticmethod
    def _manual_records(calendar_id, start_date=None, end_date=None):
        queryset = Availability.objects.filter(participant__calendar_id=calendar_id)
        if start_date is not None:
            queryset = queryset.filter(date__gte=start_date)
        if end_date is not None:
            queryset = queryset.filter(date__lte=end_date)

        rows = queryset.values(
            "participant_id", "participant__name", "date", "start_time", "end_time", "note"
        )
        return [
            AvailabilityRecord(
                participant_id=row["participant_id"],
                participant_name=row["participant__name"],
                day=row["date"],
                start_time=format_time(row["start_time"]),
                end_time=format_time(row["end_time"]),
                note=row["note"],
            )
            for row in rows
        ]

    @staticmethod
    def _recurrence_rules(calendar_id):
        excluded = defaultdict(set)
        exception_rows = RecurrenceException.objects.filter(
            recurrence__participant__calendar_id=calendar_id
        ).values_list("recurrence_id", "excluded_date")
        for recurrence_id, excluded_date in exception_rows:
            excluded[recurrence_id].add(excluded_date)

        rows = Recurrence.objects.filter(participant__calendar_id=calendar_id).values(
            "id",
            "participant_id",
            "participant__name",
            "day_of_week",
            "start_date",
            "end_date",
            "start_time",
            "end_time",
            "note",
        )
        return [
            RecurrenceRule(
                recurrence_id=row["id"],
                participant_id=row["participant_id"],
                participant_name=row["participant__name"],
                day_of_week=row["day_of_week"],
                start_date=row["start_date"],
                end_date=row["end_date"],
                start_time=format_time(row["start_time"]),
                end_time=format_time(row["end_time"]),
                note=row["note"],
                excluded_dates=excluded[row["id"]],
            )
            for row in rows
        ]

    @staticmethod
    def get_events_above_threshold(calendar_id, threshold, today=None):
        """
        Get the dates where at least ``threshold`` participants are available.

        Manual availabilities win over recurrence occurrences for the same
        participant and date. Recurrences are expanded from their earliest
        start date up to their latest end date, open-ended ones up to one year
        after ``today``.

        Args:
            calendar_id: Calendar ID
            threshold: Minimum number of distinct participants per date
            today: Reference date for open-ended recurrences (default: today)

        Returns:
            dict: Date -> list of AvailabilityRecord ordered by participant name,
            in date order

        Raises:
            UpstreamReadError: The database could not be read
        """
        if today is None:
            today = timezone.localdate()

        try:
            manual = AvailabilityService._manual_records(calendar_id)
            rules = AvailabilityService._recurrence_rules(calendar_id)
        except DatabaseError as e:
            logger.error("Failed to read availability for calendar %s: %s", calendar_id, e)
            raise UpstreamReadError() from e

        occurrences = materialize_recurrences(rules, manual, today)
        return ThresholdAggregator(threshold).aggregate(manual, occurrences)

    @staticmethod
    def get_data_version(calendar_id):
        """
        Marker that changes whenever availability data of the calendar changes.

        Covers participants as well, since their names and count appear in
        the feed. Combines row counts (catches deletions) with the latest
        modification timestamps (catches edits).
        """
        try:
            participant = Participant.objects.filter(calendar_id=calendar_id).aggregate(
                count=Count("id"), latest=Max("updated_at")
            )
            availability = Availability.objects.filter(
                participant__calendar_id=calendar_id
            ).aggregate(count=Count("id"), latest=Max("updated_at"))
            recurrence = Recurrence.objects.filter(
                participant__calendar_id=calendar_id
            ).aggregate(count=Count("id"), latest=Max("updated_at"))
            exception = RecurrenceException.objects.filter(
                recurrence__participant__calendar_id=calendar_id
            ).aggregate(count=Count("id"), latest=Max("created_at"))
        except DatabaseError as e:
            logger.error("Failed to read data version for calendar %s: %s", calendar_id, e)
            raise UpstreamReadError() from e

        return "|".join(
            f"{part['count']}@{part['latest'].isoformat() if part['latest'] else '-'}"
            for part in (participant, availability, recurrence, exception)
        )

    @staticmethod
    def get_range_summary(calendar_id, start_date, end_date):
        """
        Summarize the effective availability of every date in a range.

        Args:
            calendar_id: Calendar ID
            start_date: First date (inclusive)
            end_date: Last date (inclusive)

        Returns:
            list: One dict per date having availability, in date order, with
            the highest number of simultaneously available participants and
            the participants' time ranges
        """
        if end_date < start_date:
            raise InvalidDataException("End date must be on or after start date")
        if (end_date - start_date) > timedelta(days=MAX_RANGE_DAYS - 1):
            raise InvalidDataException(f"Date range cannot exceed {MAX_RANGE_DAYS} days")

        try:
            manual = AvailabilityService._manual_records(calendar_id, start_date, end_date)
            rules = AvailabilityService._recurrence_rules(calendar_id)
        except DatabaseError as e:
            logger.error("Failed to read availability for calendar %s: %s", calendar_id, e)
            raise UpstreamReadError() from e

        occurrences = materialize_recurrences(
            rules, manual, start_date, window=(start_date, end_date)
        )
        grouped = group_by_date(merge_effective_records(manual, occurrences))

        segmenter = TimeSlotSegmenter(threshold=1)
        summaries = []
        for day in sorted(grouped):
            records = grouped[day]
            summaries.append(
                {
                    "date": day,
                    "total_count": segmenter.max_coverage(
                        record.to_interval() for record in records
                    ),
                    "participants": [
                        {
                            "participant_id": record.participant_id,
                            "participant_name": record.participant_name,
                            "start_time": record.start_time,
                            "end_time": record.end_time,
                            "note": record.note,
                        }
                        for record in records
                    ],
                }
            )

        return summaries
