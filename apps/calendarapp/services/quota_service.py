import logging

from django.conf import settings
from django.db.utils import DatabaseError

from ..models import Calendar

logger = logging.getLogger(__name__)


class QuotaService:
    """Calendar entitlement checks for calendar owners"""

    @staticmethod
    def get_calendar_limit():
        """Calendars allowed per owner; 0 means unlimited"""
        return int(settings.QUORUMCAL.get("CALENDAR_LIMIT_PER_USER", 0))

    @staticmethod
    def is_over_quota(owner_id):
        """
        Check whether an owner has more calendars than allowed.

        A failing check is logged and reported as "not over quota" so that a
        database hiccup on the quota side does not take feeds down.
        """
        limit = QuotaService.get_calendar_limit()
        if limit <= 0:
            return False

        try:
            count = Calendar.objects.filter(owner_id=owner_id).count()
        except DatabaseError as e:
            logger.warning("Quota check failed for owner %s: %s", owner_id, e)
            return False

        return count > limit
