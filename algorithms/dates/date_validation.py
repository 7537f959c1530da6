"""
Date admissibility rules for calendars.

Decides whether a date may carry events for a calendar, given its allowed
weekdays and its public-holiday settings:

- holidays policy "block": a public holiday is never allowed
- holidays policy "allow": a public holiday is always allowed, whatever its weekday
- holidays policy "ignore": holiday status plays no role
- otherwise the weekday must be allowed, except that the eve of a public
  holiday is let through when holiday eves are allowed

Public holidays come from the ``holidays`` package for the country owning the
calendar's timezone (``pytz.country_timezones``).
"""

import logging
from datetime import date, timedelta
from functools import lru_cache
from typing import FrozenSet, Iterable

import holidays
import pytz

from algorithms.availability.recurrence_materializer import to_schema_weekday

logger = logging.getLogger(__name__)

POLICY_IGNORE = "ignore"
POLICY_ALLOW = "allow"
POLICY_BLOCK = "block"


@lru_cache(maxsize=None)
def get_country_from_timezone(timezone: str) -> str:
    """
    Map an IANA timezone to the ISO country code that owns it.

    Returns an empty string when the timezone belongs to no country
    (e.g. "UTC") or is unknown.
    """
    if not timezone:
        return ""

    for code in sorted(pytz.country_timezones):
        if timezone in pytz.country_timezones[code]:
            return code.upper()

    return ""


@lru_cache(maxsize=256)
def get_holiday_dates(country_code: str, year: int) -> FrozenSet[date]:
    """Public holidays of ``country_code`` in ``year``; empty when unsupported."""
    try:
        calendar = holidays.country_holidays(country_code, years=year)
    except NotImplementedError:
        logger.debug("No holiday data for country %s", country_code)
        return frozenset()
    return frozenset(calendar.keys())


def is_holiday(day: date, country_code: str) -> bool:
    """True if ``day`` is a public holiday in ``country_code``."""
    if not country_code:
        return False
    return day in get_holiday_dates(country_code, day.year)


def is_holiday_eve(day: date, country_code: str) -> bool:
    """True if the day after ``day`` is a public holiday."""
    return is_holiday(day + timedelta(days=1), country_code)


def is_weekday_allowed(weekday: int, allowed_weekdays: Iterable[int]) -> bool:
    """``weekday`` uses our schema (0 = Sunday)."""
    return weekday in set(allowed_weekdays)


def is_date_allowed(
    day: date,
    timezone: str,
    allowed_weekdays: Iterable[int],
    holidays_policy: str,
    allow_holiday_eves: bool,
) -> bool:
    """
    Check whether ``day`` is admissible for a calendar.

    Args:
        day: The date to check
        timezone: Calendar timezone, used to find the holiday country
        allowed_weekdays: Allowed weekdays (0 = Sunday ... 6 = Saturday)
        holidays_policy: "ignore", "allow" or "block"
        allow_holiday_eves: Let holiday eves through on disallowed weekdays

    Returns:
        True if events may be published on ``day``
    """
    country_code = get_country_from_timezone(timezone)

    if country_code and is_holiday(day, country_code):
        if holidays_policy == POLICY_BLOCK:
            return False
        if holidays_policy == POLICY_ALLOW:
            return True

    if is_weekday_allowed(to_schema_weekday(day), allowed_weekdays):
        return True

    return bool(country_code and allow_holiday_eves and is_holiday_eve(day, country_code))
