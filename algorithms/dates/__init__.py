"""
Date admissibility algorithms.

Key components:
- is_date_allowed: Weekday, public holiday and holiday-eve rules for a calendar
"""

from .date_validation import (
    get_country_from_timezone,
    is_date_allowed,
    is_holiday,
    is_holiday_eve,
)

__all__ = ["is_date_allowed", "get_country_from_timezone", "is_holiday", "is_holiday_eve"]
