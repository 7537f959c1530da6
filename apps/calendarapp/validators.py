import pytz
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


def validate_allowed_weekdays(value):
    """Validate a non-empty list of distinct weekdays (0=Sunday, 6=Saturday)"""
    if not isinstance(value, list) or not value:
        raise ValidationError(_("At least one weekday must be allowed"))

    for day in value:
        if not isinstance(day, int) or isinstance(day, bool) or not 0 <= day <= 6:
            raise ValidationError(
                _("Invalid weekday %(day)s, expected 0 (Sunday) to 6 (Saturday)"),
                params={"day": day},
            )

    if len(set(value)) != len(value):
        raise ValidationError(_("Duplicate weekday in allowed weekdays"))


def validate_timezone(value):
    """Validate an IANA timezone name"""
    if value not in pytz.all_timezones_set:
        raise ValidationError(_("Unknown timezone %(tz)s"), params={"tz": value})


def validate_date_range(start_date, end_date):
    """Validate that start_date is not after end_date"""
    if start_date and end_date and start_date > end_date:
        raise ValidationError(_("Start date must be on or before end date"))
