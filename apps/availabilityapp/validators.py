from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


def validate_time_pair(start_time, end_time):
    """When both bounds are set, start must be before end; a missing bound is the day boundary"""
    if start_time is not None and end_time is not None and start_time >= end_time:
        raise ValidationError(_("Start time must be before end time"))


def validate_date_order(start_date, end_date):
    """An open-ended range (no end date) is always valid"""
    if start_date and end_date and end_date < start_date:
        raise ValidationError(_("End date must be on or after start date"))
