from django.db import models
from django.utils.translation import gettext_lazy as _


class HolidaysPolicy(models.TextChoices):
    """How public holidays affect a calendar's admissible dates"""

    IGNORE = "ignore", _("Ignore holidays")
    ALLOW = "allow", _("Always allow holidays")
    BLOCK = "block", _("Block holidays")


class DayOfWeek(models.IntegerChoices):
    """Day of week (0=Sunday, 6=Saturday)"""

    SUNDAY = 0, _("Sunday")
    MONDAY = 1, _("Monday")
    TUESDAY = 2, _("Tuesday")
    WEDNESDAY = 3, _("Wednesday")
    THURSDAY = 4, _("Thursday")
    FRIDAY = 5, _("Friday")
    SATURDAY = 6, _("Saturday")


ALL_WEEKDAYS = [day.value for day in DayOfWeek]
