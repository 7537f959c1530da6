import secrets
import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from .enums import ALL_WEEKDAYS, HolidaysPolicy
from .validators import validate_allowed_weekdays, validate_date_range, validate_timezone


def generate_token():
    """64 hex characters, used for the public and feed URLs"""
    return secrets.token_hex(32)


def default_allowed_weekdays():
    return list(ALL_WEEKDAYS)


class Calendar(models.Model):
    """Shared calendar collecting the availability of its participants"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="calendars",
        verbose_name=_("Owner"),
    )
    name = models.CharField(_("Name"), max_length=200)
    description = models.TextField(_("Description"), blank=True)
    public_token = models.CharField(
        _("Public Token"), max_length=64, unique=True, default=generate_token, editable=False
    )
    ics_token = models.CharField(
        _("ICS Token"), max_length=64, unique=True, default=generate_token, editable=False
    )
    threshold = models.PositiveIntegerField(
        _("Threshold"),
        default=1,
        validators=[MinValueValidator(1)],
        help_text=_("Minimum number of participants available at the same time"),
    )
    allowed_weekdays = models.JSONField(
        _("Allowed Weekdays"),
        default=default_allowed_weekdays,
        validators=[validate_allowed_weekdays],
        help_text=_("0=Sunday ... 6=Saturday"),
    )
    min_duration_hours = models.PositiveIntegerField(
        _("Minimum Duration (hours)"),
        default=0,
        help_text=_("Shorter time slots are left out of the feed"),
    )
    timezone = models.CharField(
        _("Timezone"),
        max_length=64,
        default="Europe/Paris",
        validators=[validate_timezone],
    )
    holidays_policy = models.CharField(
        _("Holidays Policy"),
        max_length=10,
        choices=HolidaysPolicy.choices,
        default=HolidaysPolicy.IGNORE,
    )
    allow_holiday_eves = models.BooleanField(_("Allow Holiday Eves"), default=False)
    start_date = models.DateField(_("Start Date"), null=True, blank=True)
    end_date = models.DateField(_("End Date"), null=True, blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Calendar")
        verbose_name_plural = _("Calendars")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner"], name="calendar_owner_idx"),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        validate_date_range(self.start_date, self.end_date)


class Participant(models.Model):
    """A named person declaring availability on a calendar"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    calendar = models.ForeignKey(
        Calendar,
        on_delete=models.CASCADE,
        related_name="participants",
        verbose_name=_("Calendar"),
    )
    name = models.CharField(_("Name"), max_length=100)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Participant")
        verbose_name_plural = _("Participants")
        ordering = ["name"]
        unique_together = ("calendar", "name")

    def __str__(self):
        return f"{self.name} ({self.calendar.name})"
