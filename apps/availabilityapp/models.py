import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.calendarapp.enums import DayOfWeek
from apps.calendarapp.models import Participant

from .validators import validate_date_order, validate_time_pair


class Availability(models.Model):
    """A participant's one-off availability on a specific date"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    participant = models.ForeignKey(
        Participant,
        on_delete=models.CASCADE,
        related_name="availabilities",
        verbose_name=_("Participant"),
    )
    date = models.DateField(_("Date"))
    start_time = models.TimeField(
        _("Start Time"), null=True, blank=True, help_text=_("Empty means all day")
    )
    end_time = models.TimeField(_("End Time"), null=True, blank=True)
    note = models.TextField(_("Note"), blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Availability")
        verbose_name_plural = _("Availabilities")
        ordering = ["date", "start_time"]
        unique_together = ("participant", "date")
        indexes = [
            models.Index(fields=["date"], name="availability_date_idx"),
        ]

    def __str__(self):
        return f"{self.participant.name} - {self.date}"

    def clean(self):
        super().clean()
        validate_time_pair(self.start_time, self.end_time)


class Recurrence(models.Model):
    """Weekly availability pattern of a participant"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    participant = models.ForeignKey(
        Participant,
        on_delete=models.CASCADE,
        related_name="recurrences",
        verbose_name=_("Participant"),
    )
    day_of_week = models.IntegerField(_("Day of Week"), choices=DayOfWeek.choices)
    start_time = models.TimeField(_("Start Time"), null=True, blank=True)
    end_time = models.TimeField(_("End Time"), null=True, blank=True)
    note = models.TextField(_("Note"), blank=True)
    start_date = models.DateField(_("Start Date"))
    end_date = models.DateField(
        _("End Date"), null=True, blank=True, help_text=_("Empty means no end")
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Recurrence")
        verbose_name_plural = _("Recurrences")
        ordering = ["day_of_week", "start_date"]
        indexes = [
            models.Index(fields=["participant", "day_of_week"], name="recurrence_part_dow_idx"),
        ]

    def __str__(self):
        return f"{self.participant.name} - {self.get_day_of_week_display()}"

    def clean(self):
        super().clean()
        validate_time_pair(self.start_time, self.end_time)
        validate_date_order(self.start_date, self.end_date)


class RecurrenceException(models.Model):
    """A single date on which a recurrence does not apply"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recurrence = models.ForeignKey(
        Recurrence,
        on_delete=models.CASCADE,
        related_name="exceptions",
        verbose_name=_("Recurrence"),
    )
    excluded_date = models.DateField(_("Excluded Date"))
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)

    class Meta:
        verbose_name = _("Recurrence Exception")
        verbose_name_plural = _("Recurrence Exceptions")
        ordering = ["excluded_date"]
        unique_together = ("recurrence", "excluded_date")

    def __str__(self):
        return f"{self.recurrence} - {self.excluded_date}"
