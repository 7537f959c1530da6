import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import apps.calendarapp.models
import apps.calendarapp.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Calendar",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                (
                    "public_token",
                    models.CharField(
                        default=apps.calendarapp.models.generate_token,
                        editable=False,
                        max_length=64,
                        unique=True,
                        verbose_name="Public Token",
                    ),
                ),
                (
                    "ics_token",
                    models.CharField(
                        default=apps.calendarapp.models.generate_token,
                        editable=False,
                        max_length=64,
                        unique=True,
                        verbose_name="ICS Token",
                    ),
                ),
                (
                    "threshold",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="Minimum number of participants available at the same time",
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Threshold",
                    ),
                ),
                (
                    "allowed_weekdays",
                    models.JSONField(
                        default=apps.calendarapp.models.default_allowed_weekdays,
                        help_text="0=Sunday ... 6=Saturday",
                        validators=[apps.calendarapp.validators.validate_allowed_weekdays],
                        verbose_name="Allowed Weekdays",
                    ),
                ),
                (
                    "min_duration_hours",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Shorter time slots are left out of the feed",
                        verbose_name="Minimum Duration (hours)",
                    ),
                ),
                (
                    "timezone",
                    models.CharField(
                        default="Europe/Paris",
                        max_length=64,
                        validators=[apps.calendarapp.validators.validate_timezone],
                        verbose_name="Timezone",
                    ),
                ),
                (
                    "holidays_policy",
                    models.CharField(
                        choices=[
                            ("ignore", "Ignore holidays"),
                            ("allow", "Always allow holidays"),
                            ("block", "Block holidays"),
                        ],
                        default="ignore",
                        max_length=10,
                        verbose_name="Holidays Policy",
                    ),
                ),
                ("allow_holiday_eves", models.BooleanField(default=False, verbose_name="Allow Holiday Eves")),
                ("start_date", models.DateField(blank=True, null=True, verbose_name="Start Date")),
                ("end_date", models.DateField(blank=True, null=True, verbose_name="End Date")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="calendars",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Owner",
                    ),
                ),
            ],
            options={
                "verbose_name": "Calendar",
                "verbose_name_plural": "Calendars",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["owner"], name="calendar_owner_idx")],
            },
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100, verbose_name="Name")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "calendar",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="participants",
                        to="calendarapp.calendar",
                        verbose_name="Calendar",
                    ),
                ),
            ],
            options={
                "verbose_name": "Participant",
                "verbose_name_plural": "Participants",
                "ordering": ["name"],
                "unique_together": {("calendar", "name")},
            },
        ),
    ]
