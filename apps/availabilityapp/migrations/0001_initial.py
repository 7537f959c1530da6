import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("calendarapp", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Availability",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateField(verbose_name="Date")),
                (
                    "start_time",
                    models.TimeField(
                        blank=True, help_text="Empty means all day", null=True, verbose_name="Start Time"
                    ),
                ),
                ("end_time", models.TimeField(blank=True, null=True, verbose_name="End Time")),
                ("note", models.TextField(blank=True, verbose_name="Note")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "participant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availabilities",
                        to="calendarapp.participant",
                        verbose_name="Participant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Availability",
                "verbose_name_plural": "Availabilities",
                "ordering": ["date", "start_time"],
                "indexes": [models.Index(fields=["date"], name="availability_date_idx")],
                "unique_together": {("participant", "date")},
            },
        ),
        migrations.CreateModel(
            name="Recurrence",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "day_of_week",
                    models.IntegerField(
                        choices=[
                            (0, "Sunday"),
                            (1, "Monday"),
                            (2, "Tuesday"),
                            (3, "Wednesday"),
                            (4, "Thursday"),
                            (5, "Friday"),
                            (6, "Saturday"),
                        ],
                        verbose_name="Day of Week",
                    ),
                ),
                ("start_time", models.TimeField(blank=True, null=True, verbose_name="Start Time")),
                ("end_time", models.TimeField(blank=True, null=True, verbose_name="End Time")),
                ("note", models.TextField(blank=True, verbose_name="Note")),
                ("start_date", models.DateField(verbose_name="Start Date")),
                (
                    "end_date",
                    models.DateField(blank=True, help_text="Empty means no end", null=True, verbose_name="End Date"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "participant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recurrences",
                        to="calendarapp.participant",
                        verbose_name="Participant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Recurrence",
                "verbose_name_plural": "Recurrences",
                "ordering": ["day_of_week", "start_date"],
                "indexes": [
                    models.Index(fields=["participant", "day_of_week"], name="recurrence_part_dow_idx")
                ],
            },
        ),
        migrations.CreateModel(
            name="RecurrenceException",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("excluded_date", models.DateField(verbose_name="Excluded Date")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                (
                    "recurrence",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="exceptions",
                        to="availabilityapp.recurrence",
                        verbose_name="Recurrence",
                    ),
                ),
            ],
            options={
                "verbose_name": "Recurrence Exception",
                "verbose_name_plural": "Recurrence Exceptions",
                "ordering": ["excluded_date"],
                "unique_together": {("recurrence", "excluded_date")},
            },
        ),
    ]
