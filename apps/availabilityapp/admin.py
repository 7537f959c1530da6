from django.contrib import admin

from .models import Availability, Recurrence, RecurrenceException


@admin.register(Availability)
class AvailabilityAdmin(admin.ModelAdmin):
    list_display = ["participant", "date", "start_time", "end_time"]
    list_filter = ["date"]
    search_fields = ["participant__name", "note"]


class RecurrenceExceptionInline(admin.TabularInline):
    model = RecurrenceException
    extra = 0


@admin.register(Recurrence)
class RecurrenceAdmin(admin.ModelAdmin):
    list_display = ["participant", "day_of_week", "start_time", "end_time", "start_date", "end_date"]
    list_filter = ["day_of_week"]
    search_fields = ["participant__name", "note"]
    inlines = [RecurrenceExceptionInline]


@admin.register(RecurrenceException)
class RecurrenceExceptionAdmin(admin.ModelAdmin):
    list_display = ["recurrence", "excluded_date"]
