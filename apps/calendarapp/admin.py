from django.contrib import admin

from .models import Calendar, Participant


class ParticipantInline(admin.TabularInline):
    model = Participant
    extra = 0


@admin.register(Calendar)
class CalendarAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "threshold", "holidays_policy", "created_at"]
    list_filter = ["holidays_policy", "allow_holiday_eves"]
    search_fields = ["name", "description"]
    readonly_fields = ["public_token", "ics_token", "created_at", "updated_at"]
    inlines = [ParticipantInline]


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ["name", "calendar", "created_at"]
    search_fields = ["name", "calendar__name"]
