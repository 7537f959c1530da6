from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class CalendarAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.calendarapp"
    label = "calendarapp"
    verbose_name = _("Calendars")
