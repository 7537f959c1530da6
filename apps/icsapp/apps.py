from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class IcsAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.icsapp"
    label = "icsapp"
    verbose_name = _("Calendar Feeds")
