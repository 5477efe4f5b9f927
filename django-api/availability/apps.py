from django.apps import AppConfig


class AvailabilityConfig(AppConfig):
    name = "availability"
    verbose_name = "Party availability"
    default_auto_field = "django.db.models.BigAutoField"
