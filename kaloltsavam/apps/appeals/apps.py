from django.apps import AppConfig


class AppealsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "kaloltsavam.apps.appeals"
    verbose_name = "Appeals"
