from django.apps import AppConfig


class ResultsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "kaloltsavam.apps.results"
    verbose_name = "Results"
