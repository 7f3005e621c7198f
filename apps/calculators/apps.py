from django.apps import AppConfig


class CalculatorsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.calculators"
    verbose_name = "Merchant Calculators"

    def ready(self):
        from apps.calculators.infrastructure.persistence import models  # noqa: F401
