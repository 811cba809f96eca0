from django.apps import AppConfig


class ExchangesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.exchanges"
    label = "exchanges"
    verbose_name = "Trocas"
