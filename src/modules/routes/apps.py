from django.apps import AppConfig


class RoutesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.routes"
    label = "routes"
    verbose_name = "Rotas"
