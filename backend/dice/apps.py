from django.apps import AppConfig


class DiceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dice"
