from django.apps import AppConfig


class MinesweeperConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "minesweeper"
