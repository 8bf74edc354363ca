from django.apps import AppConfig


class CycrackConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cycrack"
    verbose_name = "CyCrack"
