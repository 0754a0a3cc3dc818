"""DWG viewer app configuration."""
from django.apps import AppConfig


class DwgConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.dwg"
    verbose_name = "DWG Viewer"
