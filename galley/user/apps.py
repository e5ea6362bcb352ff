"""Конфигурация приложения user."""

from django.apps import AppConfig


class UserConfig(AppConfig):
    """Конфигурация приложения user."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "user"
