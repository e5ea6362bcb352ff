"""Конфигурация приложения document."""

from django.apps import AppConfig


class DocumentConfig(AppConfig):
    """Конфигурация приложения document."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "document"
    verbose_name = "Документы и письма"
