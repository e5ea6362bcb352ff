"""Конфигурация приложения status."""

from django.apps import AppConfig


class StatusConfig(AppConfig):
    """Конфигурация приложения status."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "status"
    verbose_name = "Статусы"

    def ready(self):
        """Проверка конфигурации статусов при загрузке приложения."""
        import status.services.initial_data  # noqa
