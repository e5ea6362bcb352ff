"""Исключения приложения order."""

from django.core.exceptions import ObjectDoesNotExist, ValidationError


class MalformedTime(ValidationError):
    """Дата или время доставки не разбираются."""


class TimeZoneUnresolved(RuntimeWarning):
    """Часовой пояс не распознан, использован часовой пояс по умолчанию.

    Предупреждение прикладывается к результату и логируется, но не вызывается.
    """

    def __init__(self, time_zone_name, fallback_name):
        self.time_zone_name = time_zone_name
        self.fallback_name = fallback_name
        super().__init__(
            f"Часовой пояс '{time_zone_name}' не распознан, "
            f"используется '{fallback_name}'"
        )


class DependencyUnavailable(Exception):
    """Хранилище недоступно. Операцию можно повторить."""

    retryable = True


class OrderNotFound(ObjectDoesNotExist):
    """Заказ не найден."""


class RecipientUnavailable(ValidationError):
    """У получателя письма нет адреса электронной почты."""
