"""Исключения для переходов между статусами."""

from django.core.exceptions import PermissionDenied, ValidationError


class UnknownStatus(ValidationError):
    """Код статуса не входит в перечисление статусов заказа."""


class InvalidTransition(ValidationError):
    """Переход между статусами запрещен правилами жизненного цикла."""


class Forbidden(PermissionDenied):
    """У исполнителя нет прав на запрошенное действие."""
