"""
Ошибки API.

Каждый класс задает HTTP код ответа. Обработчики исключений сервисов
в router.py используют эти коды, так что код ответа для каждого вида
ошибки задается в одном месте.
"""

from ninja.errors import HttpError


class APIError(HttpError):
    """Базовый класс для API ошибок."""

    default_detail = "Произошла ошибка"
    status_code = 500

    def __init__(self, detail=None):
        super().__init__(self.status_code, detail or self.default_detail)


class ValidationAPIError(APIError):
    """Ошибка валидации данных."""

    default_detail = "Ошибка валидации данных"
    status_code = 400


class NotFoundAPIError(APIError):
    """Ошибка: ресурс не найден."""

    default_detail = "Запрашиваемый ресурс не найден"
    status_code = 404


class AuthenticationAPIError(APIError):
    """Ошибка аутентификации."""

    default_detail = "Ошибка аутентификации"
    status_code = 401


class PermissionAPIError(APIError):
    """Ошибка прав доступа."""

    default_detail = "Недостаточно прав для выполнения операции"
    status_code = 403


class ServiceUnavailableAPIError(APIError):
    """Хранилище или почтовый сервер недоступны, запрос можно повторить."""

    default_detail = "Сервис временно недоступен"
    status_code = 503
