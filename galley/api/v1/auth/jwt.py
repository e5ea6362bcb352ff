"""
JWT аутентификация.

Основные компоненты:
    - AuthBearer: Проверка access токена из заголовка Authorization
    - create_tokens: Выпуск пары access и refresh токенов
    - decode_token: Проверка токена заданного типа

Примечания:
    - Настройки берутся из settings.JWT_AUTH (ключ, алгоритм, сроки жизни)
    - Роль аутентифицированного пользователя используется как роль
      исполнителя при изменении статусов и отправке писем
"""

from datetime import datetime, timedelta, timezone

from django.conf import settings
from django.contrib.auth import get_user_model
from jose import JWTError, jwt
from ninja.security import HttpBearer

from ..exceptions import AuthenticationAPIError

User = get_user_model()

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def create_token(data: dict, expires_delta: timedelta) -> str:
    """Создание JWT токена."""
    to_encode = data.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(
        to_encode,
        settings.JWT_AUTH["SECRET_KEY"],
        algorithm=settings.JWT_AUTH["ALGORITHM"],
    )


def create_tokens(user_id: int) -> dict:
    """Создание пары access и refresh токенов."""
    access_token = create_token(
        {"sub": str(user_id), "type": ACCESS_TOKEN},
        timedelta(minutes=settings.JWT_AUTH["ACCESS_TOKEN_LIFETIME_MINUTES"]),
    )
    refresh_token = create_token(
        {"sub": str(user_id), "type": REFRESH_TOKEN},
        timedelta(days=settings.JWT_AUTH["REFRESH_TOKEN_LIFETIME_DAYS"]),
    )
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


def decode_token(token: str, token_type: str) -> int:
    """
    Проверить токен и вернуть ID пользователя.

    Raises:
        AuthenticationAPIError: Токен просрочен, невалиден или другого типа
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_AUTH["SECRET_KEY"],
            algorithms=[settings.JWT_AUTH["ALGORITHM"]],
        )
    except JWTError:
        raise AuthenticationAPIError("Невалидный токен")

    if payload.get("type") != token_type:
        raise AuthenticationAPIError("Неверный тип токена")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationAPIError("Токен не содержит ID пользователя")
    return int(user_id)


class AuthBearer(HttpBearer):
    """
    Класс для проверки JWT токенов в заголовке Authorization.
    Используется как параметр auth для защиты эндпоинтов.
    """

    def authenticate(self, request, token):
        """
        Проверяет JWT токен и возвращает пользователя.

        Returns:
            User: объект пользователя если токен валидный

        Raises:
            AuthenticationAPIError: если токен просрочен или невалиден
        """
        user_id = decode_token(token, ACCESS_TOKEN)

        user = User.objects.filter(id=user_id, is_active=True).first()
        if user is None:
            raise AuthenticationAPIError("Пользователь не найден")
        return user


# Создаем экземпляр класса для использования в эндпоинтах
auth = AuthBearer()
