from django.contrib.auth import authenticate
from django.contrib.auth import get_user_model
from ninja import Router

from ..exceptions import AuthenticationAPIError
from .jwt import REFRESH_TOKEN, auth, create_tokens, decode_token
from .schemas import AuthIn, RefreshIn, TokenOut, UserOut

router = Router(tags=["auth"])

User = get_user_model()


@router.post(
    "/token",
    response=TokenOut,
    summary="Получить токен авторизации",
    description="Авторизация сотрудника и получение JWT токенов",
)
def login(request, auth_data: AuthIn):
    """Авторизация сотрудника и получение токенов."""
    user = authenticate(username=auth_data.username, password=auth_data.password)
    if not user:
        raise AuthenticationAPIError("Неверные учетные данные")

    return create_tokens(user.id)


@router.post(
    "/token/refresh",
    response=TokenOut,
    summary="Обновление токенов",
    description="Обновление access токена с помощью refresh токена",
)
def refresh_token(request, refresh_data: RefreshIn):
    """Обновление access токена с помощью refresh токена."""
    user_id = decode_token(refresh_data.refresh_token, REFRESH_TOKEN)
    if not User.objects.filter(id=user_id, is_active=True).exists():
        raise AuthenticationAPIError("Пользователь не найден")
    return create_tokens(user_id)


@router.get(
    "/users/me",
    response=UserOut,
    auth=auth,
    summary="Профиль сотрудника",
    description="Получение данных текущего авторизованного сотрудника",
)
def get_current_user(request):
    """Получение данных текущего сотрудника"""
    return request.auth
