from ninja import ModelSchema, Schema, Field
from user.models import User


class UserOut(ModelSchema):
    """Схема для отображения данных сотрудника."""

    is_elevated: bool = Field(..., description="Повышенные права (администратор)")

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "role",
            "phone",
        ]


class TokenOut(Schema):
    """Схема для токенов."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthIn(Schema):
    """Схема для авторизации."""

    username: str
    password: str


class RefreshIn(Schema):
    """Схема для обновления токена."""

    refresh_token: str
