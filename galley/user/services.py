"""
Сервисы для приложения user.

Этот модуль содержит бизнес-логику для работы с пользователями,
включая создание новых сотрудников и назначение им ролей.

Основные компоненты:
    - UserService: Сервис для работы с пользователями
    - create_user: Метод создания нового пользователя с ролью

Процесс создания пользователя:
    1. Валидация пароля через django password validators
    2. Проверка обязательных полей (username, email)
    3. Проверка роли (SYSTEM пользователям не назначается)
    4. Создание пользователя в транзакции

Примеры использования:
    user = UserService.create_user(
        username="john_doe",
        email="john@example.com",
        password="secure_password",
        role=RoleCode.ADMIN,
    )

Примечания:
    - Все операции выполняются в транзакции
    - При ошибке валидации вызывается ValidationError
"""

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction

from user.constants import USER_ROLE_CHOICES, RoleCode
from user.models import User


class UserService:
    """Сервис для работы с пользователями."""

    @staticmethod
    @transaction.atomic
    def create_user(
        username: str,
        email: str,
        password: str,
        role: str = RoleCode.CSR.value,
        **extra_fields,
    ) -> User:
        """
        Создает нового пользователя.

        Args:
            username: Имя пользователя
            email: Email пользователя
            password: Пароль пользователя
            role: Роль пользователя (ADMIN или CSR)
            **extra_fields: Дополнительные поля пользователя

        Returns:
            User: Созданный пользователь

        Raises:
            ValidationError: Если данные пользователя не прошли валидацию
        """
        try:
            validate_password(password)
        except ValidationError as e:
            raise ValidationError({"password": e.messages})

        if not username:
            raise ValidationError({"username": "Имя пользователя обязательно"})
        if not email:
            raise ValidationError({"email": "Email обязателен"})

        try:
            role = RoleCode(role).value
        except ValueError:
            raise ValidationError({"role": f"Неизвестная роль: {role}"})
        if role not in dict(USER_ROLE_CHOICES):
            raise ValidationError({"role": f"Недопустимая роль: {role}"})

        extra_fields["email"] = email
        extra_fields["role"] = role

        try:
            user = User.objects.create_user(
                username=username, password=password, **extra_fields
            )
            user.full_clean()
            return user
        except ValueError as e:
            raise ValidationError(str(e))
