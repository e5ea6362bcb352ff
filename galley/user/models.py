"""Модели для приложения user."""

from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models

from .constants import ELEVATED_ROLES, USER_ROLE_CHOICES, RoleCode


class PhoneNumberValidator(RegexValidator):
    """Валидатор для номера телефона."""

    regex = r"^\+?1?\d{9,15}$"
    message = 'Номер телефона должен быть в формате: "+999999999". До 15 цифр.'


class User(AbstractUser):
    """Модель пользователя (сотрудника)."""

    role = models.CharField(
        max_length=20,
        choices=USER_ROLE_CHOICES,
        default=RoleCode.CSR.value,
        verbose_name="Роль",
        db_index=True,
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        verbose_name="Телефон",
        validators=[PhoneNumberValidator()],
    )
    created_at = models.DateTimeField(
        auto_now_add=True, verbose_name="Дата регистрации"
    )
    email = models.EmailField(
        "email address",
        unique=True,
        error_messages={
            "unique": "Пользователь с таким email уже существует.",
        },
    )

    class Meta:
        """Мета-класс для модели User."""

        verbose_name = "Пользователь"
        verbose_name_plural = "Пользователи"

    def __str__(self):
        """Строковое представление пользователя."""
        return self.username

    @property
    def is_elevated(self) -> bool:
        """Есть ли у пользователя повышенные права."""
        return RoleCode(self.role) in ELEVATED_ROLES
