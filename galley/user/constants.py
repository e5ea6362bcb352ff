"""Роли пользователей и участников процессов."""

from enum import Enum


class RoleCode(str, Enum):
    """Коды ролей участников.

    ADMIN - повышенные права (финансовые операции, финальные счета).
    CSR - сотрудник поддержки, ограниченные права.
    SYSTEM - внутренний исполнитель (планировщик), пользователям не назначается.
    """

    ADMIN = "ADMIN"
    CSR = "CSR"
    SYSTEM = "SYSTEM"

    def __str__(self):
        return self.value


# Роли, которые можно назначить пользователю
USER_ROLE_CHOICES = [
    (RoleCode.ADMIN.value, "Администратор"),
    (RoleCode.CSR.value, "Сотрудник поддержки"),
]

ELEVATED_ROLES = frozenset({RoleCode.ADMIN})


def is_elevated(role) -> bool:
    """Проверяет, относится ли роль к повышенным правам."""
    if role is None:
        return False
    try:
        return RoleCode(role) in ELEVATED_ROLES
    except ValueError:
        return False
