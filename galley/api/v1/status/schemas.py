from typing import Optional

from ninja import Schema, Field


class StatusOut(Schema):
    """Схема для отображения статуса."""

    code: str = Field(..., description="Код статуса")
    name: str = Field(..., description="Название статуса")
    description: str = Field("", description="Описание статуса")
    is_default: bool = Field(False, description="Статус по умолчанию")
    is_final: bool = Field(False, description="Конечный статус")
    order: int = Field(..., description="Порядок сортировки")


class StatusTransitionCheck(Schema):
    """Схема для проверки возможности перехода между статусами."""

    from_status: str = Field(..., description="Исходный статус")
    to_status: str = Field(..., description="Целевой статус")
    actor_role: Optional[str] = Field(
        None, description="Роль исполнителя (по умолчанию роль текущего сотрудника)"
    )


class StatusTransitionOut(Schema):
    """Результат проверки перехода."""

    allowed: bool
    reason: str = ""
    error: Optional[str] = None
