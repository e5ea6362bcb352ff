"""
Проверка переходов между статусами заказа.

Модуль реализует правила жизненного цикла заказа в виде списка запретов:
любой переход разрешен, если его не запрещает одно из правил ниже.
Проверка не имеет побочных эффектов и не обращается к базе данных.

Правила (проверяются по порядку, срабатывает первое):
    1. Неизвестный запрошенный или текущий статус -> UnknownStatus
    2. Статус "paid" запрашивает исполнитель без повышенных прав -> Forbidden
    3. Статус "paid" запрошен не из "delivered" -> InvalidTransition
    4. Выход из поглощающего статуса (delivered, cancelled, paid) -> InvalidTransition
    5. Иначе переход разрешен, повторная установка того же статуса допустима

Примеры использования:
    validator = StatusTransitionValidator()

    decision = validator.check("delivered", "paid", RoleCode.ADMIN)
    if decision.allowed:
        ...

    # Или с исключением
    validator.validate("cancelled", "in_preparation", RoleCode.CSR)

Примечания:
    - Ошибки валидации не повторяются, повторная попытка даст тот же результат
    - Роль исполнителя сравнивается с набором повышенных ролей из user.constants
"""

from dataclasses import dataclass
from typing import Optional, Type

from status.constants import (
    ABSORBING_STATUSES,
    PAID_SOURCE_STATUSES,
    OrderStatusCode,
)
from status.exceptions import Forbidden, InvalidTransition, UnknownStatus
from user.constants import is_elevated


@dataclass(frozen=True)
class TransitionDecision:
    """Результат проверки перехода."""

    allowed: bool
    reason: str = ""
    error: Optional[Type[Exception]] = None

    def raise_for_error(self):
        """Вызвать исключение, если переход запрещен."""
        if not self.allowed:
            raise self.error(self.reason)


class StatusTransitionValidator:
    """Валидатор переходов между статусами заказа."""

    def check(self, current, requested, actor_role=None) -> TransitionDecision:
        """
        Проверить возможность перехода.

        Args:
            current: Текущий код статуса заказа
            requested: Запрошенный код статуса
            actor_role: Роль исполнителя (RoleCode или строка)

        Returns:
            TransitionDecision: Решение с причиной отказа и типом ошибки
        """
        requested_status = OrderStatusCode.parse(requested)
        if requested_status is None:
            return TransitionDecision(
                False, f"Неизвестный статус: {requested}", UnknownStatus
            )

        current_status = OrderStatusCode.parse(current)
        if current_status is None:
            return TransitionDecision(
                False, f"Неизвестный текущий статус заказа: {current}", UnknownStatus
            )

        if requested_status == OrderStatusCode.PAID:
            if not is_elevated(actor_role):
                return TransitionDecision(
                    False,
                    "Отметить заказ оплаченным может только администратор "
                    f"(текущая роль: {actor_role or 'не указана'})",
                    Forbidden,
                )
            if current_status not in PAID_SOURCE_STATUSES:
                return TransitionDecision(
                    False,
                    f"Переход из статуса '{current_status}' в '{requested_status}' "
                    "недопустим: оплаченным может стать только доставленный заказ",
                    InvalidTransition,
                )

        if current_status in ABSORBING_STATUSES and requested_status != current_status:
            if not (
                current_status == OrderStatusCode.DELIVERED
                and requested_status == OrderStatusCode.PAID
            ):
                return TransitionDecision(
                    False,
                    f"Переход из статуса '{current_status}' в '{requested_status}' "
                    "недопустим: статус является конечным",
                    InvalidTransition,
                )

        return TransitionDecision(True)

    def validate(self, current, requested, actor_role=None) -> OrderStatusCode:
        """
        Проверить переход и вызвать исключение при запрете.

        Returns:
            OrderStatusCode: Запрошенный статус в виде члена перечисления

        Raises:
            UnknownStatus: Неизвестный код статуса
            Forbidden: Недостаточно прав
            InvalidTransition: Переход запрещен правилами жизненного цикла
        """
        self.check(current, requested, actor_role).raise_for_error()
        return OrderStatusCode(requested)
