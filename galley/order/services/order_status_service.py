"""
Сервис для управления статусами заказов.

Этот модуль предоставляет функциональность для управления жизненным циклом заказов
через изменение их статусов. Все изменения статуса (запросы пользователей,
планировщик, отправка писем) проходят через этот сервис и один и тот же
валидатор переходов.

Основные компоненты:
    - OrderStatusService: Основной класс для работы со статусами заказов
    - change_status: Проверка и сохранение нового статуса
    - get_initial_status: Статус нового заказа
    - _validate_status_change: Валидация перехода под блокировкой строки

Процесс изменения статуса:
    1. Блокировка строки заказа (select_for_update)
    2. Проверка перехода валидатором с учетом роли исполнителя
    3. Сохранение статуса (и даты выполнения для "delivered")
    4. Логирование изменения

Правила переходов:
    - Новый заказ получает статус по умолчанию
    - Статус "paid" устанавливается только операцией оплаты (allow_paid=True)
    - Остальные правила описаны в status.services.transition_validator

Примеры использования:
    service = OrderStatusService()

    # Обычное изменение статуса
    service.change_status(order_id, "in_preparation", RoleCode.CSR)

    # Оплата (только администратор, только из "delivered")
    service.change_status(order_id, "paid", RoleCode.ADMIN, allow_paid=True)

Примечания:
    - Все изменения статусов логируются
    - Недопустимые переходы вызывают InvalidTransition, UnknownStatus или Forbidden
    - Одновременные изменения одного заказа выполняются последовательно
      благодаря блокировке строки
"""

import logging

from django.db import transaction
from status.constants import OrderStatusCode
from status.exceptions import Forbidden
from status.services.constants import get_default_status
from status.services.transition_validator import StatusTransitionValidator

from ..exceptions import OrderNotFound
from .order_repository import OrderRepository

logger = logging.getLogger(__name__)


class OrderStatusService:
    """
    Сервис для работы со статусами заказов.

    Attributes:
        repository: Хранилище заказов
        validator: Валидатор переходов между статусами
    """

    def __init__(self, repository=None, validator=None):
        """Инициализация сервиса."""
        self.repository = repository or OrderRepository()
        self.validator = validator or StatusTransitionValidator()

    @staticmethod
    def get_initial_status() -> str:
        """Код статуса для нового заказа."""
        return get_default_status()

    def change_status(self, order_id, new_status, actor_role, allow_paid=False):
        """
        Изменить статус заказа.

        Args:
            order_id: Идентификатор заказа
            new_status: Код нового статуса
            actor_role: Роль исполнителя
            allow_paid: Разрешить статус "paid" (только для операции оплаты)

        Returns:
            Order: Заказ с новым статусом

        Raises:
            Forbidden: Статус "paid" вне операции оплаты или недостаточно прав
            InvalidTransition: Переход запрещен
            UnknownStatus: Неизвестный статус
            OrderNotFound: Заказ не найден
        """
        if OrderStatusCode.parse(new_status) == OrderStatusCode.PAID and not allow_paid:
            raise Forbidden(
                "Статус 'paid' устанавливается только операцией оплаты заказа"
            )

        with transaction.atomic():
            order = self.repository.find_for_update(order_id)
            if order is None:
                raise OrderNotFound(f"Заказ {order_id} не найден")

            old_status = order.status
            status = self._validate_status_change(order, new_status, actor_role)
            updated = self.repository.update_status(order.pk, status)

        logger.info(
            "Статус заказа %s изменен: '%s' -> '%s' (роль: %s)",
            updated.order_number,
            old_status,
            status,
            actor_role,
        )
        return updated

    def _validate_status_change(self, order, new_status, actor_role):
        """
        Валидация возможности перехода заказа в новый статус.

        Raises:
            InvalidTransition, UnknownStatus, Forbidden: Если переход недопустим
        """
        decision = self.validator.check(order.status, new_status, actor_role)
        if not decision.allowed:
            logger.warning(
                "Отклонено изменение статуса заказа %s: %s",
                order.order_number,
                decision.reason,
            )
            decision.raise_for_error()
        return OrderStatusCode(new_status)
