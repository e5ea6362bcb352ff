"""Сервис для массовых операций с заказами."""

import logging

from status.services.transition_validator import StatusTransitionValidator

from ..exceptions import OrderNotFound
from .order_repository import OrderRepository

logger = logging.getLogger(__name__)


class OrderBulkService:
    """Сервис для массовых операций с заказами."""

    def __init__(self, repository=None, validator=None):
        """Инициализация сервиса."""
        self.repository = repository or OrderRepository()
        self.validator = validator or StatusTransitionValidator()

    def bulk_update_status(self, order_ids, new_status, actor_role):
        """
        Массовое обновление статуса заказов.

        Выполняется по принципу "все или ничего": при запрете перехода
        хотя бы для одного заказа не обновляется ни один.

        Args:
            order_ids: Идентификаторы заказов
            new_status: Новый статус
            actor_role: Роль исполнителя

        Returns:
            int: Количество обновленных заказов

        Raises:
            OrderNotFound: Если часть заказов не найдена
            Forbidden: Запрошен статус "paid"
            ValidationError: Если хотя бы один заказ не может быть обновлен
        """
        order_ids = list(dict.fromkeys(order_ids))
        queryset = self.repository.find_by_ids(order_ids)

        found = set(queryset.values_list("pk", flat=True))
        missing = [order_id for order_id in order_ids if order_id not in found]
        if missing:
            raise OrderNotFound(
                f"Заказы не найдены: {', '.join(str(order_id) for order_id in missing)}"
            )

        return queryset.bulk_update_status(new_status, actor_role, self.validator)
