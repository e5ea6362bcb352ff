"""
Хранилище заказов.

Единственная точка доступа сервисов к таблицам заказов. Все методы
возвращают None для отсутствующих записей и пропускают DatabaseError
наружу, перевод в DependencyUnavailable выполняет OrderService.

Основные компоненты:
    - OrderRepository: Методы чтения и записи заказов через Django ORM
    - find_eligible_for_scan: Заказы-кандидаты для планировщика
    - update_status: Атомарное обновление статуса одной записи
    - increment_revision: Атомарное увеличение счетчика ревизий
    - next_order_number: Следующий номер заказа вида KA000001

Примечания:
    - Обновление статуса выполняется под select_for_update
    - Одновременные изменения разрешаются по правилу "последняя запись побеждает"
"""

import logging
import re

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from status.constants import OrderStatusCode

from ..constants import ORDER_NUMBER_DIGITS, ORDER_NUMBER_PREFIX
from ..models import Order, OrderItem

logger = logging.getLogger(__name__)

ORDER_NUMBER_PATTERN = re.compile(
    rf"^{ORDER_NUMBER_PREFIX}(?P<number>\d{{{ORDER_NUMBER_DIGITS},}})$"
)

ITEM_FIELDS = (
    "item_name",
    "item_description",
    "portion_size",
    "portion_serving",
    "price",
    "category",
    "packaging",
)


class OrderRepository:
    """Хранилище заказов на Django ORM."""

    def _queryset(self):
        return Order.objects.select_related("client", "caterer", "airport", "fbo")

    def find_by_id(self, order_id):
        """Найти заказ по идентификатору."""
        return self._queryset().filter(pk=order_id).first()

    def find_for_update(self, order_id):
        """Найти заказ и заблокировать строку до конца транзакции."""
        return Order.objects.select_for_update().filter(pk=order_id).first()

    def find_by_ids(self, order_ids):
        """Найти заказы по списку идентификаторов."""
        return Order.objects.filter(pk__in=order_ids)

    def find_eligible_for_scan(self, statuses, date_from, date_to, limit):
        """
        Заказы для планировщика.

        Для каждого статуса отдельно выбирается не более limit заказов
        с датой доставки в диапазоне [date_from, date_to].
        """
        orders = []
        for status in statuses:
            orders.extend(
                Order.objects.eligible_for_scan([status], date_from, date_to).order_by(
                    "delivery_date", "id"
                )[:limit]
            )
        return orders

    def search(self, status=None, date_from=None, date_to=None, search=None):
        """Список заказов с фильтрами."""
        queryset = self._queryset()
        if status:
            queryset = queryset.filter(status=OrderStatusCode(status).value)
        if date_from:
            queryset = queryset.filter(delivery_date__gte=date_from)
        if date_to:
            queryset = queryset.filter(delivery_date__lte=date_to)
        return queryset.search(search)

    def update_status(self, order_id, status):
        """
        Обновить статус заказа.

        Returns:
            Order | None: Обновленный заказ или None, если заказ не найден
        """
        status = OrderStatusCode(status)
        with transaction.atomic():
            order = Order.objects.select_for_update().filter(pk=order_id).first()
            if order is None:
                return None

            order.status = status.value
            update_fields = ["status", "updated_at"]
            if status == OrderStatusCode.DELIVERED:
                order.completed_at = timezone.now()
                update_fields.append("completed_at")
            if status == OrderStatusCode.PAID:
                order.is_paid = True
                update_fields.append("is_paid")
            order.save(update_fields=update_fields)

        logger.debug("Статус заказа %s обновлен на '%s'", order.order_number, status)
        return self.find_by_id(order_id)

    @transaction.atomic
    def create(self, data, order_number, items):
        """Создать заказ вместе с позициями и пересчитать итоги."""
        order = Order(order_number=order_number, **data)
        order.save()
        self._replace_items(order, items)
        order.recalculate_totals()
        order.save(update_fields=["subtotal", "total"])
        return self.find_by_id(order.pk)

    @transaction.atomic
    def update(self, order_id, fields, items=None):
        """
        Обновить поля заказа (и позиции, если переданы).

        Returns:
            Order | None: Обновленный заказ или None, если заказ не найден
        """
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            return None

        for name, value in fields.items():
            setattr(order, name, value)
        order.save()

        if items is not None:
            self._replace_items(order, items)
        order.recalculate_totals()
        order.save(update_fields=["subtotal", "total"])
        return self.find_by_id(order_id)

    def increment_revision(self, order_id):
        """Увеличить счетчик ревизий заказа на единицу."""
        updated = Order.objects.filter(pk=order_id).update(
            revision_count=F("revision_count") + 1
        )
        return bool(updated)

    def order_number_exists(self, order_number, exclude_id=None):
        """Проверить, занят ли номер заказа."""
        queryset = Order.objects.filter(order_number=order_number)
        if exclude_id:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset.exists()

    def next_order_number(self):
        """Следующий свободный номер заказа вида KA000001."""
        numbers = Order.objects.filter(
            order_number__startswith=ORDER_NUMBER_PREFIX
        ).values_list("order_number", flat=True)

        highest = 0
        for number in numbers:
            match = ORDER_NUMBER_PATTERN.match(number)
            if match:
                highest = max(highest, int(match["number"]))
        return f"{ORDER_NUMBER_PREFIX}{highest + 1:0{ORDER_NUMBER_DIGITS}d}"

    def _replace_items(self, order, items):
        order.items.all().delete()
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    sort_order=index,
                    **{field: item[field] for field in ITEM_FIELDS if field in item},
                )
                for index, item in enumerate(items)
            ]
        )
