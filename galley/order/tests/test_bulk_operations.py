"""Тесты для массовых операций с заказами."""

import pytest
from django.core.exceptions import ValidationError
from order.exceptions import OrderNotFound
from order.models import Order
from status.constants import OrderStatusCode
from status.exceptions import Forbidden, UnknownStatus
from user.constants import RoleCode


@pytest.mark.django_db
class TestOrderBulkOperations:
    """Тесты для массовых операций с заказами."""

    def test_bulk_status_update(self, order_service, order_factory):
        """Тест массового обновления статуса заказов."""
        orders = [
            order_factory(status=OrderStatusCode.CATERER_CONFIRMED) for _ in range(3)
        ]

        updated = order_service.bulk_update_status(
            [order.pk for order in orders], "in_preparation", RoleCode.CSR
        )

        assert updated == 3
        statuses = Order.objects.filter(pk__in=[o.pk for o in orders]).values_list(
            "status", flat=True
        )
        assert set(statuses) == {OrderStatusCode.IN_PREPARATION.value}

    def test_bulk_status_update_is_all_or_nothing(self, order_service, order_factory):
        """Если один переход запрещен, не обновляется ни один заказ."""
        confirmed = order_factory(status=OrderStatusCode.CATERER_CONFIRMED)
        cancelled = order_factory(status=OrderStatusCode.CANCELLED)

        with pytest.raises(ValidationError) as exc_info:
            order_service.bulk_update_status(
                [confirmed.pk, cancelled.pk], "in_preparation", RoleCode.ADMIN
            )

        assert cancelled.order_number in str(exc_info.value)
        confirmed.refresh_from_db()
        cancelled.refresh_from_db()
        assert confirmed.status == OrderStatusCode.CATERER_CONFIRMED.value
        assert cancelled.status == OrderStatusCode.CANCELLED.value

    def test_bulk_delivered_sets_completed_at(self, order_service, order_factory):
        """Массовая доставка проставляет дату выполнения."""
        orders = [
            order_factory(status=OrderStatusCode.READY_FOR_DELIVERY) for _ in range(2)
        ]

        order_service.bulk_update_status(
            [order.pk for order in orders], "delivered", RoleCode.CSR
        )

        for order in orders:
            order.refresh_from_db()
            assert order.completed_at is not None

    def test_bulk_refuses_paid(self, order_service, order_factory):
        """Массовая оплата запрещена."""
        order = order_factory(status=OrderStatusCode.DELIVERED)

        with pytest.raises(Forbidden):
            order_service.bulk_update_status([order.pk], "paid", RoleCode.ADMIN)

        order.refresh_from_db()
        assert order.status == OrderStatusCode.DELIVERED.value

    def test_bulk_unknown_status(self, order_service, order_factory):
        order = order_factory()

        with pytest.raises(UnknownStatus):
            order_service.bulk_update_status([order.pk], "teleported", RoleCode.CSR)

    def test_bulk_missing_orders(self, order_service, order_factory):
        """Отсутствующие заказы перечисляются в ошибке."""
        order = order_factory(status=OrderStatusCode.CATERER_CONFIRMED)

        with pytest.raises(OrderNotFound) as exc_info:
            order_service.bulk_update_status(
                [order.pk, 987654], "in_preparation", RoleCode.CSR
            )

        assert "987654" in str(exc_info.value)
        order.refresh_from_db()
        assert order.status == OrderStatusCode.CATERER_CONFIRMED.value
