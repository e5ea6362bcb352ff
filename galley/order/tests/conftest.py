"""Фикстуры для тестов заказов и планировщика."""

from datetime import datetime, timezone as dt_timezone

import pytest
from order.services.delivery_clock import DeliveryClock
from order.services.order_scheduler import OrderScheduler

# Момент "сейчас" для тестов планировщика
SCAN_NOW = datetime(2026, 7, 15, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def clock():
    """Часы доставки."""
    return DeliveryClock()


@pytest.fixture
def scan_now():
    """Фиксированный момент просмотра заказов."""
    return SCAN_NOW


@pytest.fixture
def scheduler(order_service):
    """Планировщик с порогами 4 и 1 час."""
    return OrderScheduler(
        order_service,
        interval_seconds=3600,
        in_preparation_hours=4,
        ready_for_delivery_hours=1,
        scan_limit=500,
    )
