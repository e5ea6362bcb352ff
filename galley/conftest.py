"""
Общие фикстуры тестов проекта.

Содержит фикстуры для:
- Создания сотрудников с ролями ADMIN и CSR
- Создания справочных записей (клиент, кейтереры, аэропорт)
- Создания заказов в нужном статусе
- Отправки писем через locmem backend
"""

import itertools
from datetime import date
from decimal import Decimal

import pytest
from order.models import Airport, Caterer, Client, Order, OrderItem
from order.services.order_service import OrderService
from status.constants import OrderStatusCode
from user.constants import RoleCode
from user.services import UserService


@pytest.fixture
def admin_user(db):
    """Администратор."""
    return UserService.create_user(
        username="admin_user",
        email="admin@example.com",
        password="Sup3r-secret-pass",
        role=RoleCode.ADMIN.value,
    )


@pytest.fixture
def csr_user(db):
    """Сотрудник поддержки."""
    return UserService.create_user(
        username="csr_user",
        email="csr@example.com",
        password="Sup3r-secret-pass",
        role=RoleCode.CSR.value,
    )


@pytest.fixture
def client_party(db):
    """Клиент с адресом электронной почты."""
    return Client.objects.create(
        full_name="John Smith",
        company_name="Smith Aviation",
        email="john@smith-aviation.com",
        contact_number="+15550001111",
    )


@pytest.fixture
def caterer(db):
    """Кейтерер в часовом поясе UTC."""
    return Caterer.objects.create(
        caterer_name="Sky Kitchen",
        caterer_number="SK-01",
        caterer_email="orders@skykitchen.com",
        airport_code_iata="LTN",
        time_zone="UTC",
    )


@pytest.fixture
def caterer_new_york(db):
    """Кейтерер в часовом поясе America/New_York."""
    return Caterer.objects.create(
        caterer_name="Teterboro Catering",
        caterer_number="TC-07",
        caterer_email="dispatch@teb-catering.com",
        airport_code_iata="TEB",
        time_zone="America/New_York",
    )


@pytest.fixture
def airport(db):
    """Аэропорт с кодами IATA и ICAO."""
    return Airport.objects.create(
        airport_name="London Luton",
        airport_code_iata="LTN",
        airport_code_icao="EGGW",
    )


@pytest.fixture
def order_factory(db, client_party, caterer, airport):
    """
    Фабрика заказов.

    Создает заказ напрямую в базе в нужном статусе, минуя валидатор переходов.
    """
    numbers = itertools.count(1)

    def create_order(status=OrderStatusCode.AWAITING_QUOTE, **kwargs):
        number = next(numbers)
        items = kwargs.pop("items", [("Chicken Caesar Salad", "2", Decimal("45.00"))])
        fields = {
            "order_number": f"TEST{number:04d}",
            "client": client_party,
            "caterer": caterer,
            "airport": airport,
            "client_name": client_party.full_name,
            "caterer_name": caterer.caterer_name,
            "airport_name": airport.airport_name,
            "delivery_date": date(2026, 7, 15),
            "delivery_time": "15:00",
            "delivery_fee": Decimal("25.00"),
        }
        fields.update(kwargs)
        order = Order.objects.create(status=OrderStatusCode(status).value, **fields)
        for index, (name, portion, price) in enumerate(items):
            OrderItem.objects.create(
                order=order,
                item_name=name,
                portion_size=portion,
                price=price,
                sort_order=index,
            )
        order.recalculate_totals()
        order.save(update_fields=["subtotal", "total"])
        return order

    return create_order


@pytest.fixture
def order_service(db):
    """Сервис заказов с настройками по умолчанию."""
    return OrderService()


@pytest.fixture
def email_settings(settings):
    """Почта в памяти и фиксированное название в теме писем."""
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.EMAIL_SUBJECT_BRAND = "Galley"
    settings.DEFAULT_FROM_EMAIL = "orders@galley.local"
    return settings
