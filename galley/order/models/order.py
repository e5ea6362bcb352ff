"""Модели для работы с заказами.

Этот модуль содержит модели для:
- Заказов
- Позиций заказа
"""

import logging
from decimal import Decimal

from django.db import models
from status.constants import OrderStatusCode
from status.services.constants import get_default_status, get_status_choices

from ..constants import (
    FEE_FIELDS,
    ORDER_PRIORITY_CHOICES,
    ORDER_TYPE_CHOICES,
    PAYMENT_METHOD_CHOICES,
)
from .parties import Airport, Caterer, Client, Fbo
from .querysets import OrderQuerySet

logger = logging.getLogger(__name__)


def _money_field(verbose_name):
    return models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        verbose_name=verbose_name,
    )


class Order(models.Model):
    """Модель заказа."""

    order_number = models.CharField(
        "Номер заказа",
        max_length=50,
        unique=True,
        db_index=True,
    )
    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="Клиент",
    )
    caterer = models.ForeignKey(
        Caterer,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="Кейтерер",
    )
    airport = models.ForeignKey(
        Airport,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="Аэропорт",
    )
    fbo = models.ForeignKey(
        Fbo,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="FBO",
    )
    client_name = models.CharField("Имя клиента", max_length=255)
    caterer_name = models.CharField("Кейтерер (текст)", max_length=255)
    airport_name = models.CharField("Аэропорт (текст)", max_length=255)
    aircraft_tail_number = models.CharField(
        "Бортовой номер", max_length=20, blank=True, default=""
    )
    delivery_date = models.DateField("Дата доставки", db_index=True)
    # Хранится как введено (HH:MM с возможной пометкой L), разбирается DeliveryClock
    delivery_time = models.CharField("Время доставки", max_length=10)
    order_priority = models.CharField(
        "Приоритет", max_length=10, choices=ORDER_PRIORITY_CHOICES, default="normal"
    )
    payment_method = models.CharField(
        "Способ оплаты", max_length=10, choices=PAYMENT_METHOD_CHOICES, default="card"
    )
    order_type = models.CharField(
        "Тип заказа", max_length=30, choices=ORDER_TYPE_CHOICES, default="inflight"
    )
    status = models.CharField(
        "Статус заказа",
        max_length=32,
        choices=get_status_choices(),
        default=get_default_status(),
        db_index=True,
    )
    is_paid = models.BooleanField("Оплачен", default=False)
    description = models.TextField("Описание", blank=True, default="")
    notes = models.TextField("Примечания", blank=True, default="")
    reheating_instructions = models.TextField(
        "Инструкции по разогреву", blank=True, default=""
    )
    packaging_instructions = models.TextField(
        "Инструкции по упаковке", blank=True, default=""
    )
    dietary_restrictions = models.TextField(
        "Диетические ограничения", blank=True, default=""
    )
    delivery_fee = _money_field("Стоимость доставки")
    service_charge = _money_field("Сервисный сбор")
    coordination_fee = _money_field("Сбор за координацию")
    airport_fee = _money_field("Аэропортовый сбор")
    fbo_fee = _money_field("Сбор FBO")
    shopping_fee = _money_field("Сбор за покупки")
    restaurant_pickup_fee = _money_field("Сбор за забор из ресторана")
    airport_pickup_fee = _money_field("Сбор за забор из аэропорта")
    subtotal = _money_field("Сумма позиций")
    total = _money_field("Итого")
    revision_count = models.PositiveIntegerField("Номер ревизии", default=0)
    created_at = models.DateTimeField("Дата создания", auto_now_add=True)
    updated_at = models.DateTimeField("Дата обновления", auto_now=True)
    completed_at = models.DateTimeField("Дата выполнения", null=True, blank=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        """Метаданные модели."""

        verbose_name = "Заказ"
        verbose_name_plural = "Заказы"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["status", "delivery_date"], name="order_status_delivery_idx"
            ),
        ]

    def __str__(self):
        """Строковое представление модели."""
        return f"Заказ №{self.order_number} ({self.status})"

    @property
    def status_code(self):
        """Статус заказа как член перечисления или None для неизвестного кода."""
        return OrderStatusCode.parse(self.status)

    @property
    def airport_code(self) -> str:
        """Код аэропорта доставки: IATA, иначе ICAO, иначе пустая строка."""
        return self.airport.code if self.airport_id else ""

    @property
    def caterer_time_zone(self):
        """Часовой пояс кейтерера или None."""
        if self.caterer_id and self.caterer.time_zone:
            return self.caterer.time_zone
        return None

    def recalculate_totals(self):
        """Пересчитать сумму позиций и итог заказа."""
        two_places = Decimal("0.00")
        subtotal = sum(
            (Decimal(item.price) for item in self.items.all()), Decimal("0.00")
        )
        fees = sum(
            (Decimal(getattr(self, field) or 0) for field in FEE_FIELDS),
            Decimal("0.00"),
        )
        self.subtotal = subtotal.quantize(two_places)
        self.total = (subtotal + fees).quantize(two_places)
        return self.subtotal, self.total

    def save(self, *args, **kwargs) -> None:
        """Сохранение заказа."""
        is_new = not self.pk

        if is_new:
            logger.info(
                "Создание нового заказа: %s (клиент: %s, кейтерер: %s)",
                self.order_number,
                self.client_name,
                self.caterer_name,
            )

        try:
            result = super().save(*args, **kwargs)
            if is_new:
                logger.info(
                    "Заказ %s успешно создан (ID: %d)",
                    self.order_number,
                    self.pk,
                )
            return result
        except Exception as e:
            logger.error(
                "Ошибка при сохранении заказа %s: %s",
                self.order_number,
                str(e),
                exc_info=True,
            )
            raise


class OrderItem(models.Model):
    """Позиция заказа."""

    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="items", verbose_name="Заказ"
    )
    item_name = models.CharField("Название", max_length=255)
    item_description = models.TextField("Описание", blank=True, default="")
    portion_size = models.CharField("Количество", max_length=50)
    portion_serving = models.CharField("Размер порции", max_length=50, blank=True, default="")
    price = models.DecimalField("Цена", max_digits=10, decimal_places=2)
    category = models.CharField("Категория", max_length=100, blank=True, default="")
    packaging = models.CharField("Упаковка", max_length=100, blank=True, default="")
    sort_order = models.PositiveIntegerField("Порядок", default=0)

    class Meta:
        verbose_name = "Позиция заказа"
        verbose_name_plural = "Позиции заказа"
        ordering = ["sort_order", "id"]

    def __str__(self):
        return f"{self.item_name} x {self.portion_size}"
