"""Константы для работы со статусами."""

from enum import Enum


class OrderStatusCode(str, Enum):
    """Коды статусов заказов."""

    AWAITING_QUOTE = "awaiting_quote"
    AWAITING_CLIENT_APPROVAL = "awaiting_client_approval"
    AWAITING_CATERER = "awaiting_caterer"
    CATERER_CONFIRMED = "caterer_confirmed"
    IN_PREPARATION = "in_preparation"
    READY_FOR_DELIVERY = "ready_for_delivery"
    DELIVERED = "delivered"
    PAID = "paid"
    CANCELLED = "cancelled"
    ORDER_CHANGED = "order_changed"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value) -> "OrderStatusCode | None":
        """Вернуть член перечисления по коду или None для неизвестного кода."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class StatusGroupCode(str, Enum):
    """Коды групп статусов."""

    ORDER = "ORDER_STATUS_CONFIG"

    def __str__(self):
        return self.value


# Статусы, из которых нельзя выйти (кроме повторной установки того же статуса)
ABSORBING_STATUSES = frozenset(
    {OrderStatusCode.DELIVERED, OrderStatusCode.CANCELLED, OrderStatusCode.PAID}
)

# Единственный статус, из которого разрешен переход в "paid"
PAID_SOURCE_STATUSES = frozenset({OrderStatusCode.DELIVERED, OrderStatusCode.PAID})

# Статусы, которые планировщик продвигает автоматически
SCHEDULER_ELIGIBLE_STATUSES = (
    OrderStatusCode.CATERER_CONFIRMED,
    OrderStatusCode.IN_PREPARATION,
)
