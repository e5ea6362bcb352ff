"""Константы приложения order."""

# Префикс и разрядность автоматически назначаемого номера заказа: KA000001
ORDER_NUMBER_PREFIX = "KA"
ORDER_NUMBER_DIGITS = 6

ORDER_PRIORITY_CHOICES = [
    ("low", "Низкий"),
    ("normal", "Обычный"),
    ("high", "Высокий"),
    ("urgent", "Срочный"),
]

PAYMENT_METHOD_CHOICES = [
    ("card", "Карта"),
    ("ACH", "ACH"),
]

ORDER_TYPE_CHOICES = [
    ("inflight", "Inflight order"),
    ("qe_serv_hub", "QE Serv Hub Order"),
    ("restaurant_pickup", "Restaurant Pickup Order"),
]

# Сборы, входящие в итоговую сумму заказа
FEE_FIELDS = (
    "delivery_fee",
    "service_charge",
    "coordination_fee",
    "airport_fee",
    "fbo_fee",
    "shopping_fee",
    "restaurant_pickup_fee",
    "airport_pickup_fee",
)
