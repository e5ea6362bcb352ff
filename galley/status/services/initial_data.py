"""
Структура конфигурации статусов.

Этот модуль содержит конфигурацию статусов заказа: названия, описания,
порядок отображения и статус по умолчанию. Конфигурация является
единственным источником справочных данных о статусах, база данных
хранит только код текущего статуса заказа.

Формат конфигурации:
{
    "group_code": {                    # Код группы статусов
        "name": str,                   # Название группы статусов
        "model": str,                  # Путь к модели в формате "app.Model"
        "status": [                    # Список статусов
            {
                "code": str,           # Код статуса (значение OrderStatusCode)
                "name": str,           # Название статуса
                "description": str,    # Описание статуса
                "is_default": bool,    # Флаг статуса по умолчанию
                "order": int,          # Порядок следования
            },
            ...
        ]
    }
}

Примечания:
    - Каждый член OrderStatusCode обязан иметь запись в конфигурации,
      иначе при импорте модуля вызывается ImproperlyConfigured
    - Ровно один статус помечен как статус по умолчанию
    - Поле order задает логический порядок продвижения заказа,
      боковые статусы (order_changed, cancelled) стоят вне основной цепочки
"""

from django.core.exceptions import ImproperlyConfigured

from status.constants import OrderStatusCode, StatusGroupCode

ORDER_STATUS_CONFIG = {
    StatusGroupCode.ORDER.value: {
        "name": "Статусы заказа",
        "model": "order.Order",
        "status": [
            {
                "code": OrderStatusCode.AWAITING_QUOTE.value,
                "name": "Ожидает расчета",
                "description": "Заказ создан, ожидается расчет стоимости",
                "is_default": True,
                "order": 10,
            },
            {
                "code": OrderStatusCode.AWAITING_CLIENT_APPROVAL.value,
                "name": "Ожидает согласования клиентом",
                "description": "Смета отправлена клиенту на согласование",
                "order": 20,
            },
            {
                "code": OrderStatusCode.AWAITING_CATERER.value,
                "name": "Ожидает подтверждения кейтерера",
                "description": "Запрос отправлен кейтереру",
                "order": 30,
            },
            {
                "code": OrderStatusCode.ORDER_CHANGED.value,
                "name": "Заказ изменен",
                "description": "В заказ внесены изменения после подтверждения",
                "order": 35,
            },
            {
                "code": OrderStatusCode.CATERER_CONFIRMED.value,
                "name": "Подтвержден кейтерером",
                "description": "Кейтерер подтвердил заказ",
                "order": 40,
            },
            {
                "code": OrderStatusCode.IN_PREPARATION.value,
                "name": "Готовится",
                "description": "Заказ готовится",
                "order": 50,
            },
            {
                "code": OrderStatusCode.READY_FOR_DELIVERY.value,
                "name": "Готов к доставке",
                "description": "Заказ готов и ожидает доставки",
                "order": 60,
            },
            {
                "code": OrderStatusCode.DELIVERED.value,
                "name": "Доставлен",
                "description": "Заказ доставлен клиенту",
                "order": 70,
            },
            {
                "code": OrderStatusCode.PAID.value,
                "name": "Оплачен",
                "description": "Заказ полностью оплачен",
                "order": 80,
            },
            {
                "code": OrderStatusCode.CANCELLED.value,
                "name": "Отменен",
                "description": "Заказ отменен",
                "order": 90,
            },
        ],
    }
}


def _check_config(config):
    """Проверить полноту и корректность конфигурации статусов."""
    for group_code, group in config.items():
        codes = [status["code"] for status in group["status"]]
        if len(codes) != len(set(codes)):
            raise ImproperlyConfigured(
                f"Дублирующиеся коды статусов в группе {group_code}"
            )

        missing = {code.value for code in OrderStatusCode} - set(codes)
        if missing:
            raise ImproperlyConfigured(
                f"Статусы без конфигурации в группе {group_code}: "
                f"{', '.join(sorted(missing))}"
            )

        defaults = [status for status in group["status"] if status.get("is_default")]
        if len(defaults) != 1:
            raise ImproperlyConfigured(
                f"В группе {group_code} должен быть ровно один статус по умолчанию"
            )


_check_config(ORDER_STATUS_CONFIG)
