"""
Выбор варианта документа по заказу.

Вариант документа (с ценами или без) и его оформление (для клиента или
для кейтерера) определяются статусом заказа и получателем. Выбор
является чистой функцией: одинаковые входные данные всегда дают
одинаковый результат.

Таблицы:
    - Кейтерер: всегда без цен, оформление для кейтерера
    - Клиент: с ценами для расчета, согласования и оплаты, иначе без цен
    - Получатель не указан (скачивание, предпросмотр): с ценами для
      согласования и оплаты, без цен для подтвержденного и доставленного
      заказа, иначе вариант по умолчанию

Примеры использования:
    resolver = DocumentPolicyResolver()
    policy = resolver.resolve("paid", RecipientType.CLIENT)
    policy.variant  # DocumentVariant.WITH_PRICING

Примечания:
    - Неизвестный статус дает вариант по умолчанию (без цен, для кейтерера)
    - Полнота таблиц проверяется при импорте модуля
"""

from dataclasses import dataclass
from typing import Optional

from django.core.exceptions import ImproperlyConfigured
from status.constants import OrderStatusCode

from ..constants import DocumentFraming, DocumentVariant, RecipientType


@dataclass(frozen=True)
class DocumentPolicy:
    """Вариант и оформление документа."""

    variant: DocumentVariant
    framing: DocumentFraming

    @property
    def shows_pricing(self) -> bool:
        return self.variant == DocumentVariant.WITH_PRICING

    @property
    def is_client_facing(self) -> bool:
        return self.framing == DocumentFraming.CLIENT_FACING


DEFAULT_POLICY = DocumentPolicy(
    DocumentVariant.WITHOUT_PRICING, DocumentFraming.CATERER_FACING
)
CATERER_POLICY = DocumentPolicy(
    DocumentVariant.WITHOUT_PRICING, DocumentFraming.CATERER_FACING
)
CLIENT_PRICED = DocumentPolicy(DocumentVariant.WITH_PRICING, DocumentFraming.CLIENT_FACING)
CLIENT_UNPRICED = DocumentPolicy(
    DocumentVariant.WITHOUT_PRICING, DocumentFraming.CLIENT_FACING
)

CLIENT_POLICIES = {
    OrderStatusCode.AWAITING_QUOTE: CLIENT_PRICED,
    OrderStatusCode.AWAITING_CLIENT_APPROVAL: CLIENT_PRICED,
    OrderStatusCode.PAID: CLIENT_PRICED,
    OrderStatusCode.AWAITING_CATERER: CLIENT_UNPRICED,
    OrderStatusCode.CATERER_CONFIRMED: CLIENT_UNPRICED,
    OrderStatusCode.IN_PREPARATION: CLIENT_UNPRICED,
    OrderStatusCode.READY_FOR_DELIVERY: CLIENT_UNPRICED,
    OrderStatusCode.DELIVERED: CLIENT_UNPRICED,
    OrderStatusCode.ORDER_CHANGED: CLIENT_UNPRICED,
    OrderStatusCode.CANCELLED: CLIENT_UNPRICED,
}

CATERER_POLICIES = {status: CATERER_POLICY for status in OrderStatusCode}

# Для скачивания без получателя таблица неполная, остальное - DEFAULT_POLICY
DOWNLOAD_POLICIES = {
    OrderStatusCode.AWAITING_CLIENT_APPROVAL: CLIENT_PRICED,
    OrderStatusCode.PAID: CLIENT_PRICED,
    OrderStatusCode.CATERER_CONFIRMED: CLIENT_UNPRICED,
    OrderStatusCode.DELIVERED: CLIENT_UNPRICED,
}

RECIPIENT_POLICIES = {
    RecipientType.CLIENT: CLIENT_POLICIES,
    RecipientType.CATERER: CATERER_POLICIES,
}


def _check_tables():
    for recipient, table in RECIPIENT_POLICIES.items():
        missing = set(OrderStatusCode) - set(table)
        if missing:
            raise ImproperlyConfigured(
                f"Не задан вариант документа для получателя {recipient}: "
                f"{', '.join(sorted(status.value for status in missing))}"
            )


_check_tables()


def parse_recipient(recipient) -> Optional[RecipientType]:
    """Привести получателя к RecipientType (None - получатель не указан)."""
    if recipient is None or recipient == "":
        return None
    try:
        return RecipientType(recipient)
    except ValueError:
        raise ValueError(f"Неизвестный получатель: {recipient}")


class DocumentPolicyResolver:
    """Выбор варианта документа по статусу и получателю."""

    def resolve(self, status, recipient=None) -> DocumentPolicy:
        """
        Определить вариант документа.

        Args:
            status: Код статуса заказа
            recipient: Получатель (client, caterer) или None

        Returns:
            DocumentPolicy: Вариант и оформление документа
        """
        recipient = parse_recipient(recipient)
        status = OrderStatusCode.parse(status)
        if status is None:
            return DEFAULT_POLICY

        if recipient is None:
            return DOWNLOAD_POLICIES.get(status, DEFAULT_POLICY)
        return RECIPIENT_POLICIES[recipient][status]
