"""Константы для документов и писем по заказам."""

from enum import Enum


class RecipientType(str, Enum):
    """Получатель документа или письма."""

    CLIENT = "client"
    CATERER = "caterer"

    def __str__(self):
        return self.value


class DocumentVariant(str, Enum):
    """Вариант документа: с ценами или без."""

    WITH_PRICING = "with_pricing"
    WITHOUT_PRICING = "without_pricing"

    def __str__(self):
        return self.value


class DocumentFraming(str, Enum):
    """Оформление документа.

    CLIENT_FACING - для клиента, показывает статус заказа.
    CATERER_FACING - для кейтерера, показывает номер ревизии.
    """

    CLIENT_FACING = "client_facing"
    CATERER_FACING = "caterer_facing"

    def __str__(self):
        return self.value


class EmailPurpose(str, Enum):
    """Назначение письма."""

    QUOTE = "quote"
    CONFIRMATION = "confirmation"
    DELIVERY = "delivery"
    INVOICE = "invoice"
    ORDER_REQUEST = "order_request"
    QUOTE_REQUEST = "quote_request"
    UPDATE = "update"
    CANCELLATION = "cancellation"

    def __str__(self):
        return self.value


DOCUMENT_MIME_TYPE = "text/html"

# Имя клиента в обращении, если полное имя не указано
DEFAULT_CLIENT_FIRST_NAME = "Valued Customer"
CATERER_ADDRESSEE = "Team"
