"""
Выбор параметров письма по заказу.

Модуль определяет для пары (получатель, статус заказа) назначение письма,
шаблон текста, необходимость повышенных прав и вариант вложенного
документа, а также формирует тему письма.

Основные компоненты:
    - CommunicationPolicyResolver: Выбор параметров письма
    - EmailPolicy: Результат выбора
    - SubjectParts: Составные части темы письма
    - compose_subject: Формирование темы письма

Правила:
    - Явно переданное назначение письма имеет приоритет над таблицей
    - Письмо-счет или письмо по оплаченному заказу требует повышенных прав
    - Кейтерер всегда получает документ без цен
    - Счет клиенту всегда содержит цены, доставленный заказ - всегда без цен

Примеры использования:
    resolver = CommunicationPolicyResolver()
    policy = resolver.resolve("caterer", "awaiting_quote")
    policy.purpose  # EmailPurpose.QUOTE_REQUEST

    subject = compose_subject("KA000123", "client", "quote", airport_code="TEB")
    subject.render()  # "Galley Quote#KA000123 / TEB"

Примечания:
    - Все функции детерминированы и не обращаются к базе данных
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from status.constants import OrderStatusCode

from ..constants import DocumentFraming, DocumentVariant, EmailPurpose, RecipientType
from .document_policy import (
    CATERER_POLICY,
    CLIENT_UNPRICED,
    DocumentPolicy,
    DocumentPolicyResolver,
)
from .email_templates import body_template_key

CATERER_PURPOSES = {
    OrderStatusCode.AWAITING_QUOTE: EmailPurpose.QUOTE_REQUEST,
    OrderStatusCode.AWAITING_CATERER: EmailPurpose.QUOTE_REQUEST,
    OrderStatusCode.CATERER_CONFIRMED: EmailPurpose.ORDER_REQUEST,
    OrderStatusCode.CANCELLED: EmailPurpose.CANCELLATION,
    OrderStatusCode.AWAITING_CLIENT_APPROVAL: EmailPurpose.UPDATE,
    OrderStatusCode.IN_PREPARATION: EmailPurpose.UPDATE,
    OrderStatusCode.READY_FOR_DELIVERY: EmailPurpose.UPDATE,
    OrderStatusCode.DELIVERED: EmailPurpose.UPDATE,
    OrderStatusCode.PAID: EmailPurpose.UPDATE,
    OrderStatusCode.ORDER_CHANGED: EmailPurpose.UPDATE,
}

CLIENT_PURPOSES = {
    OrderStatusCode.AWAITING_QUOTE: EmailPurpose.QUOTE,
    OrderStatusCode.AWAITING_CLIENT_APPROVAL: EmailPurpose.QUOTE,
    OrderStatusCode.CATERER_CONFIRMED: EmailPurpose.CONFIRMATION,
    OrderStatusCode.IN_PREPARATION: EmailPurpose.CONFIRMATION,
    OrderStatusCode.READY_FOR_DELIVERY: EmailPurpose.CONFIRMATION,
    OrderStatusCode.DELIVERED: EmailPurpose.DELIVERY,
    OrderStatusCode.PAID: EmailPurpose.INVOICE,
    OrderStatusCode.CANCELLED: EmailPurpose.CANCELLATION,
    OrderStatusCode.AWAITING_CATERER: EmailPurpose.UPDATE,
    OrderStatusCode.ORDER_CHANGED: EmailPurpose.UPDATE,
}

PURPOSES = {
    RecipientType.CLIENT: CLIENT_PURPOSES,
    RecipientType.CATERER: CATERER_PURPOSES,
}


def _check_tables():
    for recipient, table in PURPOSES.items():
        if set(table) != set(OrderStatusCode):
            raise ImproperlyConfigured(
                f"Таблица назначений писем для получателя {recipient} неполная"
            )


_check_tables()

# Подпись темы по назначению письма: (метка, окончание)
CATERER_SUBJECTS = {
    EmailPurpose.QUOTE_REQUEST: ("Order", " / Quote Request"),
    EmailPurpose.ORDER_REQUEST: ("Order Request", ""),
    EmailPurpose.CONFIRMATION: ("Order Request", ""),
    EmailPurpose.CANCELLATION: ("Cancellation", ""),
}
CATERER_SUBJECT_DEFAULT = ("Order Update", "")

CLIENT_STATUS_SUBJECTS = {
    OrderStatusCode.AWAITING_CLIENT_APPROVAL: (
        "Order",
        " / Order Estimate - This Order Is Not Live",
    ),
    OrderStatusCode.CATERER_CONFIRMED: ("Order", " / Order Confirmed"),
    OrderStatusCode.DELIVERED: ("Order", " / Delivery Completed"),
    OrderStatusCode.PAID: ("Ord", " Final Invoice"),
}
CLIENT_SUBJECTS = {
    EmailPurpose.QUOTE: ("Quote", ""),
    EmailPurpose.CONFIRMATION: ("Conf", ""),
    EmailPurpose.DELIVERY: ("Delivery Update", ""),
    EmailPurpose.INVOICE: ("Invoice", ""),
    EmailPurpose.UPDATE: ("Order Update", ""),
    EmailPurpose.CANCELLATION: ("Cancellation", ""),
}
CLIENT_SUBJECT_DEFAULT = ("Order", "")

ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


@dataclass(frozen=True)
class EmailPolicy:
    """Параметры письма."""

    purpose: EmailPurpose
    body_template_key: str
    requires_elevated_role: bool
    document: DocumentPolicy


@dataclass(frozen=True)
class SubjectParts:
    """Составные части темы письма."""

    brand: str
    label: str
    order_number: str
    delivery_part: str = ""
    suffix: str = ""

    def render(self) -> str:
        """Собрать тему письма."""
        head = f"{self.label}#{self.order_number}{self.delivery_part}{self.suffix}"
        return f"{self.brand} {head}" if self.brand else head


def format_subject_date(value) -> str:
    """Дата для темы письма в формате MM/DD/YYYY."""
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%m/%d/%Y")
    match = ISO_DATE_PATTERN.match(str(value))
    if not match:
        return ""
    year, month, day = match.groups()
    return f"{month}/{day}/{year}"


def format_subject_time(value) -> str:
    """Время для темы письма без авиационной пометки L."""
    if not value:
        return ""
    text = str(value).strip()
    return text[:-1] if text.endswith("L") else text


def build_delivery_part(airport_code=None, delivery_date=None, delivery_time=None) -> str:
    """Часть темы " / <код> / <дата> <время>", пустые части пропускаются."""
    parts = []
    if airport_code:
        parts.append(airport_code)

    when = " ".join(
        part
        for part in (format_subject_date(delivery_date), format_subject_time(delivery_time))
        if part
    )
    if when:
        parts.append(when)
    return f" / {' / '.join(parts)}" if parts else ""


def compose_subject(
    order_number,
    recipient,
    purpose,
    status=None,
    airport_code=None,
    delivery_date=None,
    delivery_time=None,
    brand=None,
) -> SubjectParts:
    """
    Сформировать тему письма.

    Args:
        order_number: Номер заказа
        recipient: Получатель (client, caterer)
        purpose: Назначение письма
        status: Статус заказа (для особых формулировок)
        airport_code: Код аэропорта
        delivery_date: Дата доставки
        delivery_time: Время доставки
        brand: Бренд (по умолчанию settings.EMAIL_SUBJECT_BRAND)

    Returns:
        SubjectParts: Части темы, render() собирает строку
    """
    recipient = RecipientType(recipient)
    purpose = EmailPurpose(purpose)
    status = OrderStatusCode.parse(status)
    brand = settings.EMAIL_SUBJECT_BRAND if brand is None else brand

    if recipient == RecipientType.CATERER:
        if status == OrderStatusCode.AWAITING_CATERER:
            label, suffix = "Order", " / Conf Request"
        else:
            label, suffix = CATERER_SUBJECTS.get(purpose, CATERER_SUBJECT_DEFAULT)
    elif status in CLIENT_STATUS_SUBJECTS:
        label, suffix = CLIENT_STATUS_SUBJECTS[status]
    else:
        label, suffix = CLIENT_SUBJECTS.get(purpose, CLIENT_SUBJECT_DEFAULT)

    return SubjectParts(
        brand=brand,
        label=label,
        order_number=order_number or "",
        delivery_part=build_delivery_part(airport_code, delivery_date, delivery_time),
        suffix=suffix,
    )


class CommunicationPolicyResolver:
    """Выбор назначения, шаблона и документа для письма."""

    def __init__(self, document_policy: Optional[DocumentPolicyResolver] = None):
        self.document_policy = document_policy or DocumentPolicyResolver()

    def resolve(self, recipient, status, purpose_override=None) -> EmailPolicy:
        """
        Определить параметры письма.

        Args:
            recipient: Получатель (client, caterer)
            status: Код статуса заказа
            purpose_override: Явно заданное назначение письма

        Returns:
            EmailPolicy: Назначение, ключ шаблона, права и вариант документа
        """
        recipient = RecipientType(recipient)
        status_code = OrderStatusCode.parse(status)
        override = EmailPurpose(purpose_override) if purpose_override else None

        if override is not None:
            purpose = override
        elif status_code is not None:
            purpose = PURPOSES[recipient][status_code]
        else:
            purpose = EmailPurpose.UPDATE

        # Назначение меняет тему и документ, текст письма остается по статусу
        template_key = body_template_key(
            recipient.value, status_code.value if status_code else "default"
        )

        requires_elevated_role = (
            purpose == EmailPurpose.INVOICE or status_code == OrderStatusCode.PAID
        )

        return EmailPolicy(
            purpose=purpose,
            body_template_key=template_key,
            requires_elevated_role=requires_elevated_role,
            document=self._document_for(recipient, status_code, override),
        )

    def _document_for(self, recipient, status, override) -> DocumentPolicy:
        if recipient == RecipientType.CATERER:
            return CATERER_POLICY
        if status == OrderStatusCode.DELIVERED:
            return CLIENT_UNPRICED
        if override == EmailPurpose.INVOICE:
            return DocumentPolicy(
                DocumentVariant.WITH_PRICING, DocumentFraming.CLIENT_FACING
            )
        return self.document_policy.resolve(status, recipient)
