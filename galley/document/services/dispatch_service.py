"""
Отправка писем по заказам клиенту и кейтереру.

Основные компоненты:
    - OrderDispatchService: Отправка клиенту, кейтереру или обоим
    - DispatchResult: Результат отправки одного письма

Процесс отправки:
    1. Загрузка заказа и проверка адреса получателя
    2. Выбор назначения, шаблона и варианта документа
    3. Проверка прав (счет и письмо по оплаченному заказу - только администратор)
    4. Формирование документа и письма, отправка через MailTransport
    5. Для кейтерера - необязательное изменение статуса после отправки

Примеры использования:
    service = OrderDispatchService()
    result = service.send_to_client(order_id, RoleCode.CSR, cc=["ops@example.com"])
    result.message_id

Примечания:
    - Кейтерер всегда получает документ без цен
    - Изменение статуса после отправки проверяется до отправки письма,
      статус "paid" таким способом не устанавливается
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.template.loader import render_to_string
from order.exceptions import DependencyUnavailable, RecipientUnavailable
from order.services.order_service import OrderService
from status.constants import OrderStatusCode
from status.exceptions import Forbidden
from user.constants import is_elevated

from ..constants import RecipientType
from .transport import DjangoMailTransport, OutgoingEmail

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Результат отправки письма."""

    recipient: str
    email: str
    subject: str
    purpose: str
    document_variant: str
    order_number: str
    status: str
    message_id: Optional[str] = None
    status_updated: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def clean_addresses(addresses):
    """Убрать пустые адреса из списка копий."""
    return [address.strip() for address in addresses or [] if address and address.strip()]


class OrderDispatchService:
    """Сервис отправки писем по заказам."""

    email_template_name = "document/email.html"

    def __init__(self, order_service=None, transport=None):
        self.order_service = order_service or OrderService()
        self.transport = transport or DjangoMailTransport()

    def send_to_client(
        self,
        order_id,
        actor_role,
        cc=None,
        purpose=None,
        custom_subject=None,
        custom_message=None,
    ) -> DispatchResult:
        """
        Отправить письмо клиенту.

        Raises:
            RecipientUnavailable: У клиента нет адреса
            Forbidden: Счет отправляет не администратор
            DependencyUnavailable: Почтовый сервер недоступен
        """
        order = self.order_service.get_order(order_id)
        address = self._client_address(order)
        if not address:
            raise RecipientUnavailable("У клиента не указан адрес электронной почты")

        preview = self._prepare(order, RecipientType.CLIENT, purpose, actor_role)
        return self._send(order, preview, address, cc, custom_subject, custom_message)

    def send_to_caterer(
        self,
        order_id,
        actor_role,
        cc=None,
        purpose=None,
        custom_subject=None,
        custom_message=None,
        update_status=None,
    ) -> DispatchResult:
        """
        Отправить письмо кейтереру и при необходимости изменить статус.

        Raises:
            RecipientUnavailable: У кейтерера нет адреса
            Forbidden: Запрошен статус "paid" или недостаточно прав
            InvalidTransition, UnknownStatus: Запрошенный статус недопустим
            DependencyUnavailable: Почтовый сервер недоступен
        """
        order = self.order_service.get_order(order_id)
        address = self._caterer_address(order)
        if not address:
            raise RecipientUnavailable("У кейтерера не указан адрес электронной почты")

        if update_status:
            self._check_status_update(order, update_status, actor_role)

        preview = self._prepare(order, RecipientType.CATERER, purpose, actor_role)
        result = self._send(order, preview, address, cc, custom_subject, custom_message)

        if update_status:
            updated = self.order_service.update_order_status(
                order.pk, update_status, actor_role
            )
            result.status = updated.status
            result.status_updated = True
        return result

    def send_to_both(
        self,
        order_id,
        actor_role,
        cc=None,
        client_purpose=None,
        caterer_purpose=None,
        custom_client_subject=None,
        custom_caterer_subject=None,
        custom_client_message=None,
        custom_caterer_message=None,
    ) -> dict:
        """
        Отправить письма клиенту и кейтереру.

        Получатель без адреса пропускается, ошибка почтового сервера
        по одному получателю не отменяет отправку другому.

        Returns:
            dict: {"client": DispatchResult | None, "caterer": DispatchResult | None}

        Raises:
            RecipientUnavailable: Ни у клиента, ни у кейтерера нет адреса
            Forbidden: Счет отправляет не администратор
        """
        order = self.order_service.get_order(order_id)
        client_address = self._client_address(order)
        caterer_address = self._caterer_address(order)
        if not client_address and not caterer_address:
            raise RecipientUnavailable(
                "Не указан адрес электронной почты ни клиента, ни кейтерера"
            )

        plan = []
        if client_address:
            preview = self._prepare(order, RecipientType.CLIENT, client_purpose, actor_role)
            plan.append(
                (preview, client_address, custom_client_subject, custom_client_message)
            )
        if caterer_address:
            preview = self._prepare(
                order, RecipientType.CATERER, caterer_purpose, actor_role
            )
            plan.append(
                (preview, caterer_address, custom_caterer_subject, custom_caterer_message)
            )

        results = {RecipientType.CLIENT.value: None, RecipientType.CATERER.value: None}
        for preview, address, subject, message in plan:
            try:
                result = self._send(order, preview, address, cc, subject, message)
            except DependencyUnavailable as e:
                result = self._result(order, preview, address, preview.subject)
                result.error = str(e)
            results[preview.recipient] = result

        logger.info(
            "Письма по заказу %s отправлены клиенту (%s) и кейтереру (%s)",
            order.order_number,
            client_address or "нет адреса",
            caterer_address or "нет адреса",
        )
        return results

    def _client_address(self, order):
        return order.client.email if order.client_id else ""

    def _caterer_address(self, order):
        return order.caterer.caterer_email if order.caterer_id else ""

    def _prepare(self, order, recipient, purpose, actor_role):
        preview = self.order_service.build_email(order, recipient, purpose)
        if preview.policy.requires_elevated_role and not is_elevated(actor_role):
            raise Forbidden("Счета и письма по оплаченным заказам отправляет только администратор")
        return preview

    def _check_status_update(self, order, update_status, actor_role):
        if OrderStatusCode.parse(update_status) == OrderStatusCode.PAID:
            raise Forbidden("Статус 'paid' устанавливается только операцией оплаты заказа")
        self.order_service.validator.validate(order.status, update_status, actor_role)

    def _result(self, order, preview, address, subject):
        return DispatchResult(
            recipient=preview.recipient,
            email=address,
            subject=subject,
            purpose=preview.policy.purpose.value,
            document_variant=preview.policy.document.variant.value,
            order_number=order.order_number,
            status=order.status,
        )

    def _send(self, order, preview, address, cc, custom_subject, custom_message):
        subject = custom_subject or preview.subject
        body = custom_message or preview.body
        document = self.order_service.render_for_policy(order, preview.policy.document)
        html = render_to_string(
            self.email_template_name,
            {
                "brand": settings.EMAIL_SUBJECT_BRAND,
                "order_number": order.order_number,
                "body": body,
            },
        )

        message_id = self.transport.send(
            OutgoingEmail(
                to=[address],
                cc=clean_addresses(cc),
                subject=subject,
                text_body=body,
                html_body=html,
                attachments=[document],
            )
        )

        logger.info(
            "Письмо по заказу %s отправлено (%s: %s, назначение: %s, документ: %s)",
            order.order_number,
            preview.recipient,
            address,
            preview.policy.purpose,
            preview.policy.document.variant,
        )
        result = self._result(order, preview, address, subject)
        result.message_id = message_id
        return result
