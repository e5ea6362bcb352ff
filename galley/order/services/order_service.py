"""
Сервис заказов.

Единая точка входа для обработчиков API, планировщика и отправки писем.
Собирает хранилище, валидатор переходов и политики документов и писем.

Основные компоненты:
    - OrderService: Фасад операций над заказами
    - EmailPreview: Параметры, тема и текст письма по заказу

Примеры использования:
    service = OrderService()
    order = service.create_order(payload)
    service.update_order_status(order.pk, "awaiting_caterer", RoleCode.CSR)
    service.mark_paid(order.pk, RoleCode.ADMIN)

Примечания:
    - Ошибки базы данных (кроме нарушения уникальности) превращаются
      в DependencyUnavailable, операцию можно повторить
    - Статус "paid" устанавливается только через mark_paid
"""

import functools
import logging
from dataclasses import dataclass

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError
from document.services.communication_policy import (
    CommunicationPolicyResolver,
    EmailPolicy,
    compose_subject,
)
from document.services.document_policy import DocumentPolicyResolver
from document.services.email_templates import render_body
from document.services.renderer import HtmlDocumentRenderer
from status.constants import OrderStatusCode
from status.exceptions import UnknownStatus
from status.services.transition_validator import StatusTransitionValidator

from ..exceptions import DependencyUnavailable, OrderNotFound
from ..models import Airport, Caterer, Client
from .order_bulk_service import OrderBulkService
from .order_repository import OrderRepository
from .order_status_service import OrderStatusService
from .order_validation_service import OrderValidationService

logger = logging.getLogger(__name__)

# Поля, которые не меняются через update_order
PROTECTED_FIELDS = ("status", "is_paid", "revision_count", "subtotal", "total")

# Справочник -> (поле со ссылкой, текстовое поле заказа, атрибут справочника)
REFERENCES = (
    (Client, "client_id", "client_name", "full_name"),
    (Caterer, "caterer_id", "caterer_name", "caterer_name"),
    (Airport, "airport_id", "airport_name", "airport_name"),
)


def translate_storage_errors(method):
    """Перевести ошибки базы данных в ошибки сервиса."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except IntegrityError as e:
            raise ValidationError(f"Нарушение целостности данных: {e}") from e
        except DatabaseError as e:
            logger.error("Хранилище заказов недоступно: %s", str(e), exc_info=True)
            raise DependencyUnavailable(f"Хранилище заказов недоступно: {e}") from e

    return wrapper


@dataclass(frozen=True)
class EmailPreview:
    """Письмо по заказу до отправки."""

    recipient: str
    policy: EmailPolicy
    subject: str
    body: str


def subject_airport_code(order) -> str:
    """Код аэропорта для темы: IATA, ICAO или короткое название аэропорта."""
    if order.airport_code:
        return order.airport_code
    if order.airport_name and len(order.airport_name) <= 10:
        return order.airport_name
    return ""


def client_first_name(order):
    """Имя клиента для обращения или None."""
    if order.client_id and order.client.first_name:
        return order.client.first_name
    return None


class OrderService:
    """Сервис для работы с заказами."""

    def __init__(
        self,
        repository=None,
        validator=None,
        document_policy=None,
        communication_policy=None,
        renderer=None,
    ):
        self.repository = repository or OrderRepository()
        self.validator = validator or StatusTransitionValidator()
        self.document_policy = document_policy or DocumentPolicyResolver()
        self.communication_policy = communication_policy or CommunicationPolicyResolver(
            self.document_policy
        )
        self.renderer = renderer or HtmlDocumentRenderer()
        self.status_service = OrderStatusService(self.repository, self.validator)
        self.bulk_service = OrderBulkService(self.repository, self.validator)

    # ------------------------------------------------------------------
    # Чтение
    # ------------------------------------------------------------------

    @translate_storage_errors
    def get_order(self, order_id):
        """
        Получить заказ.

        Raises:
            OrderNotFound: Заказ не найден
        """
        order = self.repository.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Заказ {order_id} не найден")
        return order

    @translate_storage_errors
    def list_orders(self, status=None, date_from=None, date_to=None, search=None):
        """Список заказов с фильтрами по статусу, датам доставки и тексту."""
        if status and OrderStatusCode.parse(status) is None:
            raise UnknownStatus(f"Неизвестный статус: {status}")
        return list(
            self.repository.search(
                status=status, date_from=date_from, date_to=date_to, search=search
            )
        )

    @translate_storage_errors
    def find_scan_candidates(self, statuses, date_from, date_to, limit):
        """Заказы-кандидаты для автоматического продвижения статуса."""
        return self.repository.find_eligible_for_scan(statuses, date_from, date_to, limit)

    # ------------------------------------------------------------------
    # Создание и изменение
    # ------------------------------------------------------------------

    @translate_storage_errors
    def create_order(self, data: dict):
        """
        Создать заказ.

        Номер заказа назначается автоматически (KA000001), если не передан.
        Статус нового заказа - статус по умолчанию, ревизия 0.

        Raises:
            ValidationError: Некорректные данные заказа
        """
        data = self._fill_reference_names(dict(data))
        data = OrderValidationService.validate(data, creating=True)

        items = data.pop("items")
        for field in PROTECTED_FIELDS:
            data.pop(field, None)

        order_number = data.pop("order_number", None) or self.repository.next_order_number()
        OrderValidationService.validate_order_number(
            order_number, self.repository.order_number_exists(order_number)
        )
        data["status"] = self.status_service.get_initial_status()

        order = self.repository.create(data, order_number, items)
        logger.info(
            "Заказ %s создан (итого: %s, позиций: %d)",
            order.order_number,
            order.total,
            len(items),
        )
        return order

    @translate_storage_errors
    def update_order(self, order_id, data: dict):
        """
        Изменить содержимое заказа и увеличить номер ревизии.

        Raises:
            ValidationError: Некорректные данные или попытка изменить статус
            OrderNotFound: Заказ не найден
        """
        protected = [field for field in PROTECTED_FIELDS if field in data]
        if protected:
            raise ValidationError(
                {
                    field: "Поле не изменяется при редактировании заказа"
                    for field in protected
                }
            )

        data = self._fill_reference_names(dict(data))
        data = OrderValidationService.validate(data, creating=False)
        items = data.pop("items", None)

        if data.get("order_number"):
            OrderValidationService.validate_order_number(
                data["order_number"],
                self.repository.order_number_exists(data["order_number"], order_id),
            )

        order = self.repository.update(order_id, data, items)
        if order is None:
            raise OrderNotFound(f"Заказ {order_id} не найден")

        self.repository.increment_revision(order_id)
        order = self.repository.find_by_id(order_id)
        logger.info(
            "Заказ %s изменен (ревизия %d)", order.order_number, order.revision_count
        )
        return order

    def _fill_reference_names(self, data):
        for model, id_field, name_field, attribute in REFERENCES:
            reference_id = data.get(id_field)
            if reference_id and not data.get(name_field):
                reference = model.objects.filter(pk=reference_id).first()
                if reference is None:
                    raise ValidationError({id_field: "Запись справочника не найдена"})
                data[name_field] = getattr(reference, attribute)
        return data

    # ------------------------------------------------------------------
    # Статусы
    # ------------------------------------------------------------------

    @translate_storage_errors
    def update_order_status(self, order_id, status, actor_role):
        """
        Изменить статус заказа.

        Raises:
            Forbidden: Запрошен статус "paid" (используйте mark_paid)
            InvalidTransition, UnknownStatus: Переход запрещен
            OrderNotFound: Заказ не найден
        """
        return self.status_service.change_status(order_id, status, actor_role)

    @translate_storage_errors
    def mark_paid(self, order_id, actor_role):
        """
        Отметить заказ оплаченным.

        Raises:
            Forbidden: Исполнитель не администратор
            InvalidTransition: Заказ не доставлен
            OrderNotFound: Заказ не найден
        """
        return self.status_service.change_status(
            order_id, OrderStatusCode.PAID, actor_role, allow_paid=True
        )

    @translate_storage_errors
    def bulk_update_status(self, order_ids, status, actor_role):
        """Массовое изменение статуса по принципу "все или ничего"."""
        return self.bulk_service.bulk_update_status(order_ids, status, actor_role)

    # ------------------------------------------------------------------
    # Документы и письма
    # ------------------------------------------------------------------

    def resolve_document(self, order_id, recipient=None):
        """Вариант документа для заказа и получателя."""
        order = self.get_order(order_id)
        return self.document_policy.resolve(order.status, recipient)

    def render_document(self, order_id, recipient=None):
        """Сформировать документ заказа для получателя."""
        order = self.get_order(order_id)
        policy = self.document_policy.resolve(order.status, recipient)
        return self.render_for_policy(order, policy)

    def render_for_policy(self, order, policy):
        """Сформировать документ заказа в заданном варианте."""
        return self.renderer.render(order, policy)

    def resolve_email(self, order_id, recipient, purpose_override=None):
        """Параметры, тема и текст письма по заказу."""
        return self.build_email(self.get_order(order_id), recipient, purpose_override)

    def build_email(self, order, recipient, purpose_override=None) -> EmailPreview:
        """Собрать письмо по уже загруженному заказу."""
        policy = self.communication_policy.resolve(
            recipient, order.status, purpose_override
        )
        subject = compose_subject(
            order.order_number,
            recipient,
            policy.purpose,
            status=order.status,
            airport_code=subject_airport_code(order),
            delivery_date=order.delivery_date,
            delivery_time=order.delivery_time,
        ).render()
        body = render_body(policy.body_template_key, first_name=client_first_name(order))
        return EmailPreview(
            recipient=str(recipient), policy=policy, subject=subject, body=body
        )
