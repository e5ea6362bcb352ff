"""QuerySets для моделей orders."""

import logging

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Q
from django.utils import timezone
from status.constants import OrderStatusCode
from status.exceptions import Forbidden, UnknownStatus
from status.services.transition_validator import StatusTransitionValidator

logger = logging.getLogger(__name__)


class OrderQuerySet(models.QuerySet):
    """QuerySet для модели Order с поддержкой массовых операций."""

    def eligible_for_scan(self, statuses, date_from, date_to):
        """Заказы в указанных статусах с датой доставки в диапазоне."""
        return self.filter(
            status__in=[OrderStatusCode(status).value for status in statuses],
            delivery_date__gte=date_from,
            delivery_date__lte=date_to,
        ).select_related("caterer", "airport")

    def search(self, text):
        """Поиск по номеру заказа, клиенту, кейтереру и аэропорту."""
        if not text:
            return self
        return self.filter(
            Q(order_number__icontains=text)
            | Q(client_name__icontains=text)
            | Q(caterer_name__icontains=text)
            | Q(airport_name__icontains=text)
            | Q(aircraft_tail_number__icontains=text)
        )

    def bulk_update_status(self, new_status, actor_role, validator=None):
        """
        Массовое обновление статуса.

        Все заказы проверяются до изменения: если хотя бы один переход
        запрещен, не обновляется ни один заказ.

        Raises:
            Forbidden: Запрошен статус "paid"
            ValidationError: Хотя бы один заказ не может быть обновлен
        """
        validator = validator or StatusTransitionValidator()
        logger.info(
            "Запуск массового обновления статуса на '%s' для %d заказов",
            new_status,
            self.count(),
        )
        try:
            new_status = self._validate_status(new_status)

            if not self.exists():
                return 0

            with transaction.atomic():
                orders = self._lock_orders_for_update()
                self._validate_orders_status_change(
                    orders, new_status, actor_role, validator
                )
                updated_count = self._perform_status_update(new_status)

            logger.info(
                "Массовое обновление завершено успешно: обновлено %d заказов",
                updated_count,
            )
            return updated_count
        except Exception as e:
            logger.error(
                "Ошибка при массовом обновлении статуса: %s",
                str(e),
                exc_info=True,
            )
            raise

    def _validate_status(self, new_status):
        """Валидация статуса."""
        if not new_status:
            error_msg = "Не указан новый статус"
            logger.error(error_msg)
            raise ValidationError({"status": error_msg})

        status = OrderStatusCode.parse(new_status)
        if status is None:
            error_msg = f"Неизвестный статус: {new_status}"
            logger.error(error_msg)
            raise UnknownStatus(error_msg)
        if status == OrderStatusCode.PAID:
            error_msg = "Статус 'paid' устанавливается только отдельной операцией оплаты"
            logger.error(error_msg)
            raise Forbidden(error_msg)
        return status

    def _lock_orders_for_update(self):
        """Блокировка заказов для обновления."""
        logger.debug("Блокировка заказов для обновления")
        return list(self.select_for_update().order_by("id"))

    def _validate_orders_status_change(self, orders, new_status, actor_role, validator):
        """Валидация изменения статуса для всех заказов."""
        logger.debug("Проверка возможности изменения статуса для заказов")
        errors = []
        for order in orders:
            decision = validator.check(order.status, new_status, actor_role)
            if not decision.allowed:
                error_msg = f"Заказ {order.order_number}: {decision.reason}"
                logger.warning(error_msg)
                errors.append(error_msg)

        if errors:
            error_msg = "Невозможно обновить статусы:\n" + "\n".join(errors)
            logger.error(error_msg)
            raise ValidationError(error_msg)

    def _perform_status_update(self, new_status):
        """Выполнение обновления статуса."""
        logger.debug("Выполнение обновления статусов")
        update_fields = {"status": OrderStatusCode(new_status).value}
        if new_status == OrderStatusCode.DELIVERED:
            update_fields["completed_at"] = timezone.now()
        return self.update(**update_fields)
