"""
Планировщик автоматического продвижения статусов заказов.

Планировщик периодически просматривает подтвержденные и готовящиеся
заказы с доставкой вчера, сегодня или завтра (по дате сервера) и
продвигает их статус по времени, оставшемуся до доставки:
    - от 1 до 4 часов до доставки -> "in_preparation"
    - менее 1 часа до доставки -> "ready_for_delivery"

Основные компоненты:
    - OrderScheduler: Фоновый поток с периодическим просмотром заказов
    - ScanReport: Итоги одного просмотра
    - run_scan: Один просмотр (можно вызывать напрямую)
    - evaluate_order: Решение по одному заказу

Процесс просмотра:
    1. Выбор заказов в статусах caterer_confirmed и in_preparation
       с датой доставки от вчера до завтра (не более scan_limit на статус)
    2. Определение момента доставки в часовом поясе кейтерера
    3. Выбор целевого статуса по порогам
    4. Изменение статуса через OrderService (тот же путь и валидатор,
       что и у запросов пользователей) от имени роли SYSTEM

Примеры использования:
    scheduler = OrderScheduler(OrderService())
    scheduler.start()
    ...
    scheduler.stop()

    # Один просмотр без фонового потока
    report = OrderScheduler(OrderService()).run_scan()

Примечания:
    - Статус только продвигается вперед, повторный просмотр ничего не меняет
    - Ошибка по одному заказу логируется и не прерывает просмотр
    - Одновременно выполняется не более одного просмотра
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Optional

from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone
from status.constants import SCHEDULER_ELIGIBLE_STATUSES, OrderStatusCode
from status.services.constants import get_status_order
from user.constants import RoleCode

from ..exceptions import MalformedTime
from .delivery_clock import DeliveryClock, hours_until

logger = logging.getLogger(__name__)

DEFAULTS = {
    "INTERVAL_MINUTES": 15,
    "IN_PREPARATION_HOURS": 4,
    "READY_FOR_DELIVERY_HOURS": 1,
    "SCAN_LIMIT": 500,
}


@dataclass
class ScanReport:
    """Итоги просмотра заказов."""

    checked: int = 0
    promoted: int = 0
    skipped: int = 0
    failed: int = 0
    in_preparation: int = 0
    ready_for_delivery: int = 0
    errors: Dict[int, str] = field(default_factory=dict)
    # Просмотр не выполнялся: уже идет другой
    concurrent: bool = False

    @property
    def changed(self) -> bool:
        return self.promoted > 0


class OrderScheduler:
    """Фоновый планировщик продвижения статусов заказов."""

    STATE_IDLE = "idle"
    STATE_SCANNING = "scanning"
    STATE_STOPPED = "stopped"

    def __init__(
        self,
        order_service,
        clock: Optional[DeliveryClock] = None,
        interval_seconds: Optional[float] = None,
        in_preparation_hours: Optional[float] = None,
        ready_for_delivery_hours: Optional[float] = None,
        scan_limit: Optional[int] = None,
    ):
        config = {**DEFAULTS, **getattr(settings, "ORDER_SCHEDULER", {})}
        self.order_service = order_service
        self.clock = clock or DeliveryClock()
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else config["INTERVAL_MINUTES"] * 60
        )
        self.in_preparation_hours = (
            in_preparation_hours
            if in_preparation_hours is not None
            else config["IN_PREPARATION_HOURS"]
        )
        self.ready_for_delivery_hours = (
            ready_for_delivery_hours
            if ready_for_delivery_hours is not None
            else config["READY_FOR_DELIVERY_HOURS"]
        )
        self.scan_limit = scan_limit if scan_limit is not None else config["SCAN_LIMIT"]

        self._stop_event = threading.Event()
        self._scan_lock = threading.Lock()
        self._lifecycle_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._state = self.STATE_IDLE
        self._status_order = get_status_order()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def state(self) -> str:
        return self._state

    def start(self) -> None:
        """Запустить фоновый поток. Первый просмотр выполняется сразу."""
        with self._lifecycle_lock:
            if self.is_running:
                logger.warning("Планировщик статусов заказов уже запущен")
                return

            self._stop_event.clear()
            self._state = self.STATE_IDLE
            self._thread = threading.Thread(
                target=self._loop, name="OrderSchedulerThread", daemon=True
            )
            self._thread.start()

        logger.info(
            "Планировщик статусов заказов запущен (интервал: %s мин, "
            "готовка за %s ч, готовность за %s ч)",
            self.interval_seconds / 60,
            self.in_preparation_hours,
            self.ready_for_delivery_hours,
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        """Остановить планировщик. Текущий просмотр завершается, новый не начинается."""
        with self._lifecycle_lock:
            thread = self._thread
            self._stop_event.set()
            if thread is None:
                self._state = self.STATE_STOPPED
                return

            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("Поток планировщика не остановился за %s с", timeout)
                return

            self._thread = None
            self._state = self.STATE_STOPPED
        logger.info("Планировщик статусов заказов остановлен")

    def join(self, timeout: Optional[float] = None) -> None:
        """Ждать завершения фонового потока."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout=timeout)

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_scan()
            except Exception as e:
                logger.error("Ошибка просмотра заказов: %s", str(e), exc_info=True)
            finally:
                close_old_connections()
            self._stop_event.wait(timeout=self.interval_seconds)

    def run_scan(self, now=None) -> ScanReport:
        """
        Просмотреть заказы и продвинуть статусы.

        Args:
            now: Текущий момент (по умолчанию timezone.now())

        Returns:
            ScanReport: Итоги просмотра
        """
        if not self._scan_lock.acquire(blocking=False):
            logger.warning("Просмотр заказов уже выполняется, повторный запуск пропущен")
            return ScanReport(concurrent=True)

        self._state = self.STATE_SCANNING
        try:
            return self._scan(now or timezone.now())
        finally:
            self._state = (
                self.STATE_STOPPED if self._stop_event.is_set() else self.STATE_IDLE
            )
            self._scan_lock.release()

    def _scan(self, now) -> ScanReport:
        report = ScanReport()
        # Дата доставки задана в часовом поясе кейтерера и может отличаться
        # от даты сервера на сутки в обе стороны
        today = timezone.localtime(now).date()
        orders = self.order_service.find_scan_candidates(
            SCHEDULER_ELIGIBLE_STATUSES,
            today - timedelta(days=1),
            today + timedelta(days=1),
            self.scan_limit,
        )

        for order in orders:
            report.checked += 1
            try:
                target = self.evaluate_order(order, now)
            except MalformedTime as e:
                report.skipped += 1
                report.errors[order.pk] = e.messages[0]
                logger.warning(
                    "Заказ %s (ID: %s) пропущен: %s",
                    order.order_number,
                    order.pk,
                    e.messages[0],
                )
                continue
            except Exception as e:
                self._record_failure(report, order, e)
                continue

            if target is None:
                continue

            try:
                self.order_service.update_order_status(order.pk, target, RoleCode.SYSTEM)
            except Exception as e:
                self._record_failure(report, order, e)
                continue

            report.promoted += 1
            if target == OrderStatusCode.IN_PREPARATION:
                report.in_preparation += 1
            else:
                report.ready_for_delivery += 1
            logger.info(
                "Статус заказа %s (ID: %s) автоматически изменен: '%s' -> '%s'",
                order.order_number,
                order.pk,
                order.status,
                target,
            )

        if report.changed:
            logger.info(
                "Просмотр заказов завершен: проверено %d, изменено %d "
                "(готовятся: %d, готовы к доставке: %d), пропущено %d, ошибок %d",
                report.checked,
                report.promoted,
                report.in_preparation,
                report.ready_for_delivery,
                report.skipped,
                report.failed,
            )
        return report

    def _record_failure(self, report, order, error):
        report.failed += 1
        report.errors[order.pk] = str(error)
        logger.error(
            "Ошибка обработки заказа %s (ID: %s): %s",
            order.order_number,
            order.pk,
            str(error),
            exc_info=True,
        )

    def evaluate_order(self, order, now=None) -> Optional[OrderStatusCode]:
        """
        Определить целевой статус заказа.

        Returns:
            OrderStatusCode | None: Целевой статус или None, если менять не нужно

        Raises:
            MalformedTime: Дата или время доставки не разбираются
        """
        if not order.delivery_date or not order.delivery_time:
            raise MalformedTime("Не указаны дата или время доставки")

        delivery = self.clock.resolve(
            order.delivery_date, order.delivery_time, order.caterer_time_zone
        )
        hours = hours_until(delivery.instant, now)

        if 0 < hours <= self.ready_for_delivery_hours:
            target = OrderStatusCode.READY_FOR_DELIVERY
        elif self.ready_for_delivery_hours < hours <= self.in_preparation_hours:
            target = OrderStatusCode.IN_PREPARATION
        else:
            return None

        current_order = self._status_order.get(order.status)
        if current_order is None or self._status_order[target.value] <= current_order:
            return None
        return target
