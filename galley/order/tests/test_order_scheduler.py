"""Тесты для планировщика статусов заказов."""

import logging
import threading
from datetime import date
from io import StringIO
from types import SimpleNamespace

import pytest
from django.core.management import call_command
from freezegun import freeze_time
from order.exceptions import DependencyUnavailable, MalformedTime
from order.models import Caterer, Order
from order.services.order_scheduler import OrderScheduler, ScanReport
from status.constants import OrderStatusCode


def _status(order):
    order.refresh_from_db()
    return order.status


@pytest.mark.django_db
class TestSchedulerScan:
    """Тесты просмотра заказов."""

    def test_three_hours_before_delivery(self, scheduler, order_factory, scan_now):
        """За 3 часа до доставки заказ переходит в "in_preparation"."""
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="15:00"
        )

        report = scheduler.run_scan(scan_now)

        assert _status(order) == OrderStatusCode.IN_PREPARATION.value
        assert report.promoted == 1
        assert report.in_preparation == 1

    def test_forty_five_minutes_before_delivery(
        self, scheduler, order_factory, scan_now
    ):
        """За 45 минут до доставки заказ переходит в "ready_for_delivery"."""
        confirmed = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="12:45"
        )
        preparing = order_factory(
            status=OrderStatusCode.IN_PREPARATION, delivery_time="12:45L"
        )

        report = scheduler.run_scan(scan_now)

        assert _status(confirmed) == OrderStatusCode.READY_FOR_DELIVERY.value
        assert _status(preparing) == OrderStatusCode.READY_FOR_DELIVERY.value
        assert report.ready_for_delivery == 2

    @pytest.mark.parametrize("delivery_time", ["17:00", "11:30", "12:00"])
    def test_outside_thresholds(self, scheduler, order_factory, scan_now, delivery_time):
        """Более 4 часов до доставки или доставка прошла: статус не меняется."""
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_time=delivery_time
        )

        report = scheduler.run_scan(scan_now)

        assert _status(order) == OrderStatusCode.CATERER_CONFIRMED.value
        assert report.checked == 1
        assert report.promoted == 0

    def test_never_moves_backward(self, scheduler, order_factory, scan_now):
        """Заказ в "in_preparation" за 3 часа до доставки не трогается."""
        order = order_factory(
            status=OrderStatusCode.IN_PREPARATION, delivery_time="15:00"
        )

        report = scheduler.run_scan(scan_now)

        assert _status(order) == OrderStatusCode.IN_PREPARATION.value
        assert report.promoted == 0

    def test_other_statuses_are_not_loaded(self, scheduler, order_factory, scan_now):
        """Заказы вне подтвержденных и готовящихся не просматриваются."""
        for status in (
            OrderStatusCode.AWAITING_QUOTE,
            OrderStatusCode.ORDER_CHANGED,
            OrderStatusCode.READY_FOR_DELIVERY,
            OrderStatusCode.CANCELLED,
        ):
            order_factory(status=status, delivery_time="12:30")

        report = scheduler.run_scan(scan_now)

        assert report.checked == 0

    def test_scan_date_window(self, scheduler, order_factory, scan_now):
        """Просматриваются заказы с доставкой от вчера до завтра по дате сервера."""
        order_factory(status=OrderStatusCode.CATERER_CONFIRMED)
        order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_date=date(2026, 7, 16)
        )
        yesterday = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_date=date(2026, 7, 14)
        )
        order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_date=date(2026, 7, 13)
        )
        order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_date=date(2026, 7, 17)
        )

        report = scheduler.run_scan(scan_now)

        assert report.checked == 3
        # Доставка вчера в 15:00 UTC уже прошла
        assert _status(yesterday) == OrderStatusCode.CATERER_CONFIRMED.value

    def test_scan_is_idempotent(self, scheduler, order_factory, scan_now):
        """Повторный просмотр в тот же момент ничего не меняет."""
        order_factory(status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="15:00")
        order_factory(status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="12:30")

        first = scheduler.run_scan(scan_now)
        second = scheduler.run_scan(scan_now)

        assert first.promoted == 2
        assert second.promoted == 0
        assert second.changed is False

    def test_malformed_time_is_skipped(self, scheduler, order_factory, scan_now):
        """Заказ с некорректным временем пропускается, остальные обрабатываются."""
        orders = [
            order_factory(status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="15:00")
            for _ in range(9)
        ]
        broken = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="noon"
        )

        report = scheduler.run_scan(scan_now)

        assert report.checked == 10
        assert report.skipped == 1
        assert report.promoted == 9
        assert broken.pk in report.errors
        assert _status(broken) == OrderStatusCode.CATERER_CONFIRMED.value
        assert all(
            _status(order) == OrderStatusCode.IN_PREPARATION.value for order in orders
        )

    def test_caterer_time_zone_is_used(
        self, scheduler, order_factory, caterer_new_york, scan_now
    ):
        """Время доставки считается в часовом поясе кейтерера."""
        # 19:00 EDT = 23:00 UTC, до доставки 3 часа
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED,
            caterer=caterer_new_york,
            delivery_time="19:00L",
        )

        report = scheduler.run_scan(scan_now.replace(hour=20))

        assert _status(order) == OrderStatusCode.IN_PREPARATION.value
        assert report.in_preparation == 1

    def test_evening_delivery_west_of_server_date(
        self, scheduler, order_factory, caterer_new_york, scan_now
    ):
        """Вечерняя доставка в Нью-Йорке приходится на вчерашнюю дату по UTC."""
        # 22:00 EDT 14.07 = 02:00 UTC 15.07, до доставки полтора часа
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED,
            caterer=caterer_new_york,
            delivery_date=date(2026, 7, 14),
            delivery_time="22:00L",
        )
        now = scan_now.replace(hour=0, minute=30)

        report = scheduler.run_scan(now)

        assert report.checked == 1
        assert report.in_preparation == 1
        assert _status(order) == OrderStatusCode.IN_PREPARATION.value

    def test_late_evening_delivery_west_becomes_ready(
        self, scheduler, order_factory, caterer_new_york, scan_now
    ):
        """За 30 минут до вечерней доставки в Нью-Йорке заказ готов к доставке."""
        # 23:30 EDT 14.07 = 03:30 UTC 15.07
        order = order_factory(
            status=OrderStatusCode.IN_PREPARATION,
            caterer=caterer_new_york,
            delivery_date=date(2026, 7, 14),
            delivery_time="23:30",
        )

        report = scheduler.run_scan(scan_now.replace(hour=3, minute=0))

        assert report.ready_for_delivery == 1
        assert _status(order) == OrderStatusCode.READY_FOR_DELIVERY.value

    def test_unknown_time_zone_falls_back(
        self, scheduler, order_factory, scan_now, caplog
    ):
        """Нераспознанный часовой пояс не останавливает просмотр."""
        caterer = Caterer.objects.create(
            caterer_name="Nowhere Foods",
            caterer_number="NF-1",
            time_zone="Nowhere/Unknown",
        )
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED,
            caterer=caterer,
            delivery_time="15:00",
        )

        with caplog.at_level(logging.WARNING):
            scheduler.run_scan(scan_now)

        assert _status(order) == OrderStatusCode.IN_PREPARATION.value
        assert "Nowhere/Unknown" in caplog.text

    def test_scan_limit_per_status(self, order_service, order_factory, scan_now):
        """Количество заказов ограничено для каждого статуса отдельно."""
        for _ in range(3):
            order_factory(status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="20:00")
            order_factory(status=OrderStatusCode.IN_PREPARATION, delivery_time="20:00")
        scheduler = OrderScheduler(order_service, scan_limit=2)

        report = scheduler.run_scan(scan_now)

        assert report.checked == 4

    @freeze_time("2026-07-15 12:00:00")
    def test_scan_uses_current_time(self, scheduler, order_factory):
        """Без явного момента используется текущее время."""
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="12:50"
        )

        scheduler.run_scan()

        assert _status(order) == OrderStatusCode.READY_FOR_DELIVERY.value

    @freeze_time("2026-07-15 12:00:00")
    def test_management_command_once(self, order_factory):
        """Команда с --once выполняет один просмотр и печатает итоги."""
        order = order_factory(
            status=OrderStatusCode.CATERER_CONFIRMED, delivery_time="14:00"
        )
        out = StringIO()

        call_command("run_order_scheduler", "--once", stdout=out)

        assert _status(order) == OrderStatusCode.IN_PREPARATION.value
        assert "Проверено: 1, изменено: 1" in out.getvalue()


class FakeOrderService:
    """Сервис заказов в памяти для тестов без базы данных."""

    def __init__(self, orders=(), fail_on_update=None):
        self.orders = list(orders)
        self.fail_on_update = fail_on_update
        self.updates = []
        self.scanned = threading.Event()
        self.on_scan = None

    def find_scan_candidates(self, statuses, date_from, date_to, limit):
        self.scanned.set()
        if self.on_scan:
            self.on_scan()
        return list(self.orders)

    def update_order_status(self, order_id, status, actor_role):
        if order_id == self.fail_on_update:
            raise DependencyUnavailable("Хранилище заказов недоступно")
        self.updates.append((order_id, status, actor_role))


def _fake_order(pk, status="caterer_confirmed", delivery_time="15:00"):
    return SimpleNamespace(
        pk=pk,
        order_number=f"KA{pk:06d}",
        status=status,
        delivery_date=date(2026, 7, 15),
        delivery_time=delivery_time,
        caterer_time_zone="UTC",
    )


class TestSchedulerBehaviour:
    """Тесты поведения планировщика без базы данных."""

    def test_updates_use_system_role(self, scan_now):
        """Изменения выполняются от имени роли SYSTEM."""
        service = FakeOrderService([_fake_order(1)])

        OrderScheduler(service).run_scan(scan_now)

        assert service.updates == [(1, OrderStatusCode.IN_PREPARATION, "SYSTEM")]

    def test_failure_does_not_abort_scan(self, scan_now):
        """Ошибка по одному заказу учитывается, остальные обрабатываются."""
        service = FakeOrderService(
            [_fake_order(1), _fake_order(2), _fake_order(3)], fail_on_update=2
        )

        report = OrderScheduler(service).run_scan(scan_now)

        assert report.checked == 3
        assert report.promoted == 2
        assert report.failed == 1
        assert 2 in report.errors

    def test_concurrent_scan_is_refused(self, scan_now):
        """Второй просмотр во время текущего не выполняется."""
        service = FakeOrderService([_fake_order(1)])
        scheduler = OrderScheduler(service)
        inner_reports = []
        service.on_scan = lambda: inner_reports.append(scheduler.run_scan(scan_now))

        report = scheduler.run_scan(scan_now)

        assert inner_reports == [ScanReport(concurrent=True)]
        assert report.concurrent is False
        assert report.promoted == 1

    def test_missing_delivery_time(self):
        """Заказ без времени доставки не разбирается."""
        scheduler = OrderScheduler(FakeOrderService())
        order = Order(status="caterer_confirmed", delivery_date=date(2026, 7, 15))

        with pytest.raises(MalformedTime):
            scheduler.evaluate_order(order)

    def test_settings_configuration(self, settings):
        """Пороги и интервал берутся из настроек."""
        settings.ORDER_SCHEDULER = {"INTERVAL_MINUTES": 5, "IN_PREPARATION_HOURS": 6}

        scheduler = OrderScheduler(FakeOrderService())

        assert scheduler.interval_seconds == 300
        assert scheduler.in_preparation_hours == 6
        assert scheduler.ready_for_delivery_hours == 1
        assert scheduler.scan_limit == 500

    def test_start_and_stop(self, caplog):
        """Запуск выполняет первый просмотр сразу, остановка завершает поток."""
        service = FakeOrderService()
        scheduler = OrderScheduler(service, interval_seconds=3600)

        scheduler.start()
        try:
            assert service.scanned.wait(timeout=5)
            assert scheduler.is_running

            with caplog.at_level(logging.WARNING):
                scheduler.start()
            assert "уже запущен" in caplog.text
        finally:
            scheduler.stop(timeout=5)

        assert scheduler.is_running is False
        assert scheduler.state == OrderScheduler.STATE_STOPPED

    def test_stop_without_start(self):
        scheduler = OrderScheduler(FakeOrderService())

        scheduler.stop()

        assert scheduler.state == OrderScheduler.STATE_STOPPED
