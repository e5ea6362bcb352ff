"""Запуск планировщика автоматического продвижения статусов заказов."""

import logging

from django.core.management.base import BaseCommand

from order.services.order_scheduler import OrderScheduler
from order.services.order_service import OrderService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Продвигает статусы заказов по времени до доставки"

    def add_arguments(self, parser):
        parser.add_argument(
            "--once",
            action="store_true",
            help="Выполнить один просмотр заказов и завершиться",
        )

    def handle(self, *args, **options):
        scheduler = OrderScheduler(OrderService())

        if options["once"]:
            report = scheduler.run_scan()
            self.stdout.write(
                f"Проверено: {report.checked}, изменено: {report.promoted} "
                f"(готовятся: {report.in_preparation}, "
                f"готовы к доставке: {report.ready_for_delivery}), "
                f"пропущено: {report.skipped}, ошибок: {report.failed}"
            )
            for order_id, message in report.errors.items():
                self.stderr.write(f"Заказ {order_id}: {message}")
            return

        scheduler.start()
        self.stdout.write("Планировщик запущен, для остановки нажмите Ctrl+C")
        try:
            while scheduler.is_running:
                scheduler.join(timeout=1)
        except KeyboardInterrupt:
            logger.info("Получен сигнал остановки планировщика")
        finally:
            scheduler.stop()
