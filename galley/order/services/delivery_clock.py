"""
Определение момента доставки заказа.

Дата и время доставки хранятся в заказе как локальные значения аэропорта
(время может содержать авиационную пометку "L", local). Модуль переводит
их в абсолютный момент времени с учетом часового пояса кейтерера.

Основные компоненты:
    - DeliveryClock: Разбор даты и времени доставки, выбор часового пояса
    - DeliveryInstant: Результат разбора (момент, зона, предупреждение)
    - hours_until: Часы от текущего момента до доставки

Правила:
    - Дата: datetime.date или строка YYYY-MM-DD
    - Время: HH:MM в 24-часовом формате, допускается одна завершающая
      нецифровая пометка и пробелы по краям
    - Зона не указана: текущий часовой пояс Django (settings.TIME_ZONE)
    - Зона не распознана: текущий часовой пояс Django и предупреждение
      TimeZoneUnresolved, исключение не вызывается
    - Переход на летнее время учитывается через zoneinfo, несуществующее
      или неоднозначное локальное время разрешается как fold=0

Примеры использования:
    clock = DeliveryClock()
    result = clock.resolve("2026-07-15", "19:00L", "America/New_York")
    result.instant  # 2026-07-15 19:00-04:00
    hours_until(result.instant)

Примечания:
    - Неверная дата или время вызывают MalformedTime
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.utils import timezone

from ..exceptions import MalformedTime, TimeZoneUnresolved

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^(?P<hours>\d{1,2}):(?P<minutes>\d{2})(?P<marker>[^\d\s])?$")


@dataclass(frozen=True)
class DeliveryInstant:
    """Момент доставки."""

    instant: datetime
    time_zone: tzinfo
    warning: Optional[TimeZoneUnresolved] = None


def hours_until(instant: datetime, now: Optional[datetime] = None) -> float:
    """Количество часов от now (по умолчанию текущий момент) до instant."""
    now = now or timezone.now()
    return (instant - now).total_seconds() / 3600


def _zone_name(zone) -> str:
    return getattr(zone, "key", None) or str(zone)


class DeliveryClock:
    """Перевод локальной даты и времени доставки в абсолютный момент."""

    def parse_date(self, value) -> date:
        """Разобрать дату доставки."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                pass
        raise MalformedTime(f"Некорректная дата доставки: {value!r}")

    def parse_time(self, value) -> time:
        """Разобрать время доставки в формате HH:MM с необязательной пометкой."""
        if isinstance(value, time):
            return value
        match = TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise MalformedTime(f"Некорректное время доставки: {value!r}")

        hours, minutes = int(match["hours"]), int(match["minutes"])
        if hours > 23 or minutes > 59:
            raise MalformedTime(f"Некорректное время доставки: {value!r}")
        return time(hours, minutes)

    def resolve_zone(self, time_zone_name=None):
        """
        Выбрать часовой пояс.

        Returns:
            tuple: (tzinfo, TimeZoneUnresolved | None)
        """
        default_zone = timezone.get_current_timezone()
        if time_zone_name is None:
            return default_zone, None

        name = str(time_zone_name).strip()
        if name:
            try:
                return ZoneInfo(name), None
            except (ZoneInfoNotFoundError, ValueError):
                pass

        warning = TimeZoneUnresolved(time_zone_name, _zone_name(default_zone))
        logger.warning(
            "Часовой пояс '%s' не распознан, используется '%s'",
            time_zone_name,
            _zone_name(default_zone),
        )
        return default_zone, warning

    def resolve(self, delivery_date, delivery_time, time_zone_name=None) -> DeliveryInstant:
        """
        Определить момент доставки.

        Args:
            delivery_date: Дата доставки
            delivery_time: Локальное время доставки
            time_zone_name: Имя зоны IANA (опционально)

        Returns:
            DeliveryInstant: Момент доставки с часовым поясом

        Raises:
            MalformedTime: Если дата или время не разбираются
        """
        local_date = self.parse_date(delivery_date)
        local_time = self.parse_time(delivery_time)
        zone, warning = self.resolve_zone(time_zone_name)

        instant = datetime.combine(local_date, local_time).replace(tzinfo=zone, fold=0)
        return DeliveryInstant(instant=instant, time_zone=zone, warning=warning)
