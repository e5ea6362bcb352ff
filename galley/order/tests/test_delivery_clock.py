"""Тесты для определения момента доставки."""

import logging
from datetime import date, datetime, time, timedelta, timezone as dt_timezone

import pytest
from order.exceptions import MalformedTime, TimeZoneUnresolved
from order.services.delivery_clock import hours_until

UTC = dt_timezone.utc


class TestDeliveryClockParsing:
    """Тесты разбора даты и времени доставки."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("19:00", time(19, 0)),
            ("19:00L", time(19, 0)),
            ("7:05", time(7, 5)),
            ("  23:59 ", time(23, 59)),
            ("00:00", time(0, 0)),
        ],
    )
    def test_parse_valid_time(self, clock, value, expected):
        """Допустимые форматы времени."""
        assert clock.parse_time(value) == expected

    @pytest.mark.parametrize(
        "value", ["24:00", "12:60", "noon", "1900", "19:00LL", "19:00 L", "", None]
    )
    def test_parse_malformed_time(self, clock, value):
        """Некорректное время вызывает MalformedTime."""
        with pytest.raises(MalformedTime):
            clock.parse_time(value)

    def test_parse_date(self, clock):
        """Дата принимается строкой ISO и объектом date."""
        assert clock.parse_date("2026-07-15") == date(2026, 7, 15)
        assert clock.parse_date(date(2026, 7, 15)) == date(2026, 7, 15)

    @pytest.mark.parametrize("value", ["2026-13-01", "15.07.2026", "", None])
    def test_parse_malformed_date(self, clock, value):
        """Некорректная дата вызывает MalformedTime."""
        with pytest.raises(MalformedTime):
            clock.parse_date(value)


class TestDeliveryClockTimeZones:
    """Тесты часовых поясов и перехода на летнее время."""

    def test_summer_time_in_new_york(self, clock):
        """19:00 по Нью-Йорку летом (EDT, UTC-4) - это 23:00 UTC."""
        result = clock.resolve("2026-07-15", "19:00L", "America/New_York")

        assert result.instant.astimezone(UTC) == datetime(2026, 7, 15, 23, 0, tzinfo=UTC)
        assert result.warning is None

    def test_winter_time_in_new_york(self, clock):
        """19:00 по Нью-Йорку зимой (EST, UTC-5) - это 00:00 UTC следующего дня."""
        result = clock.resolve("2026-01-15", "19:00", "America/New_York")

        assert result.instant.astimezone(UTC) == datetime(2026, 1, 16, 0, 0, tzinfo=UTC)

    def test_nonexistent_local_time(self, clock):
        """Время в разрыве перехода на летнее время считается по старому смещению."""
        result = clock.resolve("2026-03-08", "02:30", "America/New_York")

        assert result.instant.astimezone(UTC) == datetime(2026, 3, 8, 7, 30, tzinfo=UTC)

    def test_ambiguous_local_time(self, clock):
        """Неоднозначное время разрешается как первое наступление."""
        result = clock.resolve("2026-11-01", "01:30", "America/New_York")

        assert result.instant.astimezone(UTC) == datetime(2026, 11, 1, 5, 30, tzinfo=UTC)

    def test_no_time_zone_uses_default(self, clock):
        """Без часового пояса используется часовой пояс проекта (UTC в тестах)."""
        result = clock.resolve("2026-07-15", "19:00")

        assert result.instant.astimezone(UTC) == datetime(2026, 7, 15, 19, 0, tzinfo=UTC)
        assert result.warning is None

    def test_unknown_time_zone_falls_back_with_warning(self, clock, caplog):
        """Нераспознанный часовой пояс заменяется и логируется, исключения нет."""
        with caplog.at_level(logging.WARNING, logger="order.services.delivery_clock"):
            result = clock.resolve("2026-07-15", "19:00", "Mars/Olympus_Mons")

        assert isinstance(result.warning, TimeZoneUnresolved)
        assert result.warning.time_zone_name == "Mars/Olympus_Mons"
        assert result.warning.fallback_name == "UTC"
        assert result.instant.astimezone(UTC) == datetime(2026, 7, 15, 19, 0, tzinfo=UTC)
        assert "Mars/Olympus_Mons" in caplog.text

    def test_malformed_time_is_not_swallowed(self, clock):
        """Некорректное время не подменяется значением по умолчанию."""
        with pytest.raises(MalformedTime):
            clock.resolve("2026-07-15", "7pm", "America/New_York")


class TestHoursUntil:
    """Тесты расчета часов до доставки."""

    def test_hours_until_future(self):
        now = datetime(2026, 7, 15, 12, 0, tzinfo=UTC)
        assert hours_until(now + timedelta(hours=3), now) == 3

    def test_hours_until_past(self):
        now = datetime(2026, 7, 15, 12, 0, tzinfo=UTC)
        assert hours_until(now - timedelta(minutes=30), now) == -0.5
