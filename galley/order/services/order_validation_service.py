"""Сервис валидации заказов."""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError

from ..constants import (
    FEE_FIELDS,
    ORDER_PRIORITY_CHOICES,
    ORDER_TYPE_CHOICES,
    PAYMENT_METHOD_CHOICES,
)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# HH:MM, допускается авиационная пометка L (local)
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d[Ll]?$")

REQUIRED_FIELDS = (
    "client_name",
    "caterer_name",
    "airport_name",
    "delivery_date",
    "delivery_time",
    "order_priority",
    "payment_method",
)


class OrderValidationService:
    """Сервис для валидации данных заказа."""

    @staticmethod
    def normalize(data: dict) -> dict:
        """Убрать пробелы по краям строк, бортовой номер в верхний регистр."""
        normalized = dict(data)
        for field in ("client_name", "caterer_name", "airport_name", "delivery_time"):
            if isinstance(normalized.get(field), str):
                normalized[field] = normalized[field].strip()
        if isinstance(normalized.get("aircraft_tail_number"), str):
            normalized["aircraft_tail_number"] = (
                normalized["aircraft_tail_number"].strip().upper()
            )
        return normalized

    @classmethod
    def validate(cls, data: dict, creating: bool) -> dict:
        """
        Проверить данные заказа.

        Args:
            data: Данные заказа
            creating: True для создания (обязательные поля и позиции)

        Returns:
            dict: Нормализованные данные с датой доставки типа date

        Raises:
            ValidationError: Словарь {поле: сообщение} со всеми ошибками
        """
        data = cls.normalize(data)
        errors = {}

        if creating:
            for field in REQUIRED_FIELDS:
                if not data.get(field):
                    errors[field] = "Обязательное поле"

        cls._validate_choice(data, "order_priority", ORDER_PRIORITY_CHOICES, errors)
        cls._validate_choice(data, "payment_method", PAYMENT_METHOD_CHOICES, errors)
        cls._validate_choice(data, "order_type", ORDER_TYPE_CHOICES, errors)

        if data.get("delivery_date"):
            try:
                data["delivery_date"] = cls.validate_delivery_date(data["delivery_date"])
            except ValidationError as e:
                errors["delivery_date"] = e.messages[0]

        if data.get("delivery_time"):
            try:
                cls.validate_delivery_time(data["delivery_time"])
            except ValidationError as e:
                errors["delivery_time"] = e.messages[0]

        for field in FEE_FIELDS:
            if data.get(field) is not None:
                try:
                    data[field] = cls.validate_amount(data[field], field)
                except ValidationError as e:
                    errors[field] = e.messages[0]

        if "items" in data or creating:
            items_errors = cls.validate_items(data.get("items") or [], creating)
            if items_errors:
                errors["items"] = items_errors

        if errors:
            raise ValidationError(errors)
        return data

    @staticmethod
    def _validate_choice(data, field, choices, errors):
        value = data.get(field)
        allowed = [code for code, _ in choices]
        if value and value not in allowed:
            errors[field] = f"Допустимые значения: {', '.join(allowed)}"

    @staticmethod
    def validate_delivery_date(value) -> date:
        """Валидация даты доставки (YYYY-MM-DD)."""
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            raise ValidationError("Дата доставки должна быть в формате YYYY-MM-DD")
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValidationError("Некорректная дата доставки")

    @staticmethod
    def validate_delivery_time(value) -> None:
        """Валидация времени доставки (HH:MM, 24 часа)."""
        if not isinstance(value, str) or not TIME_PATTERN.match(value):
            raise ValidationError("Время доставки должно быть в формате HH:MM (24 часа)")

    @staticmethod
    def validate_amount(value, field) -> Decimal:
        """Валидация неотрицательной суммы."""
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"{field}: требуется число")
        if amount < 0:
            raise ValidationError(f"{field}: сумма не может быть отрицательной")
        return amount

    @staticmethod
    def validate_items(items, creating: bool) -> list:
        """Валидация позиций заказа. Возвращает список сообщений об ошибках."""
        errors = []
        if creating and not items:
            errors.append("Требуется хотя бы одна позиция")

        for index, item in enumerate(items):
            if not item.get("item_name"):
                errors.append(f"items[{index}].item_name: обязательное поле")
            if not item.get("portion_size"):
                errors.append(f"items[{index}].portion_size: обязательное поле")
            price = item.get("price")
            if price is None:
                errors.append(f"items[{index}].price: обязательное поле")
                continue
            try:
                if Decimal(str(price)) <= 0:
                    errors.append(f"items[{index}].price: цена должна быть больше 0")
            except InvalidOperation:
                errors.append(f"items[{index}].price: требуется число")
        return errors

    @staticmethod
    def validate_order_number(order_number: str, exists: bool) -> None:
        """Валидация уникальности номера заказа."""
        if exists:
            raise ValidationError(
                {"order_number": "Заказ с таким номером уже существует"}
            )
