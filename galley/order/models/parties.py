"""Справочные модели участников заказа.

Клиенты, кейтереры, аэропорты и FBO заказом только читаются,
их редактирование выполняется вне этого приложения.
"""

from django.db import models


class Client(models.Model):
    """Клиент."""

    full_name = models.CharField("Полное имя", max_length=255)
    company_name = models.CharField(
        "Компания", max_length=255, blank=True, default=""
    )
    full_address = models.TextField("Адрес", blank=True, default="")
    email = models.EmailField("Email", blank=True, default="")
    contact_number = models.CharField(
        "Контактный телефон", max_length=50, blank=True, default=""
    )
    additional_emails = models.JSONField(
        "Дополнительные адреса", default=list, blank=True
    )
    created_at = models.DateTimeField("Дата создания", auto_now_add=True)
    updated_at = models.DateTimeField("Дата обновления", auto_now=True)

    class Meta:
        verbose_name = "Клиент"
        verbose_name_plural = "Клиенты"
        ordering = ["full_name"]

    def __str__(self):
        return self.full_name

    @property
    def first_name(self) -> str:
        """Имя клиента для обращения в письмах."""
        parts = (self.full_name or "").split()
        return parts[0] if parts else ""


class Caterer(models.Model):
    """Кейтерер."""

    caterer_name = models.CharField("Название", max_length=255)
    caterer_number = models.CharField("Номер кейтерера", max_length=100)
    caterer_email = models.EmailField("Email", blank=True, default="")
    airport_code_iata = models.CharField(
        "Код IATA", max_length=3, blank=True, default=""
    )
    airport_code_icao = models.CharField(
        "Код ICAO", max_length=4, blank=True, default=""
    )
    time_zone = models.CharField(
        "Часовой пояс",
        max_length=64,
        blank=True,
        default="",
        help_text="Имя зоны IANA, например America/New_York",
    )
    created_at = models.DateTimeField("Дата создания", auto_now_add=True)
    updated_at = models.DateTimeField("Дата обновления", auto_now=True)

    class Meta:
        verbose_name = "Кейтерер"
        verbose_name_plural = "Кейтереры"
        ordering = ["caterer_name"]

    def __str__(self):
        return self.caterer_name


class Airport(models.Model):
    """Аэропорт."""

    airport_name = models.CharField("Название", max_length=255)
    fbo_name = models.CharField("FBO", max_length=255, blank=True, default="")
    fbo_email = models.EmailField("Email FBO", blank=True, default="")
    fbo_phone = models.CharField("Телефон FBO", max_length=50, blank=True, default="")
    airport_code_iata = models.CharField(
        "Код IATA", max_length=3, blank=True, default="", db_index=True
    )
    airport_code_icao = models.CharField(
        "Код ICAO", max_length=4, blank=True, default=""
    )
    created_at = models.DateTimeField("Дата создания", auto_now_add=True)
    updated_at = models.DateTimeField("Дата обновления", auto_now=True)

    class Meta:
        verbose_name = "Аэропорт"
        verbose_name_plural = "Аэропорты"
        ordering = ["airport_name"]

    def __str__(self):
        return self.airport_name

    @property
    def code(self) -> str:
        """Код аэропорта: IATA, иначе ICAO, иначе пустая строка."""
        return self.airport_code_iata or self.airport_code_icao or ""


class Fbo(models.Model):
    """FBO (терминал обслуживания бизнес-авиации)."""

    fbo_name = models.CharField("Название", max_length=255)
    fbo_email = models.EmailField("Email", blank=True, default="")
    fbo_phone = models.CharField("Телефон", max_length=50, blank=True, default="")
    created_at = models.DateTimeField("Дата создания", auto_now_add=True)
    updated_at = models.DateTimeField("Дата обновления", auto_now=True)

    class Meta:
        verbose_name = "FBO"
        verbose_name_plural = "FBO"
        ordering = ["fbo_name"]

    def __str__(self):
        return self.fbo_name
