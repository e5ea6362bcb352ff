import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


def money(verbose_name):
    return models.DecimalField(
        decimal_places=2,
        default=Decimal("0.00"),
        max_digits=10,
        verbose_name=verbose_name,
    )


def timestamps():
    return [
        (
            "created_at",
            models.DateTimeField(auto_now_add=True, verbose_name="Дата создания"),
        ),
        (
            "updated_at",
            models.DateTimeField(auto_now=True, verbose_name="Дата обновления"),
        ),
    ]


def pk():
    return (
        "id",
        models.BigAutoField(
            auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
        ),
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Airport",
            fields=[
                pk(),
                ("airport_name", models.CharField(max_length=255, verbose_name="Название")),
                (
                    "fbo_name",
                    models.CharField(blank=True, default="", max_length=255, verbose_name="FBO"),
                ),
                (
                    "fbo_email",
                    models.EmailField(blank=True, default="", max_length=254, verbose_name="Email FBO"),
                ),
                (
                    "fbo_phone",
                    models.CharField(blank=True, default="", max_length=50, verbose_name="Телефон FBO"),
                ),
                (
                    "airport_code_iata",
                    models.CharField(
                        blank=True, db_index=True, default="", max_length=3, verbose_name="Код IATA"
                    ),
                ),
                (
                    "airport_code_icao",
                    models.CharField(blank=True, default="", max_length=4, verbose_name="Код ICAO"),
                ),
                *timestamps(),
            ],
            options={
                "verbose_name": "Аэропорт",
                "verbose_name_plural": "Аэропорты",
                "ordering": ["airport_name"],
            },
        ),
        migrations.CreateModel(
            name="Caterer",
            fields=[
                pk(),
                ("caterer_name", models.CharField(max_length=255, verbose_name="Название")),
                ("caterer_number", models.CharField(max_length=100, verbose_name="Номер кейтерера")),
                (
                    "caterer_email",
                    models.EmailField(blank=True, default="", max_length=254, verbose_name="Email"),
                ),
                (
                    "airport_code_iata",
                    models.CharField(blank=True, default="", max_length=3, verbose_name="Код IATA"),
                ),
                (
                    "airport_code_icao",
                    models.CharField(blank=True, default="", max_length=4, verbose_name="Код ICAO"),
                ),
                (
                    "time_zone",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Имя зоны IANA, например America/New_York",
                        max_length=64,
                        verbose_name="Часовой пояс",
                    ),
                ),
                *timestamps(),
            ],
            options={
                "verbose_name": "Кейтерер",
                "verbose_name_plural": "Кейтереры",
                "ordering": ["caterer_name"],
            },
        ),
        migrations.CreateModel(
            name="Client",
            fields=[
                pk(),
                ("full_name", models.CharField(max_length=255, verbose_name="Полное имя")),
                (
                    "company_name",
                    models.CharField(blank=True, default="", max_length=255, verbose_name="Компания"),
                ),
                ("full_address", models.TextField(blank=True, default="", verbose_name="Адрес")),
                (
                    "email",
                    models.EmailField(blank=True, default="", max_length=254, verbose_name="Email"),
                ),
                (
                    "contact_number",
                    models.CharField(
                        blank=True, default="", max_length=50, verbose_name="Контактный телефон"
                    ),
                ),
                (
                    "additional_emails",
                    models.JSONField(blank=True, default=list, verbose_name="Дополнительные адреса"),
                ),
                *timestamps(),
            ],
            options={
                "verbose_name": "Клиент",
                "verbose_name_plural": "Клиенты",
                "ordering": ["full_name"],
            },
        ),
        migrations.CreateModel(
            name="Fbo",
            fields=[
                pk(),
                ("fbo_name", models.CharField(max_length=255, verbose_name="Название")),
                (
                    "fbo_email",
                    models.EmailField(blank=True, default="", max_length=254, verbose_name="Email"),
                ),
                (
                    "fbo_phone",
                    models.CharField(blank=True, default="", max_length=50, verbose_name="Телефон"),
                ),
                *timestamps(),
            ],
            options={
                "verbose_name": "FBO",
                "verbose_name_plural": "FBO",
                "ordering": ["fbo_name"],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                pk(),
                (
                    "order_number",
                    models.CharField(
                        db_index=True, max_length=50, unique=True, verbose_name="Номер заказа"
                    ),
                ),
                ("client_name", models.CharField(max_length=255, verbose_name="Имя клиента")),
                ("caterer_name", models.CharField(max_length=255, verbose_name="Кейтерер (текст)")),
                ("airport_name", models.CharField(max_length=255, verbose_name="Аэропорт (текст)")),
                (
                    "aircraft_tail_number",
                    models.CharField(blank=True, default="", max_length=20, verbose_name="Бортовой номер"),
                ),
                ("delivery_date", models.DateField(db_index=True, verbose_name="Дата доставки")),
                ("delivery_time", models.CharField(max_length=10, verbose_name="Время доставки")),
                (
                    "order_priority",
                    models.CharField(
                        choices=[
                            ("low", "Низкий"),
                            ("normal", "Обычный"),
                            ("high", "Высокий"),
                            ("urgent", "Срочный"),
                        ],
                        default="normal",
                        max_length=10,
                        verbose_name="Приоритет",
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("card", "Карта"), ("ACH", "ACH")],
                        default="card",
                        max_length=10,
                        verbose_name="Способ оплаты",
                    ),
                ),
                (
                    "order_type",
                    models.CharField(
                        choices=[
                            ("inflight", "Inflight order"),
                            ("qe_serv_hub", "QE Serv Hub Order"),
                            ("restaurant_pickup", "Restaurant Pickup Order"),
                        ],
                        default="inflight",
                        max_length=30,
                        verbose_name="Тип заказа",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("awaiting_quote", "Ожидает расчета"),
                            ("awaiting_client_approval", "Ожидает согласования клиентом"),
                            ("awaiting_caterer", "Ожидает подтверждения кейтерера"),
                            ("order_changed", "Заказ изменен"),
                            ("caterer_confirmed", "Подтвержден кейтерером"),
                            ("in_preparation", "Готовится"),
                            ("ready_for_delivery", "Готов к доставке"),
                            ("delivered", "Доставлен"),
                            ("paid", "Оплачен"),
                            ("cancelled", "Отменен"),
                        ],
                        db_index=True,
                        default="awaiting_quote",
                        max_length=32,
                        verbose_name="Статус заказа",
                    ),
                ),
                ("is_paid", models.BooleanField(default=False, verbose_name="Оплачен")),
                ("description", models.TextField(blank=True, default="", verbose_name="Описание")),
                ("notes", models.TextField(blank=True, default="", verbose_name="Примечания")),
                (
                    "reheating_instructions",
                    models.TextField(blank=True, default="", verbose_name="Инструкции по разогреву"),
                ),
                (
                    "packaging_instructions",
                    models.TextField(blank=True, default="", verbose_name="Инструкции по упаковке"),
                ),
                (
                    "dietary_restrictions",
                    models.TextField(blank=True, default="", verbose_name="Диетические ограничения"),
                ),
                ("delivery_fee", money("Стоимость доставки")),
                ("service_charge", money("Сервисный сбор")),
                ("coordination_fee", money("Сбор за координацию")),
                ("airport_fee", money("Аэропортовый сбор")),
                ("fbo_fee", money("Сбор FBO")),
                ("shopping_fee", money("Сбор за покупки")),
                ("restaurant_pickup_fee", money("Сбор за забор из ресторана")),
                ("airport_pickup_fee", money("Сбор за забор из аэропорта")),
                ("subtotal", money("Сумма позиций")),
                ("total", money("Итого")),
                (
                    "revision_count",
                    models.PositiveIntegerField(default=0, verbose_name="Номер ревизии"),
                ),
                *timestamps(),
                (
                    "completed_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="Дата выполнения"),
                ),
                (
                    "airport",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="order.airport",
                        verbose_name="Аэропорт",
                    ),
                ),
                (
                    "caterer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="order.caterer",
                        verbose_name="Кейтерер",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="order.client",
                        verbose_name="Клиент",
                    ),
                ),
                (
                    "fbo",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="order.fbo",
                        verbose_name="FBO",
                    ),
                ),
            ],
            options={
                "verbose_name": "Заказ",
                "verbose_name_plural": "Заказы",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status", "delivery_date"],
                        name="order_status_delivery_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                pk(),
                ("item_name", models.CharField(max_length=255, verbose_name="Название")),
                ("item_description", models.TextField(blank=True, default="", verbose_name="Описание")),
                ("portion_size", models.CharField(max_length=50, verbose_name="Количество")),
                (
                    "portion_serving",
                    models.CharField(blank=True, default="", max_length=50, verbose_name="Размер порции"),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="Цена")),
                (
                    "category",
                    models.CharField(blank=True, default="", max_length=100, verbose_name="Категория"),
                ),
                (
                    "packaging",
                    models.CharField(blank=True, default="", max_length=100, verbose_name="Упаковка"),
                ),
                ("sort_order", models.PositiveIntegerField(default=0, verbose_name="Порядок")),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="order.order",
                        verbose_name="Заказ",
                    ),
                ),
            ],
            options={
                "verbose_name": "Позиция заказа",
                "verbose_name_plural": "Позиции заказа",
                "ordering": ["sort_order", "id"],
            },
        ),
    ]
