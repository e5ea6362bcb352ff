from datetime import date
from decimal import Decimal
from typing import List, Optional

from document.constants import EmailPurpose
from ninja import Field, ModelSchema, Schema
from order.models import Order, OrderItem
from status.services.constants import get_status_names


class OrderItemIn(Schema):
    """Схема позиции заказа."""

    item_name: str = Field(..., description="Название позиции")
    item_description: Optional[str] = Field("", description="Описание")
    portion_size: str = Field(..., description="Количество")
    portion_serving: Optional[str] = Field("", description="Размер порции")
    price: Decimal = Field(..., description="Цена")
    category: Optional[str] = Field("", description="Категория")
    packaging: Optional[str] = Field("", description="Упаковка")


class OrderItemOut(ModelSchema):
    """Схема для отображения позиции заказа."""

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "item_name",
            "item_description",
            "portion_size",
            "portion_serving",
            "price",
            "category",
            "packaging",
        ]


class OrderFields(Schema):
    """Общие поля создания и изменения заказа."""

    order_number: Optional[str] = Field(None, description="Номер заказа")
    client_id: Optional[int] = Field(None, description="ID клиента")
    caterer_id: Optional[int] = Field(None, description="ID кейтерера")
    airport_id: Optional[int] = Field(None, description="ID аэропорта")
    fbo_id: Optional[int] = Field(None, description="ID FBO")
    client_name: Optional[str] = Field(None, description="Имя клиента")
    caterer_name: Optional[str] = Field(None, description="Кейтерер (текст)")
    airport_name: Optional[str] = Field(None, description="Аэропорт (текст)")
    aircraft_tail_number: Optional[str] = Field(None, description="Бортовой номер")
    delivery_date: Optional[str] = Field(None, description="Дата доставки YYYY-MM-DD")
    delivery_time: Optional[str] = Field(None, description="Время доставки HH:MM")
    order_priority: Optional[str] = Field(None, description="Приоритет")
    payment_method: Optional[str] = Field(None, description="Способ оплаты")
    order_type: Optional[str] = Field(None, description="Тип заказа")
    description: Optional[str] = Field(None, description="Описание")
    notes: Optional[str] = Field(None, description="Примечания")
    reheating_instructions: Optional[str] = None
    packaging_instructions: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    delivery_fee: Optional[Decimal] = None
    service_charge: Optional[Decimal] = None
    coordination_fee: Optional[Decimal] = None
    airport_fee: Optional[Decimal] = None
    fbo_fee: Optional[Decimal] = None
    shopping_fee: Optional[Decimal] = None
    restaurant_pickup_fee: Optional[Decimal] = None
    airport_pickup_fee: Optional[Decimal] = None


class OrderCreate(OrderFields):
    """Схема для создания заказа."""

    items: List[OrderItemIn] = Field(..., description="Позиции заказа")


class OrderUpdate(OrderFields):
    """Схема для изменения заказа. Статус через этот метод не меняется."""

    items: Optional[List[OrderItemIn]] = Field(None, description="Позиции заказа")


class OrderOut(ModelSchema):
    """Схема для отображения данных заказа."""

    client_id: Optional[int] = Field(None, description="ID клиента")
    caterer_id: Optional[int] = Field(None, description="ID кейтерера")
    airport_id: Optional[int] = Field(None, description="ID аэропорта")
    fbo_id: Optional[int] = Field(None, description="ID FBO")
    status_name: str = Field(..., description="Название статуса")
    items: List[OrderItemOut] = Field(..., description="Позиции заказа")

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "client_name",
            "caterer_name",
            "airport_name",
            "aircraft_tail_number",
            "delivery_date",
            "delivery_time",
            "order_priority",
            "payment_method",
            "order_type",
            "status",
            "is_paid",
            "description",
            "notes",
            "reheating_instructions",
            "packaging_instructions",
            "dietary_restrictions",
            "delivery_fee",
            "service_charge",
            "coordination_fee",
            "airport_fee",
            "fbo_fee",
            "shopping_fee",
            "restaurant_pickup_fee",
            "airport_pickup_fee",
            "subtotal",
            "total",
            "revision_count",
            "created_at",
            "updated_at",
            "completed_at",
        ]

    @staticmethod
    def resolve_status_name(obj):
        return get_status_names().get(obj.status, obj.status)


class OrderFilters(Schema):
    """Фильтры списка заказов."""

    status: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search: Optional[str] = None


class StatusUpdateIn(Schema):
    """Схема для изменения статуса заказа."""

    status: str = Field(..., description="Код нового статуса")


class BulkStatusIn(Schema):
    """Схема для массового изменения статуса."""

    order_ids: List[int] = Field(..., min_length=1, description="ID заказов")
    status: str = Field(..., description="Код нового статуса")


class BulkStatusOut(Schema):
    updated: int


class DocumentPolicyOut(Schema):
    """Вариант документа."""

    variant: str
    framing: str
    shows_pricing: bool
    is_client_facing: bool


class EmailPreviewOut(Schema):
    """Параметры, тема и текст письма."""

    recipient: str
    purpose: str
    body_template_key: str
    requires_elevated_role: bool
    document: DocumentPolicyOut
    subject: str
    body: str


class SendIn(Schema):
    """Схема отправки письма одному получателю."""

    cc: List[str] = Field(default_factory=list, description="Копия")
    purpose: Optional[EmailPurpose] = Field(None, description="Назначение письма")
    custom_subject: Optional[str] = None
    custom_message: Optional[str] = None


class SendToCatererIn(SendIn):
    """Схема отправки письма кейтереру."""

    update_status: Optional[str] = Field(
        None, description="Статус, который будет установлен после отправки"
    )


class SendToBothIn(Schema):
    """Схема отправки писем клиенту и кейтереру."""

    cc: List[str] = Field(default_factory=list, description="Копия")
    client_purpose: Optional[EmailPurpose] = None
    caterer_purpose: Optional[EmailPurpose] = None
    custom_client_subject: Optional[str] = None
    custom_caterer_subject: Optional[str] = None
    custom_client_message: Optional[str] = None
    custom_caterer_message: Optional[str] = None


class DispatchResultOut(Schema):
    """Результат отправки письма."""

    recipient: str
    email: str
    subject: str
    purpose: str
    document_variant: str
    order_number: str
    status: str
    message_id: Optional[str] = None
    status_updated: bool = False
    success: bool
    error: Optional[str] = None


class SendToBothOut(Schema):
    client: Optional[DispatchResultOut] = None
    caterer: Optional[DispatchResultOut] = None

