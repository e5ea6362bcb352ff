from typing import List, Optional

from django.http import HttpResponse
from document.constants import EmailPurpose, RecipientType
from document.services.dispatch_service import OrderDispatchService
from ninja import Query, Router
from order.services.order_service import OrderService

from ..auth.jwt import auth
from .schemas import (
    BulkStatusIn,
    BulkStatusOut,
    DispatchResultOut,
    DocumentPolicyOut,
    EmailPreviewOut,
    OrderCreate,
    OrderFilters,
    OrderOut,
    OrderUpdate,
    SendIn,
    SendToBothIn,
    SendToBothOut,
    SendToCatererIn,
    StatusUpdateIn,
)

router = Router(tags=["orders"], auth=auth)


def _policy_out(policy):
    return {
        "variant": policy.variant.value,
        "framing": policy.framing.value,
        "shows_pricing": policy.shows_pricing,
        "is_client_facing": policy.is_client_facing,
    }


def _actor_role(request):
    return request.auth.role


# Заказы
@router.get(
    "/orders",
    response=List[OrderOut],
    summary="Список заказов",
    description="Список заказов с фильтрами по статусу, датам доставки и тексту",
)
def list_orders(request, filters: OrderFilters = Query(...)):
    """Получение списка заказов."""
    return OrderService().list_orders(**filters.dict())


# Объявлен до маршрутов /orders/{order_id}, иначе "bulk-status" совпадает с order_id
@router.post(
    "/orders/bulk-status",
    response=BulkStatusOut,
    summary="Массовое изменение статуса",
    description="Изменение статуса нескольких заказов по принципу 'все или ничего'",
)
def bulk_update_status(request, bulk_data: BulkStatusIn):
    """Массовое изменение статуса заказов."""
    updated = OrderService().bulk_update_status(
        bulk_data.order_ids, bulk_data.status, _actor_role(request)
    )
    return {"updated": updated}


@router.get(
    "/orders/{order_id}",
    response=OrderOut,
    summary="Детали заказа",
    description="Получение подробной информации о заказе",
)
def get_order(request, order_id: int):
    """Получение информации о заказе."""
    return OrderService().get_order(order_id)


@router.post(
    "/orders",
    response={201: OrderOut},
    summary="Создание заказа",
    description="Создание нового заказа, номер назначается автоматически",
)
def create_order(request, order_data: OrderCreate):
    """Создание нового заказа."""
    order = OrderService().create_order(order_data.dict(exclude_none=True))
    return 201, order


@router.put(
    "/orders/{order_id}",
    response=OrderOut,
    summary="Изменение заказа",
    description="Изменение содержимого заказа, номер ревизии увеличивается",
)
def update_order(request, order_id: int, order_data: OrderUpdate):
    """Изменение содержимого заказа."""
    return OrderService().update_order(order_id, order_data.dict(exclude_unset=True))


# Статусы
@router.patch(
    "/orders/{order_id}/status",
    response=OrderOut,
    summary="Изменение статуса",
    description="Изменение статуса заказа. Статус 'paid' устанавливается через mark-paid",
)
def update_order_status(request, order_id: int, status_data: StatusUpdateIn):
    """Изменение статуса заказа."""
    return OrderService().update_order_status(
        order_id, status_data.status, _actor_role(request)
    )


@router.post(
    "/orders/{order_id}/mark-paid",
    response=OrderOut,
    summary="Оплата заказа",
    description="Отметить доставленный заказ оплаченным (только администратор)",
)
def mark_paid(request, order_id: int):
    """Отметить заказ оплаченным."""
    return OrderService().mark_paid(order_id, _actor_role(request))


# Документы и письма
@router.get(
    "/orders/{order_id}/document-policy",
    response=DocumentPolicyOut,
    summary="Вариант документа",
    description="Вариант документа (с ценами или без) для статуса заказа и получателя",
)
def get_document_policy(request, order_id: int, recipient: Optional[RecipientType] = None):
    """Получение варианта документа."""
    return _policy_out(OrderService().resolve_document(order_id, recipient))


@router.get(
    "/orders/{order_id}/document",
    summary="Документ заказа",
    description="Сформированный документ заказа для получателя",
)
def get_document(request, order_id: int, recipient: Optional[RecipientType] = None):
    """Получение документа заказа."""
    document = OrderService().render_document(order_id, recipient)
    response = HttpResponse(document.content, content_type=document.mime_type)
    response["Content-Disposition"] = f'inline; filename="{document.filename}"'
    return response


@router.get(
    "/orders/{order_id}/email-preview",
    response=EmailPreviewOut,
    summary="Предпросмотр письма",
    description="Назначение, тема, текст и вариант документа письма по заказу",
)
def get_email_preview(
    request,
    order_id: int,
    recipient: RecipientType,
    purpose: Optional[EmailPurpose] = None,
):
    """Предпросмотр письма по заказу."""
    preview = OrderService().resolve_email(order_id, recipient, purpose)
    return {
        "recipient": preview.recipient,
        "purpose": preview.policy.purpose.value,
        "body_template_key": preview.policy.body_template_key,
        "requires_elevated_role": preview.policy.requires_elevated_role,
        "document": _policy_out(preview.policy.document),
        "subject": preview.subject,
        "body": preview.body,
    }


@router.post(
    "/orders/{order_id}/send-to-client",
    response=DispatchResultOut,
    summary="Письмо клиенту",
    description="Отправка письма клиенту с документом заказа",
)
def send_to_client(request, order_id: int, send_data: SendIn):
    """Отправка письма клиенту."""
    return OrderDispatchService().send_to_client(
        order_id, _actor_role(request), **send_data.dict()
    )


@router.post(
    "/orders/{order_id}/send-to-caterer",
    response=DispatchResultOut,
    summary="Письмо кейтереру",
    description="Отправка письма кейтереру и необязательное изменение статуса",
)
def send_to_caterer(request, order_id: int, send_data: SendToCatererIn):
    """Отправка письма кейтереру."""
    return OrderDispatchService().send_to_caterer(
        order_id, _actor_role(request), **send_data.dict()
    )


@router.post(
    "/orders/{order_id}/send-to-both",
    response=SendToBothOut,
    summary="Письма клиенту и кейтереру",
    description="Отправка писем клиенту и кейтереру",
)
def send_to_both(request, order_id: int, send_data: SendToBothIn):
    """Отправка писем клиенту и кейтереру."""
    return OrderDispatchService().send_to_both(
        order_id, _actor_role(request), **send_data.dict()
    )
