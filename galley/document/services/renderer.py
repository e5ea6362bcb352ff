"""
Формирование документа по заказу.

DocumentRenderer задает интерфейс формирования документа, реализация по
умолчанию HtmlDocumentRenderer строит HTML через шаблоны Django.
Генерация PDF подключается отдельной реализацией интерфейса.

Примеры использования:
    renderer = HtmlDocumentRenderer()
    document = renderer.render(order, policy)
    document.content  # bytes
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from django.conf import settings
from django.template.loader import render_to_string
from status.services.constants import get_status_names

from ..constants import DOCUMENT_MIME_TYPE
from .document_policy import DocumentPolicy


@dataclass(frozen=True)
class RenderedDocument:
    """Сформированный документ."""

    content: bytes
    filename: str
    mime_type: str
    policy: DocumentPolicy


class DocumentRenderer(ABC):
    """Интерфейс формирования документа по заказу."""

    @abstractmethod
    def render(self, order, policy: DocumentPolicy) -> RenderedDocument:
        """Сформировать документ для заказа в заданном варианте."""


class HtmlDocumentRenderer(DocumentRenderer):
    """Документ в формате HTML на шаблонах Django."""

    template_name = "document/order_document.html"

    def get_context(self, order, policy: DocumentPolicy) -> dict:
        items = list(order.items.all())
        if policy.is_client_facing:
            heading = get_status_names().get(order.status, order.status)
        else:
            heading = f"Revision {order.revision_count}"

        return {
            "brand": settings.EMAIL_SUBJECT_BRAND,
            "order": order,
            "items": items,
            "policy": policy,
            "show_pricing": policy.shows_pricing,
            "heading": heading,
            "client_facing": policy.is_client_facing,
        }

    def get_filename(self, order, policy: DocumentPolicy) -> str:
        return f"order_{order.order_number}_{policy.variant.value}.html"

    def render(self, order, policy: DocumentPolicy) -> RenderedDocument:
        html = render_to_string(self.template_name, self.get_context(order, policy))
        return RenderedDocument(
            content=html.encode("utf-8"),
            filename=self.get_filename(order, policy),
            mime_type=DOCUMENT_MIME_TYPE,
            policy=policy,
        )
