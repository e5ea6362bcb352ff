"""Тесты для отправки писем по заказам."""

import smtplib

import pytest
from django.core import mail
from django.core.mail import EmailMultiAlternatives
from document.services.dispatch_service import OrderDispatchService
from document.services.transport import DjangoMailTransport, OutgoingEmail
from order.exceptions import DependencyUnavailable, RecipientUnavailable
from order.models import Client
from status.constants import OrderStatusCode
from status.exceptions import Forbidden, InvalidTransition
from user.constants import RoleCode


@pytest.fixture
def dispatch(email_settings, order_service):
    """Сервис отправки с почтой в памяти."""
    return OrderDispatchService(order_service=order_service)


class FailingTransport(DjangoMailTransport):
    """Транспорт, у которого недоступен сервер для одного адреса."""

    def __init__(self, failing_address):
        super().__init__()
        self.failing_address = failing_address

    def send(self, email: OutgoingEmail) -> str:
        if self.failing_address in email.to:
            raise DependencyUnavailable("Почтовый сервер недоступен")
        return super().send(email)


@pytest.mark.django_db
class TestSendToClient:
    """Тесты писем клиенту."""

    def test_send_to_client(self, dispatch, order_factory):
        """Клиент получает письмо с документом с ценами и копией."""
        order = order_factory(status=OrderStatusCode.AWAITING_CLIENT_APPROVAL)

        result = dispatch.send_to_client(
            order.pk, RoleCode.CSR, cc=["ops@galley.local", " ", ""]
        )

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ["john@smith-aviation.com"]
        assert message.cc == ["ops@galley.local"]
        assert message.subject == (
            f"Galley Order#{order.order_number} / LTN / 07/15/2026 15:00"
            " / Order Estimate - This Order Is Not Live"
        )
        assert message.body.startswith("Dear John,")
        assert message.attachments[0][0] == (
            f"order_{order.order_number}_with_pricing.html"
        )
        assert message.extra_headers["Message-ID"] == result.message_id
        assert result.success
        assert result.purpose == "quote"
        assert result.document_variant == "with_pricing"

    def test_custom_subject_and_message(self, dispatch, order_factory):
        order = order_factory(status=OrderStatusCode.CATERER_CONFIRMED)

        dispatch.send_to_client(
            order.pk,
            RoleCode.CSR,
            custom_subject="Your catering order",
            custom_message="See attached.",
        )

        assert mail.outbox[0].subject == "Your catering order"
        assert mail.outbox[0].body == "See attached."

    def test_client_without_email(self, dispatch, order_factory):
        """Клиент без адреса не получает письмо."""
        no_email = Client.objects.create(full_name="Jane Roe")
        order = order_factory(client=no_email)

        with pytest.raises(RecipientUnavailable):
            dispatch.send_to_client(order.pk, RoleCode.CSR)

        assert mail.outbox == []

    def test_paid_order_requires_admin(self, dispatch, order_factory):
        """Письмо по оплаченному заказу отправляет только администратор."""
        order = order_factory(status=OrderStatusCode.PAID)

        with pytest.raises(Forbidden):
            dispatch.send_to_client(order.pk, RoleCode.CSR)
        assert mail.outbox == []

        result = dispatch.send_to_client(order.pk, RoleCode.ADMIN)

        assert result.purpose == "invoice"
        assert mail.outbox[0].subject.endswith(" Final Invoice")

    def test_invoice_override_requires_admin(self, dispatch, order_factory):
        order = order_factory(status=OrderStatusCode.IN_PREPARATION)

        with pytest.raises(Forbidden):
            dispatch.send_to_client(order.pk, RoleCode.CSR, purpose="invoice")

        result = dispatch.send_to_client(order.pk, RoleCode.ADMIN, purpose="invoice")
        assert result.document_variant == "with_pricing"

    def test_mail_server_failure(self, dispatch, order_factory, monkeypatch):
        """Ошибка почтового сервера превращается в DependencyUnavailable."""
        order = order_factory()

        def fail(self, fail_silently=False):
            raise smtplib.SMTPServerDisconnected("Connection unexpectedly closed")

        monkeypatch.setattr(EmailMultiAlternatives, "send", fail)

        with pytest.raises(DependencyUnavailable) as exc_info:
            dispatch.send_to_client(order.pk, RoleCode.CSR)

        assert exc_info.value.retryable is True


@pytest.mark.django_db
class TestSendToCaterer:
    """Тесты писем кейтереру."""

    def test_send_to_caterer_with_status_update(self, dispatch, order_factory):
        """После отправки запроса подтверждения статус меняется."""
        order = order_factory(status=OrderStatusCode.AWAITING_CATERER)

        result = dispatch.send_to_caterer(
            order.pk, RoleCode.CSR, update_status="caterer_confirmed"
        )

        message = mail.outbox[0]
        assert message.to == ["orders@skykitchen.com"]
        assert message.subject.endswith(" / Conf Request")
        assert message.body.startswith("Dear Team,")
        assert message.attachments[0][0].endswith("_without_pricing.html")
        assert result.status_updated is True
        assert result.status == OrderStatusCode.CATERER_CONFIRMED.value
        order.refresh_from_db()
        assert order.status == OrderStatusCode.CATERER_CONFIRMED.value

    def test_caterer_document_never_priced(self, dispatch, order_factory):
        order = order_factory(status=OrderStatusCode.AWAITING_CLIENT_APPROVAL)

        result = dispatch.send_to_caterer(order.pk, RoleCode.CSR)

        assert result.document_variant == "without_pricing"
        # Вложения text/html Django хранит строкой
        assert "45.00" not in mail.outbox[0].attachments[0][1]

    def test_paid_update_refused_before_sending(self, dispatch, order_factory):
        """Статус "paid" после отправки не устанавливается, письмо не уходит."""
        order = order_factory(status=OrderStatusCode.DELIVERED)

        with pytest.raises(Forbidden):
            dispatch.send_to_caterer(order.pk, RoleCode.ADMIN, update_status="paid")

        assert mail.outbox == []
        order.refresh_from_db()
        assert order.status == OrderStatusCode.DELIVERED.value

    def test_invalid_update_refused_before_sending(self, dispatch, order_factory):
        order = order_factory(status=OrderStatusCode.CANCELLED)

        with pytest.raises(InvalidTransition):
            dispatch.send_to_caterer(
                order.pk, RoleCode.CSR, update_status="in_preparation"
            )

        assert mail.outbox == []


@pytest.mark.django_db
class TestSendToBoth:
    """Тесты писем клиенту и кейтереру."""

    def test_send_to_both(self, dispatch, order_factory):
        order = order_factory(status=OrderStatusCode.CATERER_CONFIRMED)

        results = dispatch.send_to_both(order.pk, RoleCode.CSR)

        assert len(mail.outbox) == 2
        assert results["client"].purpose == "confirmation"
        assert results["caterer"].purpose == "order_request"
        assert results["client"].success and results["caterer"].success

    def test_recipient_without_address_is_skipped(self, dispatch, order_factory):
        no_email = Client.objects.create(full_name="Jane Roe")
        order = order_factory(client=no_email)

        results = dispatch.send_to_both(order.pk, RoleCode.CSR)

        assert results["client"] is None
        assert results["caterer"].email == "orders@skykitchen.com"
        assert len(mail.outbox) == 1

    def test_failure_for_one_recipient(self, email_settings, order_service, order_factory):
        """Ошибка отправки одному получателю не отменяет письмо другому."""
        dispatch = OrderDispatchService(
            order_service=order_service,
            transport=FailingTransport("orders@skykitchen.com"),
        )
        order = order_factory(status=OrderStatusCode.IN_PREPARATION)

        results = dispatch.send_to_both(order.pk, RoleCode.CSR)

        assert results["client"].success
        assert results["caterer"].success is False
        assert "недоступен" in results["caterer"].error
        assert [message.to for message in mail.outbox] == [["john@smith-aviation.com"]]
