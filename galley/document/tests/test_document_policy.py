"""Тесты для выбора варианта документа."""

import pytest
from document.constants import DocumentFraming, DocumentVariant, RecipientType
from document.services.document_policy import (
    CATERER_POLICY,
    CLIENT_PRICED,
    CLIENT_UNPRICED,
    DEFAULT_POLICY,
    DocumentPolicyResolver,
)
from status.constants import OrderStatusCode


@pytest.fixture
def resolver():
    return DocumentPolicyResolver()


class TestDocumentPolicyResolver:
    """Тесты таблиц вариантов документа."""

    @pytest.mark.parametrize("status", list(OrderStatusCode))
    def test_caterer_never_sees_pricing(self, resolver, status):
        """Кейтерер при любом статусе получает документ без цен."""
        policy = resolver.resolve(status, RecipientType.CATERER)

        assert policy == CATERER_POLICY
        assert policy.variant == DocumentVariant.WITHOUT_PRICING
        assert policy.framing == DocumentFraming.CATERER_FACING

    @pytest.mark.parametrize(
        "status, expected",
        [
            ("awaiting_quote", CLIENT_PRICED),
            ("awaiting_client_approval", CLIENT_PRICED),
            ("paid", CLIENT_PRICED),
            ("awaiting_caterer", CLIENT_UNPRICED),
            ("caterer_confirmed", CLIENT_UNPRICED),
            ("in_preparation", CLIENT_UNPRICED),
            ("ready_for_delivery", CLIENT_UNPRICED),
            ("delivered", CLIENT_UNPRICED),
            ("order_changed", CLIENT_UNPRICED),
            ("cancelled", CLIENT_UNPRICED),
        ],
    )
    def test_client_table(self, resolver, status, expected):
        """Клиент видит цены при расчете, согласовании и оплате."""
        assert resolver.resolve(status, "client") == expected

    @pytest.mark.parametrize(
        "status, expected",
        [
            ("awaiting_client_approval", CLIENT_PRICED),
            ("paid", CLIENT_PRICED),
            ("caterer_confirmed", CLIENT_UNPRICED),
            ("delivered", CLIENT_UNPRICED),
            ("awaiting_quote", DEFAULT_POLICY),
            ("in_preparation", DEFAULT_POLICY),
            ("cancelled", DEFAULT_POLICY),
        ],
    )
    def test_download_without_recipient(self, resolver, status, expected):
        """Без получателя действует таблица скачивания."""
        assert resolver.resolve(status) == expected
        assert resolver.resolve(status, "") == expected

    def test_unknown_status_gives_default(self, resolver):
        """Неизвестный статус дает вариант по умолчанию."""
        assert resolver.resolve("lost", "client") == DEFAULT_POLICY
        assert resolver.resolve(None, "caterer") == DEFAULT_POLICY

    def test_unknown_recipient(self, resolver):
        with pytest.raises(ValueError):
            resolver.resolve("paid", "pilot")

    def test_resolution_is_deterministic(self, resolver):
        """Повторный выбор дает тот же результат."""
        results = {resolver.resolve("paid", "client") for _ in range(5)}

        assert results == {CLIENT_PRICED}

    def test_policy_flags(self):
        assert CLIENT_PRICED.shows_pricing and CLIENT_PRICED.is_client_facing
        assert not CATERER_POLICY.shows_pricing
        assert not CATERER_POLICY.is_client_facing
