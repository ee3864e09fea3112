"""Tests for the payment processors and their factory."""

from pathlib import Path

import pytest

from storefront.domain.exceptions import PaymentDeclinedError
from storefront.domain.model.checkout import PaymentMethod
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.config import Settings
from storefront.infrastructure.http.api_client import ApiClient
from storefront.infrastructure.payments.backend_payment_processor import (
    BackendPaymentProcessor,
)
from storefront.infrastructure.payments.mock_payment_processor import (
    MockPaymentProcessor,
)
from storefront.infrastructure.payments.payment_factory import get_payment_processor
from tests.fakes import FakeResponse, FakeSession


def _settings(adapter: str) -> Settings:
    return Settings(
        api_url="http://shop.test/api",
        api_token=None,
        data_dir=Path("/tmp/storefront"),
        payment_adapter=adapter,
        http_timeout=5.0,
        log_level="WARNING",
    )


class TestMockPaymentProcessor:

    def test_approves_and_records(self):
        processor = MockPaymentProcessor()
        auth = processor.authorize(Money.of("18.20"), PaymentMethod.CARD)
        assert auth.reference.startswith("pi_mock_")
        assert auth.amount == Money.of("18.20")
        assert processor.authorizations == [auth]

    def test_references_are_unique(self):
        processor = MockPaymentProcessor()
        a = processor.authorize(Money.of("1"), PaymentMethod.CASH)
        b = processor.authorize(Money.of("1"), PaymentMethod.CASH)
        assert a.reference != b.reference

    def test_declines_with_message(self):
        with pytest.raises(PaymentDeclinedError, match="card expired"):
            MockPaymentProcessor(decline_message="card expired").authorize(
                Money.of("5"), PaymentMethod.CARD
            )

    def test_declines_over_limit(self):
        processor = MockPaymentProcessor(limit=Money.of("10"))
        with pytest.raises(PaymentDeclinedError, match="insufficient funds"):
            processor.authorize(Money.of("10.01"), PaymentMethod.CARD)
        assert processor.authorizations == []


class TestBackendPaymentProcessor:

    def _processor(self, *responses) -> tuple[BackendPaymentProcessor, FakeSession]:
        session = FakeSession(*responses)
        return BackendPaymentProcessor(ApiClient("http://shop.test/api", session=session)), session

    def test_sends_amount_in_cents(self):
        processor, session = self._processor(FakeResponse(200, {"paymentIntentId": "pi_42"}))
        auth = processor.authorize(Money.of("18.20"), PaymentMethod.PAYPAL)

        assert auth.reference == "pi_42"
        call = session.calls[0]
        assert call["url"] == "http://shop.test/api/payments/create-payment-intent"
        assert call["json"] == {"amount": 1820, "paymentMethod": "paypal"}

    def test_reference_from_client_secret(self):
        processor, _ = self._processor(FakeResponse(200, {"clientSecret": "pi_77_secret_abc"}))
        assert processor.authorize(Money.of("5"), PaymentMethod.CARD).reference == "pi_77"

    def test_backend_error_is_a_decline(self):
        processor, _ = self._processor(FakeResponse(402, {"message": "Card declined"}))
        with pytest.raises(PaymentDeclinedError, match="Card declined"):
            processor.authorize(Money.of("5"), PaymentMethod.CARD)

    def test_no_reference_is_a_decline(self):
        processor, _ = self._processor(FakeResponse(200, {"status": "ok"}))
        with pytest.raises(PaymentDeclinedError, match="could not be started"):
            processor.authorize(Money.of("5"), PaymentMethod.CARD)


class TestPaymentFactory:

    def test_mock(self):
        processor = get_payment_processor(_settings("mock"), ApiClient("http://x", session=FakeSession()))
        assert isinstance(processor, MockPaymentProcessor)

    def test_backend(self):
        processor = get_payment_processor(_settings("backend"), ApiClient("http://x", session=FakeSession()))
        assert isinstance(processor, BackendPaymentProcessor)

    def test_unknown_adapter(self):
        with pytest.raises(ValueError, match="Unknown STOREFRONT_PAYMENT_ADAPTER"):
            get_payment_processor(_settings("stripe"), ApiClient("http://x", session=FakeSession()))
