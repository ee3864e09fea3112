from __future__ import annotations

from storefront.domain.repository.payment_processor import PaymentProcessor
from storefront.infrastructure.config import Settings
from storefront.infrastructure.http.api_client import ApiClient


def get_payment_processor(settings: Settings, client: ApiClient) -> PaymentProcessor:
    """Select a processor based on settings.

    Defaults to the mock processor so local runs are deterministic unless
    explicitly configured otherwise.
    """
    mode = settings.payment_adapter

    if mode == "mock":
        from storefront.infrastructure.payments.mock_payment_processor import (
            MockPaymentProcessor,
        )

        return MockPaymentProcessor()

    if mode == "backend":
        from storefront.infrastructure.payments.backend_payment_processor import (
            BackendPaymentProcessor,
        )

        return BackendPaymentProcessor(client)

    raise ValueError(
        f"Unknown STOREFRONT_PAYMENT_ADAPTER={mode!r}. Expected mock or backend."
    )
