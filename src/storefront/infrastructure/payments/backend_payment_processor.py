"""PaymentProcessor that asks the backend to open a payment intent.

The backend talks to the card processor; the storefront sends the amount in
cents and gets back the intent that the order must reference.  Card data is
entered in the processor's hosted form and never passes through here.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import PaymentDeclinedError
from storefront.domain.model.checkout import PaymentMethod
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.payment_processor import (
    PaymentAuthorization,
    PaymentProcessor,
)
from storefront.infrastructure.http.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class BackendPaymentProcessor(PaymentProcessor):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def authorize(self, amount: Money, method: PaymentMethod) -> PaymentAuthorization:
        try:
            payload = self._client.post(
                "/payments/create-payment-intent",
                {"amount": amount.cents, "paymentMethod": method.value},
            )
        except ApiError as exc:
            raise PaymentDeclinedError(exc.message) from exc

        reference = _intent_reference(payload)
        if not reference:
            raise PaymentDeclinedError("The payment could not be started. Try again later.")

        logger.info("Payment intent %s opened for %s", reference, amount)
        return PaymentAuthorization(reference=reference, amount=amount, method=method)


def _intent_reference(payload: object) -> str | None:
    if not isinstance(payload, dict):
        return None
    for key in ("paymentIntentId", "id"):
        if payload.get(key):
            return str(payload[key])
    # client secrets look like "pi_123_secret_abc"; the intent id is the prefix
    secret = payload.get("clientSecret")
    if secret and "_secret_" in str(secret):
        return str(secret).split("_secret_", 1)[0]
    return None
