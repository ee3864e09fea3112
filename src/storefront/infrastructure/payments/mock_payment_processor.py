from __future__ import annotations

from uuid import uuid4

from storefront.domain.exceptions import PaymentDeclinedError
from storefront.domain.model.checkout import PaymentMethod
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.payment_processor import (
    PaymentAuthorization,
    PaymentProcessor,
)


class MockPaymentProcessor(PaymentProcessor):
    """Deterministic processor for local development and tests.

    Approves everything unless told to decline, either always
    (``decline_message``) or above a spending limit (``limit``).
    """

    def __init__(
        self,
        decline_message: str | None = None,
        limit: Money | None = None,
    ) -> None:
        self._decline_message = decline_message
        self._limit = limit
        self.authorizations: list[PaymentAuthorization] = []

    def authorize(self, amount: Money, method: PaymentMethod) -> PaymentAuthorization:
        if self._decline_message:
            raise PaymentDeclinedError(self._decline_message)
        if self._limit is not None and amount > self._limit:
            raise PaymentDeclinedError("insufficient funds")

        authorization = PaymentAuthorization(
            reference=f"pi_mock_{uuid4().hex[:16]}",
            amount=amount,
            method=method,
        )
        self.authorizations.append(authorization)
        return authorization
