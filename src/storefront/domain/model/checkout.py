"""CheckoutSession: the state of one pass through the checkout wizard.

Checkout is strictly linear: ADDRESS -> PAYMENT -> REVIEW.  The address
must come first because shipping affects the amount to authorize, and the
payment must be authorized before the backend will reserve stock for the
order.  The session is ephemeral and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import CheckoutStateError, ValidationError
from storefront.domain.model.address import Address


class CheckoutStep(Enum):
    ADDRESS = "address"
    PAYMENT = "payment"
    REVIEW = "review"


class PaymentMethod(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    CASH = "cash"


@dataclass
class CheckoutSession:
    """Aggregate for a single checkout attempt.

    Invariants:
    - REVIEW is never reached without an address and a payment reference
    - an order can only be submitted from REVIEW
    """

    step: CheckoutStep = CheckoutStep.ADDRESS
    address: Address | None = None
    payment_method: PaymentMethod | None = None
    payment_reference: str | None = None
    last_error: str | None = None

    # --- Transitions ----------------------------------------------------------

    def submit_address(self, address: Address) -> None:
        """Transition ADDRESS -> PAYMENT."""
        self._expect(CheckoutStep.ADDRESS)
        self.address = address
        self.last_error = None
        self.step = CheckoutStep.PAYMENT

    def ensure_ready_to_pay(self) -> None:
        """Raise unless a charge may be requested right now."""
        self._expect(CheckoutStep.PAYMENT)
        if self.address is None:
            raise CheckoutStateError("A delivery address is required before payment")

    def record_authorization(self, method: PaymentMethod, reference: str) -> None:
        """Transition PAYMENT -> REVIEW once the processor approved the charge."""
        self.ensure_ready_to_pay()
        if not reference or not reference.strip():
            raise ValidationError("Payment authorization reference is required")
        self.payment_method = method
        self.payment_reference = reference
        self.last_error = None
        self.step = CheckoutStep.REVIEW

    def record_payment_failure(self, message: str) -> None:
        """Stay on PAYMENT and remember why the processor said no."""
        self._expect(CheckoutStep.PAYMENT)
        self.last_error = message

    def go_back(self) -> None:
        """Step back one screen.

        Leaving REVIEW drops the authorization so the next pass through
        PAYMENT obtains a fresh one.  Leaving PAYMENT keeps the address so
        the form can be pre-filled.
        """
        if self.step == CheckoutStep.REVIEW:
            self.payment_method = None
            self.payment_reference = None
            self.step = CheckoutStep.PAYMENT
        elif self.step == CheckoutStep.PAYMENT:
            self.step = CheckoutStep.ADDRESS
        self.last_error = None

    def ensure_ready_to_submit(self) -> None:
        self._expect(CheckoutStep.REVIEW)
        if self.address is None or self.payment_reference is None:
            raise CheckoutStateError("Checkout is missing the address or payment")

    # --- Internal helpers -----------------------------------------------------

    def _expect(self, step: CheckoutStep) -> None:
        if self.step != step:
            raise CheckoutStateError(
                f"Cannot do that during the {self.step.value} step "
                f"(expected {step.value})"
            )
