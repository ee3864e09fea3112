"""Abstract payment processor.

Card details are collected by the processor's hosted widget; the storefront
only asks for an authorization and gets back a reference.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.checkout import PaymentMethod
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class PaymentAuthorization:
    reference: str
    amount: Money
    method: PaymentMethod


class PaymentProcessor(ABC):

    @abstractmethod
    def authorize(self, amount: Money, method: PaymentMethod) -> PaymentAuthorization:
        """Authorize a charge of *amount*.

        Raises PaymentDeclinedError with the processor's message when the
        authorization fails or is cancelled.
        """
