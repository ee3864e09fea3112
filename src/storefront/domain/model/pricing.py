"""Pricing policy: shipping and tax on top of the cart subtotal.

The backend applies the same rules when it validates an order, so the
constants here must match server policy.  ``PricingPolicy.version`` names
the contract both sides are expected to agree on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

FREE_SHIPPING_THRESHOLD = Money(Decimal("50.00"))
FLAT_SHIPPING_FEE = Money(Decimal("5.00"))
TAX_RATE = Decimal("0.10")


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money

    def settle(self, server_total: Money | None) -> Money:
        """Pick the total to show once the backend has echoed its own.

        The server figure wins when it is within a cent of ours; otherwise
        the mismatch is logged and the client total is kept.
        """
        if server_total is None:
            return self.total
        if server_total.is_close_to(self.total):
            return server_total
        logger.warning(
            "Server total %s differs from client total %s", server_total, self.total
        )
        return self.total


@dataclass(frozen=True)
class PricingPolicy:

    free_shipping_threshold: Money = FREE_SHIPPING_THRESHOLD
    flat_shipping_fee: Money = FLAT_SHIPPING_FEE
    tax_rate: Decimal = TAX_RATE
    version: str = "2024-1"

    def shipping_for(self, subtotal: Money) -> Money:
        if subtotal >= self.free_shipping_threshold:
            return Money.zero()
        return self.flat_shipping_fee

    def quote(self, subtotal: Money) -> PriceBreakdown:
        shipping = self.shipping_for(subtotal)
        tax = subtotal.scaled(self.tax_rate)
        return PriceBreakdown(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
        )
