"""Order shapes exchanged with the backend.

Orders are owned by the backend.  The storefront builds the request it
submits and reads back confirmations and order history; it never changes
an order's state itself.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.address import Address
from storefront.domain.model.checkout import PaymentMethod
from storefront.domain.model.pricing import PriceBreakdown
from storefront.domain.model.value_objects import Money


class OrderStatus(Enum):
    PENDING = "PENDING"
    IN_PREPARATION = "IN_PREPARATION"
    ON_THE_WAY = "ON_THE_WAY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"

    @staticmethod
    def parse(raw: str | None) -> OrderStatus:
        """Map the backend's status spellings (Spanish or English) to a status."""
        if not raw:
            return OrderStatus.UNKNOWN
        key = unicodedata.normalize("NFD", str(raw).strip().lower())
        key = "".join(c for c in key if not unicodedata.combining(c))
        for char in " _-":
            key = key.replace(char, "")
        return _STATUS_ALIASES.get(key, OrderStatus.UNKNOWN)


_STATUS_ALIASES = {
    "pendiente": OrderStatus.PENDING,
    "pending": OrderStatus.PENDING,
    "enpreparacion": OrderStatus.IN_PREPARATION,
    "processing": OrderStatus.IN_PREPARATION,
    "encamino": OrderStatus.ON_THE_WAY,
    "shipped": OrderStatus.ON_THE_WAY,
    "entregado": OrderStatus.DELIVERED,
    "delivered": OrderStatus.DELIVERED,
    "cancelado": OrderStatus.CANCELLED,
    "canceled": OrderStatus.CANCELLED,
    "cancelled": OrderStatus.CANCELLED,
}


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    quantity: int
    product_name: str = ""


@dataclass(frozen=True)
class OrderRequest:
    """Everything the backend needs to place an order."""

    items: list[OrderLine]
    address: Address
    payment_method: PaymentMethod
    pricing: PriceBreakdown
    payment_intent_id: str

    def __post_init__(self) -> None:
        if not self.items:
            raise ValidationError("Order must contain at least one item")

    def to_payload(self) -> dict:
        return {
            "items": [
                {"productId": line.product_id, "quantity": line.quantity}
                for line in self.items
            ],
            "address": self.address.to_payload(),
            "paymentMethod": self.payment_method.value,
            "subtotal": float(self.pricing.subtotal.amount),
            "shipping": float(self.pricing.shipping.amount),
            "tax": float(self.pricing.tax.amount),
            "total": float(self.pricing.total.amount),
            "paymentIntentId": self.payment_intent_id,
        }


@dataclass(frozen=True)
class OrderConfirmation:
    id: str
    status: OrderStatus = OrderStatus.PENDING
    total: Money | None = None


@dataclass(frozen=True)
class OrderSummary:
    """An order as listed in the shopper's order history."""

    id: str
    status: OrderStatus
    total: Money
    created_at: str = ""
    items: list[OrderLine] = field(default_factory=list)
