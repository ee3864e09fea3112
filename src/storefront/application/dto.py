"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    category: str
    price: str  # formatted, e.g. "S/ 4.50"
    stock: int
    available: bool


@dataclass(frozen=True)
class ProductPageDTO:
    products: list[ProductDTO]
    page: int
    total_pages: int
    total: int


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    stock: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    item_count: int
    subtotal: str


@dataclass(frozen=True)
class QuoteDTO:
    """Output: the price breakdown shown on the review step."""

    subtotal: str
    shipping: str
    tax: str
    total: str


@dataclass(frozen=True)
class OrderConfirmationDTO:
    order_id: str
    status: str
    total: str


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: str
    product_name: str
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    id: str
    status: str
    total: str
    created_at: str
    items: list[OrderLineDTO]
