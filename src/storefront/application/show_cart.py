"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartDTO, CartLineDTO
from storefront.domain.model.cart import CartEntry


class ShowCartHandler:

    def __init__(self, store: CartStore) -> None:
        self._store = store

    def handle(self) -> CartDTO:
        return CartDTO(
            lines=[to_cart_line_dto(entry) for entry in self._store.entries],
            item_count=self._store.get_item_count(),
            subtotal=str(self._store.get_total()),
        )


def to_cart_line_dto(entry: CartEntry) -> CartLineDTO:
    return CartLineDTO(
        product_id=entry.product_id,
        product_name=entry.product.name,
        quantity=entry.quantity,
        stock=entry.stock,
        unit_price=str(entry.product.price),
        line_total=str(entry.line_total),
    )
