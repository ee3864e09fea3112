"""Application service: Add To Cart use case.

The product is looked up in the live catalog first so that the snapshot
stored in the cart carries the current price and stock ceiling.
"""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartLineDTO
from storefront.application.show_cart import to_cart_line_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.product_catalog import ProductCatalog


class AddToCartHandler:

    def __init__(self, store: CartStore, catalog: ProductCatalog) -> None:
        self._store = store
        self._catalog = catalog

    def handle(self, product_id: str, quantity: int = 1) -> CartLineDTO:
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        entry = self._store.add_item(product, quantity)
        return to_cart_line_dto(entry)
