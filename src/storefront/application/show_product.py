"""Application service: Show Product use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.list_products import to_product_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_catalog import ProductCatalog


class ShowProductHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def handle(self, product_id: str) -> ProductDTO:
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return to_product_dto(product)
