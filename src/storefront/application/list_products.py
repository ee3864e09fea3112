"""Application service: List Products use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, ProductPageDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_catalog import ProductCatalog


class ListProductsHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def handle(
        self,
        category: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> ProductPageDTO:
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if page_size < 1:
            raise ValidationError("Page size must be positive")

        result = self._catalog.list_products(
            category=category or None, page=page, page_size=page_size
        )
        return ProductPageDTO(
            products=[to_product_dto(p) for p in result.products],
            page=result.page,
            total_pages=result.total_pages,
            total=result.total,
        )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        category=product.category,
        price=str(product.price),
        stock=product.stock,
        available=product.available,
    )
