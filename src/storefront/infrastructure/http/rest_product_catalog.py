"""ProductCatalog backed by the REST backend's /products endpoints."""

from __future__ import annotations

from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_catalog import ProductCatalog, ProductPage
from storefront.infrastructure.http.api_client import (
    ApiClient,
    ApiError,
    unwrap_collection,
    unwrap_record,
)


class RestProductCatalog(ProductCatalog):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    # --- ProductCatalog interface ---------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        try:
            payload = self._client.get(f"/products/{product_id}")
        except ApiError as exc:
            if exc.status == 404:
                return None
            raise
        return self._to_domain(unwrap_record(payload))

    def list_products(
        self,
        category: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> ProductPage:
        payload = self._client.get(
            "/products",
            params={"category": category, "page": page, "pageSize": page_size},
        )
        products = [self._to_domain(raw) for raw in unwrap_collection(payload)]

        meta = payload if isinstance(payload, dict) else {}
        return ProductPage(
            products=products,
            total=int(meta.get("total", len(products))),
            page=int(meta.get("page", page)),
            page_size=int(meta.get("pageSize", page_size)),
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict[str, Any]) -> Product:
        try:
            category = raw.get("category") or ""
            if isinstance(category, dict):
                category = category.get("name", "")
            return Product(
                id=str(raw["id"]),
                name=raw["name"],
                price=Money.of(raw["price"]),
                stock=int(raw.get("stock") or 0),
                description=raw.get("description") or "",
                category=str(category),
                image=raw.get("image") or "",
                available=bool(raw.get("available", True)),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise ApiError(f"Malformed product record: {exc}", payload=raw) from exc
