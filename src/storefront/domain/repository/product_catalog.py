"""Abstract read-only access to the backend product catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.product import Product


@dataclass(frozen=True)
class ProductPage:
    products: list[Product]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return -(-self.total // self.page_size)


class ProductCatalog(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return the live product record, or None if it does not exist."""

    @abstractmethod
    def list_products(
        self,
        category: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> ProductPage:
        """Return one page of the catalog, optionally filtered by category."""
