"""Product snapshot.

Products are owned by the backend catalog.  The storefront only ever holds
a snapshot: the cart keeps the fields it needs to render an entry and the
stock ceiling it must not exceed.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product as last reported by the catalog."""

    id: str
    name: str
    price: Money
    stock: int
    description: str = ""
    category: str = ""
    image: str = ""
    available: bool = True

    @property
    def in_stock(self) -> bool:
        return self.available and self.stock > 0

    def with_stock(self, stock: int) -> Product:
        """Return a copy carrying a refreshed stock ceiling."""
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            stock=stock,
            description=self.description,
            category=self.category,
            image=self.image,
            available=self.available,
        )
