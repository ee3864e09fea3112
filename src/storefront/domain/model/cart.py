"""Cart aggregate: what the shopper intends to buy.

The Cart owns its entries.  Quantities are always clamped to the stock
ceiling carried by each entry's product snapshot; asking for more than is
available is not an error, the request is silently reduced.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


@dataclass
class CartEntry:
    """A product snapshot plus the quantity the shopper wants.

    Invariant: ``0 < quantity <= product.stock``.
    """

    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def stock(self) -> int:
        return self.product.stock

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity


@dataclass
class Cart:
    """Aggregate root for the shopping cart.

    Entries keep insertion order and are unique per product id: adding a
    product that is already in the cart increases its quantity instead.
    """

    entries: list[CartEntry] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartEntry:
        """Add *quantity* units of *product*, clamped to its stock."""
        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")

        existing = self.get(product.id)
        if existing is not None:
            existing.product = product
            existing.quantity = max(1, min(existing.quantity + quantity, product.stock))
            return existing

        entry = CartEntry(product=product, quantity=max(1, min(quantity, product.stock)))
        self.entries.append(entry)
        return entry

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set an entry's quantity; zero or less removes the entry."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        entry = self.get(product_id)
        if entry is None:
            return
        entry.quantity = min(quantity, entry.stock)

    def remove_item(self, product_id: str) -> None:
        self.entries = [e for e in self.entries if e.product_id != product_id]

    def restock(self, product_id: str, stock: int) -> None:
        """Apply an authoritative stock figure to an entry.

        No stock left removes the entry; otherwise the quantity is clamped
        down to the new ceiling.
        """
        entry = self.get(product_id)
        if entry is None:
            return
        if stock <= 0:
            self.remove_item(product_id)
            return
        entry.product = entry.product.with_stock(stock)
        entry.quantity = min(entry.quantity, stock)

    def clear(self) -> None:
        self.entries = []

    # --- Queries --------------------------------------------------------------

    def get(self, product_id: str) -> CartEntry | None:
        for entry in self.entries:
            if entry.product_id == product_id:
                return entry
        return None

    def line_items(self) -> list[tuple[str, int]]:
        return [(e.product_id, e.quantity) for e in self.entries]

    @property
    def total(self) -> Money:
        """Subtotal only; shipping and tax are the pricing policy's job."""
        result = Money.zero()
        for entry in self.entries:
            result = result + entry.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(e.quantity for e in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries
