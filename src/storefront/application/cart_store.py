"""Application service: the Cart Store.

The single source of truth for the shopper's cart.  Consumers get the
store injected and subscribe to it; every mutation is written to durable
storage and then announced to subscribers with the new item count, so a
badge or summary can refresh without knowing who changed the cart.

Storage problems never reach the shopper: an unreadable store is an empty
cart and a failed write leaves the in-memory cart as the working copy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from storefront.domain.exceptions import StorageUnavailableError
from storefront.domain.model.cart import Cart, CartEntry
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartChanged:
    item_count: int
    total: Money


CartListener = Callable[[CartChanged], None]


class CartStore:

    def __init__(self, repository: CartRepository) -> None:
        self._repository = repository
        self._cart = Cart()
        self._listeners: list[CartListener] = []

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> None:
        """Hydrate the in-memory cart from storage."""
        self._cart = Cart(entries=self._read())

    def sync_from_storage(self) -> bool:
        """Pick up changes written to storage by someone else.

        Rehydrates and notifies only when the stored cart differs from the
        in-memory one.  Nothing is written back, so a store reacting to its
        own write cannot loop.  Last write wins.
        """
        stored = self._read()
        if stored == self._cart.entries:
            return False
        logger.debug("Cart changed in storage, rehydrating")
        self._cart = Cart(entries=stored)
        self._notify()
        return True

    # --- Subscriptions --------------------------------------------------------

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartEntry:
        entry = self._cart.add_item(product, quantity)
        logger.debug("Cart: %s now x%d", entry.product_id, entry.quantity)
        self._commit()
        return entry

    def update_quantity(self, product_id: str, quantity: int) -> None:
        self._cart.update_quantity(product_id, quantity)
        self._commit()

    def remove_item(self, product_id: str) -> None:
        self._cart.remove_item(product_id)
        self._commit()

    def restock(self, product_id: str, stock: int) -> None:
        self._cart.restock(product_id, stock)
        self._commit()

    def clear_cart(self) -> None:
        self._cart.clear()
        self._commit()

    # --- Queries --------------------------------------------------------------

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def entries(self) -> list[CartEntry]:
        return list(self._cart.entries)

    def get_total(self) -> Money:
        return self._cart.total

    def get_item_count(self) -> int:
        return self._cart.item_count

    # --- Internal helpers -----------------------------------------------------

    def _read(self) -> list[CartEntry]:
        try:
            return self._repository.load()
        except StorageUnavailableError as exc:
            logger.warning("Cart storage unreadable, starting empty: %s", exc)
            return []

    def _commit(self) -> None:
        try:
            self._repository.save(self._cart.entries)
        except StorageUnavailableError as exc:
            logger.warning("Could not persist cart: %s", exc)
        self._notify()

    def _notify(self) -> None:
        event = CartChanged(item_count=self._cart.item_count, total=self._cart.total)
        for listener in list(self._listeners):
            listener(event)
