"""Abstract repository for the Cart's durable storage.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete JSON-file implementation lives in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartEntry


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> list[CartEntry]:
        """Return the stored entries, in order.

        Raises StorageUnavailableError if storage cannot be read.
        """

    @abstractmethod
    def save(self, entries: list[CartEntry]) -> None:
        """Replace the stored cart with *entries*.

        Raises StorageUnavailableError if storage cannot be written.
        """
