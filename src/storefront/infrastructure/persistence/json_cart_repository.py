"""JSON-file-backed implementation of CartRepository.

The cart lives in a single file holding a JSON array of entries, each one
the product snapshot plus its quantity.  Any process sharing the data
directory reads and writes the same file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from storefront.domain.exceptions import StorageUnavailableError, ValidationError
from storefront.domain.model.cart import CartEntry
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> list[CartEntry]:
        records = self._load_raw()
        try:
            entries = [self._to_domain(raw) for raw in records]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise StorageUnavailableError(
                f"Malformed cart record in {self._file_path}: {exc}"
            ) from exc
        kept = []
        for entry in entries:
            entry = self._within_stock(entry)
            if entry is not None:
                kept.append(entry)
        return kept

    def save(self, entries: list[CartEntry]) -> None:
        self._persist_raw([self._to_raw(e) for e in entries])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: CartEntry) -> dict:
        product = entry.product
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": float(product.price.amount),
            "category": product.category,
            "image": product.image,
            "stock": product.stock,
            "available": product.available,
            "quantity": entry.quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartEntry:
        product = Product(
            id=str(raw["id"]),
            name=raw["name"],
            price=Money.of(raw["price"]),
            stock=int(raw["stock"]),
            description=raw.get("description") or "",
            category=raw.get("category") or "",
            image=raw.get("image") or "",
            available=bool(raw.get("available", True)),
        )
        return CartEntry(product=product, quantity=int(raw["quantity"]))

    @staticmethod
    def _within_stock(entry: CartEntry) -> CartEntry | None:
        """Drop or clamp entries another writer left outside 0 < quantity <= stock."""
        if entry.quantity <= 0 or entry.stock <= 0:
            logger.warning("Dropping stored cart entry %s (quantity %d, stock %d)",
                           entry.product_id, entry.quantity, entry.stock)
            return None
        if entry.quantity > entry.stock:
            logger.warning("Clamping stored cart entry %s from %d to %d",
                           entry.product_id, entry.quantity, entry.stock)
            entry.quantity = entry.stock
        return entry

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        if not self._file_path.exists():
            return []
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageUnavailableError(
                f"Cannot read cart from {self._file_path}: {exc}"
            ) from exc
        if not isinstance(records, list):
            raise StorageUnavailableError(
                f"Cart file {self._file_path} does not hold a list"
            )
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot write cart to {self._file_path}: {exc}"
            ) from exc
        logger.debug("Saved %d cart entries to %s", len(records), self._file_path)
