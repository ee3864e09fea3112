"""Domain service: Stock Reconciliation.

After the backend rejects an order for insufficient stock, the cart is
re-synced against live stock instead of being thrown away.  The service
only plans the adjustments; applying them is the cart store's job so that
every change is persisted and announced like any other mutation.

Lookups run sequentially, one product at a time.  A failed lookup is
logged and skipped: reconciliation is best effort and may be partial.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.model.cart import Cart
from storefront.domain.repository.product_catalog import ProductCatalog

logger = logging.getLogger(__name__)


class AdjustmentKind(Enum):
    REMOVE = "REMOVE"
    CLAMP = "CLAMP"


@dataclass(frozen=True)
class StockAdjustment:
    product_id: str
    product_name: str
    kind: AdjustmentKind
    requested: int
    available: int


@dataclass
class ReconciliationReport:
    adjustments: list[StockAdjustment] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.adjustments)

    @property
    def complete(self) -> bool:
        return not self.failed


class StockReconciliationService:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def plan(self, cart: Cart) -> ReconciliationReport:
        """Compare every cart entry with the catalog's current stock."""
        report = ReconciliationReport()

        for entry in list(cart.entries):
            try:
                product = self._catalog.get_by_id(entry.product_id)
            except Exception:
                logger.warning(
                    "Could not refresh stock for product %s", entry.product_id,
                    exc_info=True,
                )
                report.failed.append(entry.product_id)
                continue

            if product is None:
                logger.warning("Product %s no longer in catalog", entry.product_id)
                report.failed.append(entry.product_id)
                continue

            if product.stock <= 0:
                kind = AdjustmentKind.REMOVE
            elif product.stock < entry.quantity:
                kind = AdjustmentKind.CLAMP
            else:
                continue

            logger.info(
                "Stock for %s is %d (cart has %d): %s",
                entry.product_id, product.stock, entry.quantity, kind.value,
            )
            report.adjustments.append(
                StockAdjustment(
                    product_id=entry.product_id,
                    product_name=entry.product.name,
                    kind=kind,
                    requested=entry.quantity,
                    available=max(product.stock, 0),
                )
            )

        return report
