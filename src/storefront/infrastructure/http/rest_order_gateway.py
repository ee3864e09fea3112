"""OrderGateway backed by the REST backend's /orders endpoints.

The backend signals a stock conflict either with a structured error code or
with a message mentioning insufficient stock.  ``is_insufficient_stock`` is
the only place that knows how to recognise it.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront.domain.exceptions import InsufficientStockError, OrderRejectedError
from storefront.domain.model.order import (
    OrderConfirmation,
    OrderLine,
    OrderRequest,
    OrderStatus,
    OrderSummary,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_gateway import OrderGateway
from storefront.infrastructure.http.api_client import (
    ApiClient,
    ApiError,
    unwrap_collection,
    unwrap_record,
)

logger = logging.getLogger(__name__)

INSUFFICIENT_STOCK_CODE = "INSUFFICIENT_STOCK"
INSUFFICIENT_STOCK_MARKERS = ("stock insuficiente", "insufficient stock")


def is_insufficient_stock(error: ApiError) -> bool:
    if error.code is not None:
        return error.code.upper() == INSUFFICIENT_STOCK_CODE
    haystack = error.message.lower()
    if isinstance(error.payload, str):
        haystack += " " + error.payload.lower()
    return any(marker in haystack for marker in INSUFFICIENT_STOCK_MARKERS)


class RestOrderGateway(OrderGateway):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    # --- OrderGateway interface -----------------------------------------------

    def submit(self, request: OrderRequest) -> OrderConfirmation:
        try:
            payload = self._client.post("/orders", request.to_payload())
        except ApiError as exc:
            logger.debug("Order rejected (status=%s): %s", exc.status, exc.message)
            if is_insufficient_stock(exc):
                raise InsufficientStockError(exc.message) from exc
            raise OrderRejectedError(exc.message) from exc

        raw = unwrap_record(payload)
        if raw.get("id") is None:
            raise OrderRejectedError("The server did not return an order number")

        total = raw.get("total")
        return OrderConfirmation(
            id=str(raw["id"]),
            status=OrderStatus.parse(raw.get("status") or "pending"),
            total=Money.of(total) if total is not None else None,
        )

    def list_orders(self) -> list[OrderSummary]:
        payload = self._client.get("/orders")
        return [self._to_summary(raw) for raw in unwrap_collection(payload)]

    def get_by_id(self, order_id: str) -> OrderSummary | None:
        try:
            payload = self._client.get(f"/orders/{order_id}")
        except ApiError as exc:
            if exc.status == 404:
                return None
            raise
        return self._to_summary(unwrap_record(payload))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_summary(raw: dict[str, Any]) -> OrderSummary:
        items = [
            OrderLine(
                product_id=str(i.get("productId", i.get("id", ""))),
                quantity=int(i.get("quantity", 0)),
                product_name=i.get("name") or i.get("productName") or "",
            )
            for i in raw.get("items") or []
        ]
        return OrderSummary(
            id=str(raw["id"]),
            status=OrderStatus.parse(raw.get("status")),
            total=Money.of(raw.get("total") or 0),
            created_at=raw.get("createdAt") or "",
            items=items,
        )
