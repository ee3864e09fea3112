"""Abstract gateway to the backend's order endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import OrderConfirmation, OrderRequest, OrderSummary


class OrderGateway(ABC):

    @abstractmethod
    def submit(self, request: OrderRequest) -> OrderConfirmation:
        """Place an order.

        Raises InsufficientStockError when the backend reports a stock
        conflict, and OrderRejectedError (server message verbatim) for any
        other failure.
        """

    @abstractmethod
    def list_orders(self) -> list[OrderSummary]:
        """Return the current shopper's orders."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> OrderSummary | None:
        """Return one order, or None if not found."""
