"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import to_order_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_gateway import OrderGateway


class ShowOrderHandler:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_gateway.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return to_order_dto(order)
