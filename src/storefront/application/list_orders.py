"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, OrderLineDTO
from storefront.domain.model.order import OrderSummary
from storefront.domain.repository.order_gateway import OrderGateway


class ListOrdersHandler:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def handle(self) -> list[OrderDTO]:
        return [to_order_dto(o) for o in self._order_gateway.list_orders()]


def to_order_dto(order: OrderSummary) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        status=order.status.value,
        total=str(order.total),
        created_at=order.created_at,
        items=[
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity,
            )
            for line in order.items
        ],
    )
