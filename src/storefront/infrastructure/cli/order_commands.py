"""CLI commands for the shopper's order history."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_gateway
from storefront.infrastructure.http.api_client import ApiError


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    if dto.created_at:
        click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5}")
    click.echo(f"  {'-'*34}")
    for item in dto.items:
        click.echo(f"  {item.product_name or item.product_id:<28} {item.quantity:>5}")
    click.echo(f"  {'-'*34}")
    click.echo(f"  {'Order Total':<18} {dto.total:>15}")


@click.command("list")
def order_list() -> None:
    """List your orders."""
    handler = ListOrdersHandler(order_gateway=order_gateway())

    try:
        orders = handler.handle()
    except (DomainException, ApiError) as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"{'ID':<10} {'Status':<16} {'Total':>12}  Created")
    click.echo("-" * 60)
    for o in orders:
        click.echo(f"{o.id:<10} {o.status:<16} {o.total:>12}  {o.created_at}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of one of your orders."""
    handler = ShowOrderHandler(order_gateway=order_gateway())

    try:
        dto = handler.handle(order_id)
    except (DomainException, ApiError) as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
