"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cart_store import CartChanged
from storefront.application.dto import CartDTO
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_store, product_catalog
from storefront.infrastructure.http.api_client import ApiError


def _echo_badge(event: CartChanged) -> None:
    click.echo(f"Cart: {event.item_count} item(s), subtotal {event.total}")


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying the cart."""
    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<8} {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*61}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<8} {line.product_name:<24} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*61}")
    click.echo(f"  {'Subtotal':<40} {dto.subtotal:>20}")


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
def cart_add(product_id: str, quantity: int) -> None:
    """Add a product to the cart (capped at available stock)."""
    store = cart_store()
    store.subscribe(_echo_badge)
    handler = AddToCartHandler(store=store, catalog=product_catalog())

    try:
        line = handler.handle(product_id=product_id, quantity=quantity)
    except (DomainException, ApiError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{line.product_name} x{line.quantity} in cart ({line.line_total})")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(product_id: str, quantity: int) -> None:
    """Change the quantity of a product in the cart."""
    store = cart_store()
    store.subscribe(_echo_badge)
    store.update_quantity(product_id, quantity)


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
def cart_remove(product_id: str) -> None:
    """Remove a product from the cart."""
    store = cart_store()
    store.subscribe(_echo_badge)
    store.remove_item(product_id)


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""
    store = cart_store()
    store.subscribe(_echo_badge)
    store.clear_cart()


@click.command("show")
def cart_show() -> None:
    """Show what is in the cart."""
    display_cart(ShowCartHandler(store=cart_store()).handle())
