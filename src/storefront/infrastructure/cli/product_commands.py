"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.application.list_products import ListProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_catalog
from storefront.infrastructure.http.api_client import ApiError


@click.command("list")
@click.option("--category", default=None, help="Only show this category.")
@click.option("--page", default=1, type=int, show_default=True, help="Page number.")
@click.option("--page-size", default=20, type=int, show_default=True, help="Products per page.")
def product_list(category: str | None, page: int, page_size: int) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(catalog=product_catalog())

    try:
        result = handler.handle(category=category, page=page, page_size=page_size)
    except (DomainException, ApiError) as exc:
        raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<28} {'Category':<14} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 70)
    for p in result.products:
        stock = p.stock if p.available else "-"
        click.echo(f"{p.id:<8} {p.name:<28} {p.category:<14} {p.price:>10} {stock:>6}")
    click.echo(f"Page {result.page} of {max(result.total_pages, 1)} ({result.total} products)")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product."""
    handler = ShowProductHandler(catalog=product_catalog())

    try:
        p = handler.handle(product_id)
    except (DomainException, ApiError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{p.name}  ({p.category})")
    if p.description:
        click.echo(p.description)
    click.echo(f"Price: {p.price}")
    click.echo(f"Stock: {p.stock}" if p.available else "Not available")
