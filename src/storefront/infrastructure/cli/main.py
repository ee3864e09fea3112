import click

from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.order_commands import order_list, order_show
from storefront.infrastructure.cli.product_commands import product_list, product_show
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging.")
def cli(verbose: bool) -> None:
    """Storefront — bakery shop from the command line"""
    configure_logging("DEBUG" if verbose else bootstrap.settings().log_level)


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """See your orders."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_show)
cart.add_command(cart_add)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
order.add_command(order_list)
order.add_command(order_show)
cli.add_command(checkout)
