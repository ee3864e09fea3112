"""CLI checkout wizard: address -> payment -> review."""

from __future__ import annotations

import click

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutSequencer
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import (
    CartAdjustedError,
    DomainException,
    OrderSubmissionError,
    PaymentDeclinedError,
    ValidationError,
)
from storefront.domain.model.checkout import CheckoutStep, PaymentMethod
from storefront.domain.service.stock_reconciliation_service import AdjustmentKind
from storefront.infrastructure.bootstrap import cart_store, checkout_sequencer
from storefront.infrastructure.cli.cart_commands import display_cart
from storefront.infrastructure.http.api_client import ApiError

_BACK = "back"


def _address_step(sequencer: CheckoutSequencer) -> None:
    previous = sequencer.session.address
    click.echo("\nDelivery address")
    street = click.prompt("  Street and number", default=previous.street if previous else None)
    postal_code = click.prompt("  Postal code", default=previous.postal_code if previous else None)
    phone = click.prompt("  Phone", default=previous.phone if previous else None)

    try:
        address = sequencer.submit_address(street, postal_code, phone)
    except ValidationError as exc:
        click.echo(f"  {exc}", err=True)
        return
    click.echo(f"  Delivering to {address}")


def _payment_step(sequencer: CheckoutSequencer) -> None:
    quote = sequencer.quote()
    click.echo(f"\nPayment  (total to pay: {quote.total})")
    choice = click.prompt(
        "  Payment method",
        type=click.Choice([m.value for m in PaymentMethod] + [_BACK]),
        default=PaymentMethod.CARD.value,
    )
    if choice == _BACK:
        sequencer.go_back()
        return

    try:
        sequencer.authorize_payment(PaymentMethod(choice))
    except PaymentDeclinedError as exc:
        click.echo(f"  Payment failed: {exc}", err=True)
        return
    except ApiError as exc:
        click.echo(f"  {exc}", err=True)
        return
    click.echo("  Payment authorized.")


def _review_step(sequencer: CheckoutSequencer, store: CartStore) -> bool:
    """Return True once the order has been placed."""
    session = sequencer.session
    quote = sequencer.quote()

    click.echo("\nReview your order")
    display_cart(ShowCartHandler(store=store).handle())
    click.echo(f"  {'Shipping':<40} {quote.shipping:>20}")
    click.echo(f"  {'Tax':<40} {quote.tax:>20}")
    click.echo(f"  {'Total':<40} {quote.total:>20}")
    click.echo(f"  Deliver to: {session.address}")
    click.echo(f"  Payment:    {session.payment_method.value}")  # type: ignore[union-attr]

    choice = click.prompt(
        "  Confirm order?",
        type=click.Choice(["confirm", _BACK, "cancel"]),
        default="confirm",
    )
    if choice == _BACK:
        sequencer.go_back()
        return False
    if choice == "cancel":
        raise click.Abort()

    try:
        confirmation = sequencer.confirm_order()
    except CartAdjustedError as exc:
        click.echo(f"\n{exc}", err=True)
        for adj in exc.report.adjustments:
            if adj.kind == AdjustmentKind.REMOVE:
                click.echo(f"  - {adj.product_name}: sold out, removed", err=True)
            else:
                click.echo(
                    f"  - {adj.product_name}: only {adj.available} left "
                    f"(you had {adj.requested})",
                    err=True,
                )
        if store.cart.is_empty:
            raise click.ClickException("Your cart is now empty.")
        return False
    except (OrderSubmissionError, ValidationError, ApiError) as exc:
        click.echo(f"  {exc}", err=True)
        return False

    click.echo(f"\nOrder #{confirmation.order_id} confirmed ({confirmation.total}).")
    return True


@click.command("checkout")
def checkout() -> None:
    """Walk through address, payment and review to place an order."""
    store = cart_store()
    sequencer = checkout_sequencer(store)

    try:
        sequencer.start()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    while True:
        if store.sync_from_storage():
            click.echo("Your cart was changed elsewhere; totals updated.")
            if store.cart.is_empty:
                raise click.ClickException("Your cart is empty.")

        step = sequencer.step
        if step == CheckoutStep.ADDRESS:
            _address_step(sequencer)
        elif step == CheckoutStep.PAYMENT:
            _payment_step(sequencer)
        elif _review_step(sequencer, store):
            return
