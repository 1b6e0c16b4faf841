"""Text rendering of storefront state for the terminal."""

from __future__ import annotations

import click

from evergreen.application.dto import CartDTO, OrderConfirmationDTO
from evergreen.application.storefront import Storefront
from evergreen.domain.model.catalog import CatalogItem


def _height(item: CatalogItem) -> str:
    if item.height_ft is None:
        return "-"
    return f"~{item.height_ft.normalize():f} ft"


def render_catalog(store: Storefront) -> None:
    """Echo the visible trees, or the right empty/failed state."""
    state = store.catalog
    if state.load_failed:
        click.echo("We couldn't load the trees.")
        if state.error:
            click.echo(f"  {state.error}")
        click.echo("Type 'retry' to try again, or 'seed' to load demo data.")
        return

    items = store.visible_items
    if not items:
        click.echo("No trees found. Try seeding demo data.")
        return

    click.echo(f"{'ID':<26} {'Name':<24} {'Size':<7} {'Height':>9} {'Price':>10}")
    click.echo("-" * 80)
    for item in items:
        status = "" if item.in_stock else "  Sold Out"
        click.echo(
            f"{item.id:<26} {item.name:<24} {item.size.value:<7} "
            f"{_height(item):>9} {str(item.price):>10}{status}"
        )


def render_cart(cart: CartDTO) -> None:
    if cart.is_empty:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<26} {'Name':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*78}")
    for line in cart.lines:
        click.echo(
            f"  {line.item_id:<26} {line.name:<24} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*78}")
    click.echo(f"  {'Subtotal':<58} {cart.subtotal:>20}")
    click.echo(f"  {'Shipping':<58} {cart.shipping:>20}")
    click.echo(f"  {'Total':<58} {cart.total:>20}")


def render_confirmation(confirmation: OrderConfirmationDTO) -> None:
    click.echo(
        f"Order placed! Confirmation #{confirmation.confirmation_code} "
        f"• {confirmation.total}"
    )
