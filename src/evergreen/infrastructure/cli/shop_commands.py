"""Interactive shopping session.

``evergreen shop`` opens one Storefront for the whole session and reads
commands until ``quit``. The cart lives only as long as the session.
"""

from __future__ import annotations

import asyncio
import shlex

import click

from evergreen.application.storefront import Storefront
from evergreen.domain.exceptions import DomainException
from evergreen.domain.model.catalog import SizeFilter
from evergreen.domain.model.order import CustomerDetails
from evergreen.infrastructure.bootstrap import open_storefront
from evergreen.infrastructure.cli.render import (
    render_cart,
    render_catalog,
    render_confirmation,
)
from evergreen.infrastructure.config import Settings

HELP_TEXT = """\
Commands:
  list                  show trees matching the current filters
  search [TEXT]         filter by name or tag (no text clears the search)
  size All|Small|Medium|Large
                        pick a size; takes effect on 'apply'
  apply | retry         reload the catalog from the backend
  add ID                add one tree to the cart
  qty ID N              set the quantity of a cart line (minimum 1)
  inc ID | dec ID       change a cart line by one
  remove ID             remove a line from the cart
  cart                  show the cart and totals
  seed [--overwrite]    load demo trees
  checkout              place the order
  help                  show this message
  quit                  leave the shop"""

# Defaults for the checkout prompts.
GUEST = CustomerDetails(
    name="Guest",
    email="guest@example.com",
    address="123 Holiday Lane",
    city="North Pole",
    zip_code="00000",
)


class ShopSession:

    def __init__(self, store: Storefront) -> None:
        self._store = store
        self._running = True
        self._commands = {
            "list": self._list,
            "ls": self._list,
            "search": self._search,
            "size": self._size,
            "apply": self._apply,
            "retry": self._apply,
            "add": self._add,
            "qty": self._qty,
            "inc": self._inc,
            "dec": self._dec,
            "remove": self._remove,
            "rm": self._remove,
            "cart": self._cart,
            "seed": self._seed,
            "checkout": self._checkout,
            "help": self._help,
            "quit": self._quit,
            "exit": self._quit,
        }

    async def run(self) -> None:
        await self._apply([])
        click.echo("Type 'help' for commands.")
        while self._running:
            try:
                raw = click.prompt(
                    self._store.cart_badge,
                    prompt_suffix="> ",
                    default="",
                    show_default=False,
                )
            except click.Abort:
                break
            await self.dispatch(raw)

    async def dispatch(self, raw: str) -> None:
        try:
            words = shlex.split(raw)
        except ValueError as exc:
            click.echo(f"Error: {exc}")
            return
        if not words:
            return

        name, args = words[0].lower(), words[1:]
        command = self._commands.get(name)
        if command is None:
            click.echo(f"Unknown command '{name}'. Type 'help' for commands.")
            return

        try:
            await command(args)
        except DomainException as exc:
            click.echo(f"Error: {exc}")

    # --- Catalog --------------------------------------------------------------

    async def _list(self, args: list[str]) -> None:
        render_catalog(self._store)

    async def _search(self, args: list[str]) -> None:
        self._store.set_query(" ".join(args))
        render_catalog(self._store)

    async def _size(self, args: list[str]) -> None:
        if len(args) != 1:
            click.echo("Usage: size All|Small|Medium|Large")
            return
        self._store.set_size(SizeFilter.parse(args[0]))
        click.echo(f"Size set to {self._store.criteria.size.value}. Type 'apply' to reload.")

    async def _apply(self, args: list[str]) -> None:
        click.echo("Loading trees...")
        await self._store.apply_filters()
        render_catalog(self._store)

    async def _seed(self, args: list[str]) -> None:
        overwrite = "--overwrite" in args
        click.echo("Seeding...")
        if await self._store.seed(overwrite=overwrite):
            click.echo("Demo trees added.")
            render_catalog(self._store)

    # --- Cart -----------------------------------------------------------------

    async def _add(self, args: list[str]) -> None:
        if len(args) != 1:
            click.echo("Usage: add ID")
            return
        line = self._store.add_to_cart(args[0])
        click.echo(f"Added {line.name} (qty {line.quantity}).")

    async def _qty(self, args: list[str]) -> None:
        if len(args) != 2:
            click.echo("Usage: qty ID N")
            return
        self._set_quantity(args[0], args[1])

    async def _inc(self, args: list[str]) -> None:
        await self._step(args, 1)

    async def _dec(self, args: list[str]) -> None:
        await self._step(args, -1)

    async def _step(self, args: list[str], delta: int) -> None:
        if len(args) != 1:
            click.echo("Usage: inc ID | dec ID")
            return
        line = self._store.cart.get(args[0])
        if line is None:
            click.echo(f"'{args[0]}' is not in your cart.")
            return
        self._set_quantity(args[0], line.quantity.value + delta)

    def _set_quantity(self, item_id: str, quantity: int | str) -> None:
        line = self._store.update_quantity(item_id, quantity)
        if line is None:
            click.echo(f"'{item_id}' is not in your cart.")
        else:
            click.echo(f"{line.name}: qty {line.quantity}.")

    async def _remove(self, args: list[str]) -> None:
        if len(args) != 1:
            click.echo("Usage: remove ID")
            return
        self._store.remove_from_cart(args[0])
        click.echo(self._store.cart_badge)

    async def _cart(self, args: list[str]) -> None:
        render_cart(self._store.cart_summary())

    async def _checkout(self, args: list[str]) -> None:
        if self._store.cart.is_empty:
            click.echo("Your cart is empty.")
            return

        render_cart(self._store.cart_summary())
        customer = CustomerDetails(
            name=click.prompt("Name", default=GUEST.name),
            email=click.prompt("Email", default=GUEST.email),
            address=click.prompt("Address", default=GUEST.address),
            city=click.prompt("City", default=GUEST.city),
            zip_code=click.prompt("ZIP", default=GUEST.zip_code),
        )
        confirmation = await self._store.checkout(customer)
        if confirmation is not None:
            render_confirmation(confirmation)
            if not self._store.cart.is_empty:
                click.echo("Trees added during checkout are still in your cart.")

    # --- Session --------------------------------------------------------------

    async def _help(self, args: list[str]) -> None:
        click.echo(HELP_TEXT)

    async def _quit(self, args: list[str]) -> None:
        self._running = False


@click.command("shop")
@click.pass_obj
def shop(settings: Settings) -> None:
    """Browse trees, fill a cart and check out."""

    async def _run() -> None:
        async with open_storefront(settings) as store:
            await ShopSession(store).run()

    asyncio.run(_run())
