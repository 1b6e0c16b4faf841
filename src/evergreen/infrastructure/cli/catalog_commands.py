"""One-shot CLI commands for browsing and seeding the catalog."""

from __future__ import annotations

import asyncio

import click

from evergreen.domain.exceptions import DomainException
from evergreen.domain.model.catalog import SizeFilter
from evergreen.infrastructure.bootstrap import open_storefront
from evergreen.infrastructure.cli.render import render_catalog
from evergreen.infrastructure.config import Settings

SIZE_CHOICES = [s.value for s in SizeFilter]


@click.command("trees")
@click.option(
    "--size",
    type=click.Choice(SIZE_CHOICES, case_sensitive=False),
    default=SizeFilter.ALL.value,
    show_default=True,
    help="Only show trees of this size.",
)
@click.option("--query", default="", help="Search by name or tag (e.g. fresh, premium).")
@click.pass_obj
def trees_list(settings: Settings, size: str, query: str) -> None:
    """List trees in the catalog."""

    async def _run() -> bool:
        async with open_storefront(settings) as store:
            store.set_size(SizeFilter.parse(size))
            store.set_query(query)
            loaded = await store.apply_filters()
            render_catalog(store)
            return loaded

    if not asyncio.run(_run()):
        raise SystemExit(1)


@click.command("seed")
@click.option("--overwrite", is_flag=True, default=False, help="Replace existing demo trees.")
@click.pass_obj
def catalog_seed(settings: Settings, overwrite: bool) -> None:
    """Load demo trees into the catalog."""

    async def _run() -> int:
        async with open_storefront(settings) as store:
            await store.seed(overwrite=overwrite)
            return len(store.catalog.items)

    try:
        count = asyncio.run(_run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Demo trees loaded: {count} trees in the catalog.")
