"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from evergreen.application.storefront import Storefront
from evergreen.domain.service.shipping import (
    FlatRateShipping,
    FreeShippingOver,
    ShippingPolicy,
)
from evergreen.infrastructure.config import Settings
from evergreen.infrastructure.http.catalog_client import HttpCatalogGateway
from evergreen.infrastructure.http.order_client import HttpOrderGateway


def http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.backend_url,
        timeout=settings.timeout_seconds,
        headers={"Accept": "application/json"},
    )


def shipping_policy(settings: Settings) -> ShippingPolicy:
    policy: ShippingPolicy = FlatRateShipping(settings.shipping_flat_rate)
    if settings.free_shipping_threshold is not None:
        policy = FreeShippingOver(settings.free_shipping_threshold, fallback=policy)
    return policy


def storefront(client: httpx.AsyncClient, settings: Settings) -> Storefront:
    return Storefront(
        catalog_gateway=HttpCatalogGateway(client),
        order_gateway=HttpOrderGateway(client),
        shipping=shipping_policy(settings),
    )


@asynccontextmanager
async def open_storefront(settings: Settings) -> AsyncIterator[Storefront]:
    """Yield a Storefront whose HTTP client is closed on exit."""
    async with http_client(settings) as client:
        yield storefront(client, settings)
