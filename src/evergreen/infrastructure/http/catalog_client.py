"""httpx-backed implementation of CatalogGateway."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import httpx
import structlog

from evergreen.domain.exceptions import CatalogLoadError, SeedError, ValidationError
from evergreen.domain.gateway.catalog_gateway import CatalogGateway
from evergreen.domain.model.catalog import CatalogItem, SizeFilter, TreeSize
from evergreen.domain.model.value_objects import Money
from evergreen.infrastructure.http.responses import failure_reason

logger = structlog.get_logger(__name__)

TREES_PATH = "/api/trees"
SEED_PATH = "/api/admin/seed"


class HttpCatalogGateway(CatalogGateway):

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    # --- CatalogGateway interface ---------------------------------------------

    async def fetch_items(self, size: SizeFilter) -> list[CatalogItem]:
        params = {}
        size_param = size.as_query_param()
        if size_param is not None:
            params["size"] = size_param

        try:
            response = await self._client.get(TREES_PATH, params=params)
        except httpx.HTTPError as exc:
            raise CatalogLoadError(f"Could not reach the catalog: {exc}") from exc

        if not response.is_success:
            raise CatalogLoadError(f"Failed to load trees: {failure_reason(response)}")

        try:
            body = response.json()
            raw_items = body.get("items") or []
            return [self._to_domain(raw) for raw in raw_items]
        except (ValueError, AttributeError, KeyError, TypeError, ValidationError) as exc:
            raise CatalogLoadError(f"Malformed catalog response: {exc}") from exc

    async def seed(self, overwrite: bool = False) -> None:
        try:
            response = await self._client.post(SEED_PATH, json={"overwrite": overwrite})
        except httpx.HTTPError as exc:
            raise SeedError(f"Could not reach the backend: {exc}") from exc

        if not response.is_success:
            raise SeedError(f"Seeding failed: {failure_reason(response)}")
        logger.debug("seed.accepted", status=response.status_code)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> CatalogItem:
        item_id = raw.get("id") or raw.get("_id")
        if item_id is None:
            raise KeyError("id")

        height = raw.get("height_ft")
        if height is not None:
            try:
                height = Decimal(str(height))
            except InvalidOperation as exc:
                raise ValidationError(f"Invalid height: {height!r}") from exc

        return CatalogItem(
            id=str(item_id),
            name=raw["name"],
            size=TreeSize.parse(raw["size"]),
            price=Money.of(raw["price"]),
            height_ft=height,
            image_url=raw.get("image_url") or raw.get("image"),
            description=raw.get("description"),
            tags=_tags(raw.get("tags")),
            in_stock=_in_stock(raw.get("in_stock", True)),
        )


def _tags(raw) -> frozenset[str]:
    if raw is None:
        return frozenset()
    # A bare string would otherwise split into single-character tags.
    if not isinstance(raw, (list, tuple)) or not all(isinstance(tag, str) for tag in raw):
        raise ValidationError(f"Tags must be a list of strings, got {raw!r}")
    return frozenset(raw)


def _in_stock(raw) -> bool:
    if not isinstance(raw, bool):
        raise ValidationError(f"in_stock must be true or false, got {raw!r}")
    return raw
