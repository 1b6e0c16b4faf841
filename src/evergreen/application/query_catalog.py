"""Application service: Query Catalog use case.

Fetches the catalog slice for the current size selector and publishes
it into a CatalogState. Load failures never escape: they become an empty
catalog with ``load_failed`` set so the surface can offer a retry.

Queries may overlap (e.g. "Apply" pressed twice on a slow link). Every
call takes a ticket; only the most recently issued ticket may publish,
so a slow earlier response can never overwrite a newer one.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from evergreen.domain.exceptions import CatalogLoadError
from evergreen.domain.gateway.catalog_gateway import CatalogGateway
from evergreen.domain.model.catalog import CatalogItem, FilterCriteria

logger = structlog.get_logger(__name__)


@dataclass
class CatalogState:
    """The catalog snapshot as last published, plus its loading status."""

    items: tuple[CatalogItem, ...] = ()
    loading: bool = False
    load_failed: bool = False
    error: str | None = None
    version: int = 0  # bumped on every publish

    def publish(self, items: tuple[CatalogItem, ...], error: str | None = None) -> None:
        self.items = items
        self.load_failed = error is not None
        self.error = error
        self.version += 1


class QueryCatalogHandler:

    def __init__(
        self,
        catalog_gateway: CatalogGateway,
        state: CatalogState | None = None,
    ) -> None:
        self._catalog_gateway = catalog_gateway
        self.state = state if state is not None else CatalogState()
        self._issued = 0

    def _is_current(self, ticket: int) -> bool:
        return ticket == self._issued

    async def handle(self, criteria: FilterCriteria) -> bool:
        """Fetch and publish the catalog for *criteria*.

        Returns True if this call's result was published, False if it
        failed or was superseded by a later query.
        """
        self._issued += 1
        ticket = self._issued
        log = logger.bind(size=criteria.size.value, ticket=ticket)

        self.state.loading = True
        try:
            items = await self._catalog_gateway.fetch_items(criteria.size)
        except CatalogLoadError as exc:
            if not self._is_current(ticket):
                log.debug("catalog.stale_failure_discarded")
                return False
            log.warning("catalog.load_failed", error=str(exc))
            self.state.publish((), error=str(exc))
            return False
        finally:
            if self._is_current(ticket):
                self.state.loading = False

        if not self._is_current(ticket):
            log.debug("catalog.stale_response_discarded", count=len(items))
            return False

        self.state.publish(tuple(items))
        log.info("catalog.loaded", count=len(items))
        return True
