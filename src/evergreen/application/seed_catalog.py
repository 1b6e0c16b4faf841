"""Application service: Seed Catalog use case.

Asks the backend for demo trees (non-destructive by default), then
re-runs the catalog query so the shopper sees what was inserted.
Seeding is idempotent on the backend; this handler only guards against
double-submission while a request is already in flight.
"""

from __future__ import annotations

import structlog

from evergreen.application.query_catalog import QueryCatalogHandler
from evergreen.domain.exceptions import SeedError
from evergreen.domain.gateway.catalog_gateway import CatalogGateway
from evergreen.domain.model.catalog import FilterCriteria

logger = structlog.get_logger(__name__)


class SeedCatalogHandler:

    def __init__(
        self,
        catalog_gateway: CatalogGateway,
        query_handler: QueryCatalogHandler,
    ) -> None:
        self._catalog_gateway = catalog_gateway
        self._query_handler = query_handler
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def handle(self, criteria: FilterCriteria, overwrite: bool = False) -> bool:
        """Seed the catalog and refresh it.

        Returns False without contacting the backend if a seed is already
        running. Raises SeedError if the backend rejects the request; the
        current catalog is left on display in that case.
        """
        if self._in_flight:
            logger.info("seed.ignored", reason="already in flight")
            return False

        self._in_flight = True
        try:
            await self._catalog_gateway.seed(overwrite=overwrite)
            logger.info("seed.completed", overwrite=overwrite)
            # Issued only after the seed returned, so it sees the new rows.
            await self._query_handler.handle(criteria)
        except SeedError as exc:
            logger.warning("seed.failed", overwrite=overwrite, error=str(exc))
            raise
        finally:
            self._in_flight = False

        return True
