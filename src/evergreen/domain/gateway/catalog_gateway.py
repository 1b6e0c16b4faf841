"""Abstract gateway to the backend catalog service.

Defined in the domain layer so the domain never depends on the
transport. The HTTP implementation lives in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from evergreen.domain.model.catalog import CatalogItem, SizeFilter


class CatalogGateway(ABC):

    @abstractmethod
    async def fetch_items(self, size: SizeFilter) -> list[CatalogItem]:
        """Return the catalog slice for *size*.

        Raises CatalogLoadError on transport or parse failure.
        """

    @abstractmethod
    async def seed(self, overwrite: bool = False) -> None:
        """Ask the backend to insert demo trees.

        Raises SeedError if the backend does not accept the request.
        """
