"""Catalog items and the criteria used to narrow them.

Catalog items are owned by the backend. The storefront only ever holds a
read-only snapshot, replaced wholesale on every refetch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from evergreen.domain.exceptions import ValidationError
from evergreen.domain.model.value_objects import Money


class TreeSize(Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"

    @classmethod
    def parse(cls, raw: str) -> TreeSize:
        for size in cls:
            if size.value.lower() == raw.strip().lower():
                return size
        raise ValidationError(f"Unknown tree size: {raw!r}")


class SizeFilter(Enum):
    """Size selector shown next to the search box; ``ALL`` disables it."""

    ALL = "All"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"

    @classmethod
    def parse(cls, raw: str) -> SizeFilter:
        for selector in cls:
            if selector.value.lower() == raw.strip().lower():
                return selector
        choices = ", ".join(s.value for s in cls)
        raise ValidationError(f"Unknown size {raw!r} (choose one of {choices})")

    def matches(self, size: TreeSize) -> bool:
        return self is SizeFilter.ALL or self.value == size.value

    def as_query_param(self) -> str | None:
        """Value for the ``size`` query parameter, or None when unfiltered."""
        if self is SizeFilter.ALL:
            return None
        return self.value


@dataclass(frozen=True)
class CatalogItem:
    """A purchasable tree as last fetched from the backend.

    ``in_stock`` is advisory: it drives the "Sold Out" label but the cart
    never checks it.
    """

    id: str
    name: str
    size: TreeSize
    price: Money
    height_ft: Decimal | None = None
    image_url: str | None = None
    description: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    in_stock: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Catalog item id is required")
        if not self.name or not self.name.strip():
            raise ValidationError(f"Catalog item {self.id!r} has no name")


@dataclass(frozen=True)
class FilterCriteria:
    size: SizeFilter = SizeFilter.ALL
    query: str = ""

    @property
    def normalized_query(self) -> str:
        return self.query.strip().lower()

    def with_size(self, size: SizeFilter) -> FilterCriteria:
        return FilterCriteria(size=size, query=self.query)

    def with_query(self, query: str) -> FilterCriteria:
        return FilterCriteria(size=self.size, query=query)
