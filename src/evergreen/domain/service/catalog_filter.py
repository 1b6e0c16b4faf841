"""Domain service: Catalog Filter.

Narrows a catalog snapshot to what the shopper asked to see. Pure: the
input sequence is never mutated and the relative order of the items
that survive is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from evergreen.domain.model.catalog import CatalogItem, FilterCriteria


def matches(item: CatalogItem, criteria: FilterCriteria) -> bool:
    if not criteria.size.matches(item.size):
        return False

    query = criteria.normalized_query
    if not query:
        return True
    if query in item.name.lower():
        return True
    return any(query in tag.lower() for tag in item.tags)


def filter_catalog(
    items: Iterable[CatalogItem],
    criteria: FilterCriteria,
) -> list[CatalogItem]:
    """Return the items matching both the size selector and the text query."""
    return [item for item in items if matches(item, criteria)]
