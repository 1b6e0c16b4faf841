"""Cart aggregate: the in-session shopping cart.

The Cart owns its lines and enforces the one-line-per-item rule. Lines
are keyed by item id, so a duplicate line cannot be represented at all:
adding an item that is already present merges into the existing line.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from evergreen.domain.model.catalog import CatalogItem
from evergreen.domain.model.order import OrderLine
from evergreen.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """One distinct item in the cart.

    ``name`` and ``unit_price`` are copied from the catalog at add-time and
    never refreshed, so a later price change does not alter the cart.
    """

    item_id: str
    name: str
    unit_price: Money  # locked at add-time
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


class Cart:
    """Ordered collection of CartLine, insertion order preserved."""

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}

    # --- Mutations ------------------------------------------------------------

    def add_item(self, item: CatalogItem) -> CartLine:
        """Add one unit of *item*, merging into an existing line if present."""
        existing = self._lines.get(item.id)
        if existing is not None:
            line = replace(existing, quantity=existing.quantity.increment())
        else:
            line = CartLine(
                item_id=item.id,
                name=item.name,
                unit_price=item.price,
                quantity=Quantity(1),
            )
        # Reassigning an existing key keeps its position.
        self._lines[item.id] = line
        return line

    def update_quantity(self, item_id: str, new_quantity: int | float | str) -> CartLine | None:
        """Set a line's quantity exactly; values below 1 clamp to 1.

        Unknown ids are ignored. Invalid input raises ValidationError before
        anything changes.
        """
        existing = self._lines.get(item_id)
        if existing is None:
            return None
        line = replace(existing, quantity=Quantity.clamped(new_quantity))
        self._lines[item_id] = line
        return line

    def remove_item(self, item_id: str) -> None:
        self._lines.pop(item_id, None)

    def clear(self) -> None:
        self._lines.clear()

    def remove_ordered(self, ordered: Iterable[OrderLine]) -> None:
        """Take submitted quantities out of the cart.

        With no edits since the order was composed this empties the cart.
        Units added while the order was in flight stay behind.
        """
        for ordered_line in ordered:
            existing = self._lines.get(ordered_line.item_id)
            if existing is None:
                continue
            remaining = existing.quantity.value - ordered_line.quantity.value
            if remaining < 1:
                del self._lines[ordered_line.item_id]
            else:
                self._lines[ordered_line.item_id] = replace(existing, quantity=Quantity(remaining))

    # --- Queries --------------------------------------------------------------

    def get(self, item_id: str) -> CartLine | None:
        return self._lines.get(item_id)

    @property
    def lines(self) -> tuple[CartLine, ...]:
        """Immutable snapshot of the lines in display order."""
        return tuple(self._lines.values())

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity.value for line in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines
