"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry display-ready data from the application layer to the
rendering layer without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartLineDTO:
    item_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$40.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """The cart drawer: lines in display order plus derived totals."""

    lines: list[CartLineDTO]
    line_count: int
    total_quantity: int
    subtotal: str
    shipping: str
    total: str

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class OrderConfirmationDTO:
    order_id: str
    total: str

    @property
    def confirmation_code(self) -> str:
        """Short code shown to the shopper (last six characters of the id)."""
        return self.order_id[-6:]
