"""Order payload and result: what checkout sends and what comes back.

An OrderPayload is built once per submission attempt from a cart
snapshot and discarded after the request; the backend owns the order
from then on.
"""

from __future__ import annotations

from dataclasses import dataclass

from evergreen.domain.exceptions import ValidationError
from evergreen.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CustomerDetails:
    """Contact fields collected by the checkout form."""

    name: str
    email: str
    address: str
    city: str
    zip_code: str

    def __post_init__(self) -> None:
        for label, value in (
            ("Customer name", self.name),
            ("Email", self.email),
            ("Address", self.address),
            ("City", self.city),
            ("ZIP code", self.zip_code),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")
        if "@" not in self.email:
            raise ValidationError(f"Invalid email address: {self.email!r}")


@dataclass(frozen=True)
class OrderLine:
    item_id: str
    name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    shipping: Money

    @property
    def total(self) -> Money:
        return self.subtotal + self.shipping


@dataclass(frozen=True)
class OrderPayload:
    customer: CustomerDetails
    lines: tuple[OrderLine, ...]
    totals: OrderTotals

    @property
    def total(self) -> Money:
        return self.totals.total

    def to_wire(self) -> dict:
        """Request body for ``POST /api/orders``."""
        return {
            "customer_name": self.customer.name,
            "email": self.customer.email,
            "address": self.customer.address,
            "city": self.customer.city,
            "zip": self.customer.zip_code,
            "items": [
                {
                    "product_id": line.item_id,
                    "name": line.name,
                    "quantity": line.quantity.value,
                    "price": line.unit_price.to_wire(),
                }
                for line in self.lines
            ],
            "total": self.total.to_wire(),
        }


@dataclass(frozen=True)
class OrderResult:
    """Backend confirmation of an accepted order."""

    id: str
    total: Money
