"""Domain service: Order Composer.

Turns a cart snapshot into derived totals and a submittable payload.
Everything here is a pure function of its arguments; callers may cache
results but nothing depends on them being cached.
"""

from __future__ import annotations

from collections.abc import Sequence

from evergreen.domain.exceptions import ValidationError
from evergreen.domain.model.cart import CartLine
from evergreen.domain.model.order import (
    CustomerDetails,
    OrderLine,
    OrderPayload,
    OrderTotals,
)
from evergreen.domain.model.value_objects import Money
from evergreen.domain.service.shipping import FlatRateShipping, ShippingPolicy


def subtotal(lines: Sequence[CartLine]) -> Money:
    result = Money.zero()
    for line in lines:
        result = result + line.line_total
    return result


def compute_totals(
    lines: Sequence[CartLine],
    shipping: ShippingPolicy | None = None,
) -> OrderTotals:
    """Subtotal, shipping and total for *lines*.

    An empty cart ships nothing, so all three amounts are zero.
    """
    if not lines:
        return OrderTotals(subtotal=Money.zero(), shipping=Money.zero())

    policy = shipping or FlatRateShipping()
    sub = subtotal(lines)
    return OrderTotals(subtotal=sub, shipping=policy.quote(sub, lines))


def compose_order(
    lines: Sequence[CartLine],
    customer: CustomerDetails,
    shipping: ShippingPolicy | None = None,
) -> OrderPayload:
    """Build the payload for one checkout attempt, one line per cart line."""
    if not lines:
        raise ValidationError("Cannot compose an order from an empty cart")

    order_lines = tuple(
        OrderLine(
            item_id=line.item_id,
            name=line.name,
            quantity=line.quantity,
            unit_price=line.unit_price,  # <-- add-time price, not a re-fetch
        )
        for line in lines
    )
    return OrderPayload(
        customer=customer,
        lines=order_lines,
        totals=compute_totals(lines, shipping),
    )
