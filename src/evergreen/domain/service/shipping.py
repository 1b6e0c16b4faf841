"""Shipping policies: how much delivery adds to an order.

The Order Composer only depends on the ShippingPolicy interface so the
rate can be swapped (via configuration) without touching cart logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from decimal import Decimal

from evergreen.domain.model.cart import CartLine
from evergreen.domain.model.value_objects import Money

DEFAULT_FLAT_RATE = Money(Decimal("10.00"))


class ShippingPolicy(ABC):

    @abstractmethod
    def quote(self, subtotal: Money, lines: Sequence[CartLine]) -> Money:
        """Return the shipping charge for a non-empty cart."""


class FlatRateShipping(ShippingPolicy):

    def __init__(self, rate: Money = DEFAULT_FLAT_RATE) -> None:
        self._rate = rate

    def quote(self, subtotal: Money, lines: Sequence[CartLine]) -> Money:
        return self._rate


class FreeShippingOver(ShippingPolicy):
    """Free delivery once the subtotal reaches *threshold*, else *fallback*."""

    def __init__(self, threshold: Money, fallback: ShippingPolicy) -> None:
        self._threshold = threshold
        self._fallback = fallback

    def quote(self, subtotal: Money, lines: Sequence[CartLine]) -> Money:
        if subtotal >= self._threshold:
            return Money.zero()
        return self._fallback.quote(subtotal, lines)
