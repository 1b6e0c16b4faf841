"""Abstract gateway to the order-persistence backend."""

from __future__ import annotations

from abc import ABC, abstractmethod

from evergreen.domain.model.order import OrderPayload, OrderResult


class OrderGateway(ABC):

    @abstractmethod
    async def submit(self, payload: OrderPayload) -> OrderResult:
        """Submit a single order request.

        Raises CheckoutError on transport failure or a non-2xx response.
        """
