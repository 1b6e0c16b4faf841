"""Application service: Checkout use case.

Composes an order from the cart, submits it once, and takes the ordered
lines out of the cart only after the backend accepted it. A failed
submission leaves the cart exactly as it was so the shopper can retry.
"""

from __future__ import annotations

import structlog

from evergreen.application.dto import OrderConfirmationDTO
from evergreen.domain.exceptions import CheckoutError, CheckoutInProgressError
from evergreen.domain.gateway.order_gateway import OrderGateway
from evergreen.domain.model.cart import Cart
from evergreen.domain.model.order import CustomerDetails, OrderResult
from evergreen.domain.service.order_composer import compose_order
from evergreen.domain.service.shipping import ShippingPolicy

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        order_gateway: OrderGateway,
        cart: Cart,
        shipping: ShippingPolicy | None = None,
    ) -> None:
        self._order_gateway = order_gateway
        self._cart = cart
        self._shipping = shipping
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def handle(self, customer: CustomerDetails) -> OrderConfirmationDTO | None:
        """Submit the cart as an order.

        Returns None (and sends nothing) when the cart is empty. Raises
        CheckoutInProgressError if another checkout has not finished yet.
        """
        if self._in_flight:
            raise CheckoutInProgressError("A checkout is already in progress")

        if self._cart.is_empty:
            logger.info("checkout.skipped", reason="empty cart")
            return None

        payload = compose_order(self._cart.lines, customer, self._shipping)
        log = logger.bind(lines=len(payload.lines), total=str(payload.total))

        self._in_flight = True
        try:
            result = await self._order_gateway.submit(payload)
        except CheckoutError as exc:
            log.warning("checkout.failed", error=str(exc))
            raise
        finally:
            self._in_flight = False

        self._cart.remove_ordered(payload.lines)
        log.info("checkout.completed", order_id=result.id, left_in_cart=self._cart.line_count)
        return self._to_dto(result)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(result: OrderResult) -> OrderConfirmationDTO:
        return OrderConfirmationDTO(order_id=result.id, total=str(result.total))
