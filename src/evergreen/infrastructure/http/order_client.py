"""httpx-backed implementation of OrderGateway."""

from __future__ import annotations

import httpx

from evergreen.domain.exceptions import CheckoutError, ValidationError
from evergreen.domain.gateway.order_gateway import OrderGateway
from evergreen.domain.model.order import OrderPayload, OrderResult
from evergreen.domain.model.value_objects import Money
from evergreen.infrastructure.http.responses import failure_reason

ORDERS_PATH = "/api/orders"


class HttpOrderGateway(OrderGateway):

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def submit(self, payload: OrderPayload) -> OrderResult:
        try:
            response = await self._client.post(ORDERS_PATH, json=payload.to_wire())
        except httpx.HTTPError as exc:
            raise CheckoutError(f"Could not reach the order service: {exc}") from exc

        if not response.is_success:
            raise CheckoutError(f"Checkout failed: {failure_reason(response)}")

        try:
            return self._to_domain(response.json(), payload)
        except (ValueError, AttributeError, ValidationError) as exc:
            raise CheckoutError(f"Unreadable order confirmation: {exc}") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict, payload: OrderPayload) -> OrderResult:
        order_id = raw.get("id") or raw.get("_id")
        if not order_id:
            raise ValidationError("order confirmation has no id")
        total = raw.get("total")
        return OrderResult(
            id=str(order_id),
            # Some backends acknowledge without echoing the total.
            total=Money.of(total) if total is not None else payload.total,
        )
