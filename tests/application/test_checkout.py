"""Integration tests for the Checkout use case."""

import asyncio

import pytest

from evergreen.application.checkout import CheckoutHandler
from evergreen.domain.exceptions import CheckoutError, CheckoutInProgressError
from evergreen.domain.model.cart import Cart
from evergreen.domain.model.order import CustomerDetails
from evergreen.domain.model.value_objects import Money
from evergreen.domain.service.shipping import FlatRateShipping
from tests.fakes import FakeOrderGateway, make_tree

GUEST = CustomerDetails(
    name="Guest",
    email="guest@example.com",
    address="123 Holiday Lane",
    city="North Pole",
    zip_code="00000",
)


def _setup() -> tuple[CheckoutHandler, Cart, FakeOrderGateway]:
    cart = Cart()
    gateway = FakeOrderGateway()
    handler = CheckoutHandler(gateway, cart, FlatRateShipping(Money.of("10")))
    return handler, cart, gateway


class TestCheckoutHappyPath:

    def test_submits_totals_and_clears_cart(self):
        handler, cart, gateway = _setup()
        cart.add_item(make_tree("a", price="40"))
        cart.add_item(make_tree("a", price="40"))

        dto = asyncio.run(handler.handle(GUEST))

        payload = gateway.submitted[0]
        assert payload.totals.subtotal == Money.of("80")
        assert payload.total == Money.of("90")
        assert dto.total == "$90.00"
        assert dto.confirmation_code == "ffee42"
        assert cart.is_empty

    def test_single_request_per_checkout(self):
        handler, cart, gateway = _setup()
        cart.add_item(make_tree("a"))
        asyncio.run(handler.handle(GUEST))
        assert len(gateway.submitted) == 1


class TestCheckoutEmptyCart:

    def test_empty_cart_is_noop(self):
        handler, cart, gateway = _setup()
        assert asyncio.run(handler.handle(GUEST)) is None
        assert gateway.submitted == []
        assert cart.is_empty


class TestCheckoutFailure:

    def test_failure_leaves_cart_untouched(self):
        handler, cart, gateway = _setup()
        cart.add_item(make_tree("a", price="40"))
        cart.add_item(make_tree("b", "Blue Spruce", price="65"))
        cart.update_quantity("a", 3)
        before = cart.lines

        gateway.error = CheckoutError("Checkout failed: HTTP 502 Bad Gateway")
        with pytest.raises(CheckoutError, match="502"):
            asyncio.run(handler.handle(GUEST))

        assert cart.lines == before
        assert handler.in_flight is False

    def test_retry_after_failure_succeeds(self):
        handler, cart, gateway = _setup()
        cart.add_item(make_tree("a"))
        gateway.error = CheckoutError("down")
        with pytest.raises(CheckoutError):
            asyncio.run(handler.handle(GUEST))

        gateway.error = None
        assert asyncio.run(handler.handle(GUEST)) is not None
        assert cart.is_empty


class TestCheckoutReentrancy:

    def test_second_checkout_while_in_flight_rejected(self):
        async def scenario():
            handler, cart, gateway = _setup()
            cart.add_item(make_tree("a"))
            gateway.gate = asyncio.Event()

            first = asyncio.create_task(handler.handle(GUEST))
            await asyncio.sleep(0)
            assert handler.in_flight is True

            with pytest.raises(CheckoutInProgressError):
                await handler.handle(GUEST)
            # Rejected attempt did not touch the cart
            assert cart.line_count == 1

            gateway.gate.set()
            await first
            return cart, gateway

        cart, gateway = asyncio.run(scenario())
        assert len(gateway.submitted) == 1
        assert cart.is_empty

    def test_cart_edits_not_blocked_by_inflight_checkout(self):
        async def scenario():
            handler, cart, gateway = _setup()
            cart.add_item(make_tree("a"))
            gateway.gate = asyncio.Event()

            task = asyncio.create_task(handler.handle(GUEST))
            await asyncio.sleep(0)
            cart.add_item(make_tree("a"))
            assert cart.total_quantity == 2

            gateway.gate.set()
            await task
            return cart, gateway

        cart, gateway = asyncio.run(scenario())
        # The submitted payload is the snapshot taken when checkout began
        assert gateway.submitted[0].lines[0].quantity.value == 1
        # Only the ordered unit leaves the cart
        assert cart.total_quantity == 1
