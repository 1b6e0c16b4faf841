"""The Storefront store: the single object the rendering layer talks to.

It owns the session's catalog snapshot, filter criteria and cart, and
exposes a narrow API over them. The rendering layer is handed a
Storefront and never mutates state any other way, so the whole engine
can be exercised without a UI.

Cart edits are plain synchronous calls: they never wait on a catalog
query, seed or checkout that is still in flight.
"""

from __future__ import annotations

from evergreen.application.checkout import CheckoutHandler
from evergreen.application.dto import CartDTO, CartLineDTO, OrderConfirmationDTO
from evergreen.application.query_catalog import CatalogState, QueryCatalogHandler
from evergreen.application.seed_catalog import SeedCatalogHandler
from evergreen.domain.exceptions import EntityNotFoundError
from evergreen.domain.gateway.catalog_gateway import CatalogGateway
from evergreen.domain.gateway.order_gateway import OrderGateway
from evergreen.domain.model.cart import Cart, CartLine
from evergreen.domain.model.catalog import CatalogItem, FilterCriteria, SizeFilter
from evergreen.domain.model.order import CustomerDetails
from evergreen.domain.service.catalog_filter import filter_catalog
from evergreen.domain.service.order_composer import compute_totals
from evergreen.domain.service.shipping import ShippingPolicy


class Storefront:

    def __init__(
        self,
        catalog_gateway: CatalogGateway,
        order_gateway: OrderGateway,
        shipping: ShippingPolicy | None = None,
    ) -> None:
        self.cart = Cart()
        self._shipping = shipping
        self._criteria = FilterCriteria()
        self._query = QueryCatalogHandler(catalog_gateway)
        self._seeder = SeedCatalogHandler(catalog_gateway, self._query)
        self._checkout = CheckoutHandler(order_gateway, self.cart, shipping)
        self._visible: tuple[tuple[int, FilterCriteria], list[CatalogItem]] | None = None

    # --- Catalog and filters --------------------------------------------------

    @property
    def catalog(self) -> CatalogState:
        return self._query.state

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def set_query(self, query: str) -> None:
        """Update the search text; takes effect locally without a refetch."""
        self._criteria = self._criteria.with_query(query)

    def set_size(self, size: SizeFilter) -> None:
        """Update the size selector; the backend is asked on ``apply_filters``."""
        self._criteria = self._criteria.with_size(size)

    async def apply_filters(self) -> bool:
        """(Re)load the catalog for the current criteria. Also serves as retry."""
        return await self._query.handle(self._criteria)

    @property
    def visible_items(self) -> list[CatalogItem]:
        key = (self.catalog.version, self._criteria)
        if self._visible is None or self._visible[0] != key:
            self._visible = (key, filter_catalog(self.catalog.items, self._criteria))
        return list(self._visible[1])

    def find_item(self, item_id: str) -> CatalogItem:
        for item in self.catalog.items:
            if item.id == item_id:
                return item
        raise EntityNotFoundError(f"Tree '{item_id}' is not in the current catalog")

    # --- Cart -----------------------------------------------------------------

    def add_to_cart(self, item: CatalogItem | str) -> CartLine:
        if isinstance(item, str):
            item = self.find_item(item)
        return self.cart.add_item(item)

    def update_quantity(self, item_id: str, quantity: int | float | str) -> CartLine | None:
        return self.cart.update_quantity(item_id, quantity)

    def remove_from_cart(self, item_id: str) -> None:
        self.cart.remove_item(item_id)

    @property
    def cart_badge(self) -> str:
        count = self.cart.total_quantity
        if not count:
            return "Cart"
        return f"Cart ({count})"

    def cart_summary(self) -> CartDTO:
        lines = self.cart.lines
        totals = compute_totals(lines, self._shipping)
        return CartDTO(
            lines=[
                CartLineDTO(
                    item_id=line.item_id,
                    name=line.name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in lines
            ],
            line_count=self.cart.line_count,
            total_quantity=self.cart.total_quantity,
            subtotal=str(totals.subtotal),
            shipping=str(totals.shipping),
            total=str(totals.total),
        )

    # --- Seeding and checkout -------------------------------------------------

    @property
    def seeding(self) -> bool:
        return self._seeder.in_flight

    async def seed(self, overwrite: bool = False) -> bool:
        return await self._seeder.handle(self._criteria, overwrite=overwrite)

    @property
    def checking_out(self) -> bool:
        return self._checkout.in_flight

    async def checkout(self, customer: CustomerDetails) -> OrderConfirmationDTO | None:
        return await self._checkout.handle(customer)
