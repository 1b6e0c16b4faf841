"""Unit tests for the Cart aggregate."""

import pytest

from evergreen.domain.exceptions import ValidationError
from evergreen.domain.model.cart import Cart
from evergreen.domain.model.catalog import TreeSize
from evergreen.domain.model.order import CustomerDetails
from evergreen.domain.model.value_objects import Money
from evergreen.domain.service.order_composer import compose_order
from tests.fakes import make_tree

FIR = make_tree("a", "Fresh Douglas Fir", price="40.00")
SPRUCE = make_tree("b", "Blue Spruce", TreeSize.LARGE, price="65.00")
PINE = make_tree("c", "Tabletop Pine", TreeSize.SMALL, price="25.00")

GUEST = CustomerDetails("Guest", "guest@example.com", "123 Holiday Lane", "North Pole", "00000")


class TestAddItem:

    def test_first_add_creates_line_with_quantity_one(self):
        cart = Cart()
        line = cart.add_item(FIR)
        assert line.quantity.value == 1
        assert cart.line_count == 1

    def test_adding_same_item_twice_merges(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(FIR)
        assert cart.line_count == 1
        assert cart.get("a").quantity.value == 2

    def test_insertion_order_preserved_across_merges(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        cart.add_item(FIR)
        cart.add_item(PINE)
        assert [line.item_id for line in cart.lines] == ["a", "b", "c"]

    def test_out_of_stock_item_still_added(self):
        cart = Cart()
        cart.add_item(make_tree("x", in_stock=False))
        assert cart.line_count == 1

    def test_price_snapshot_at_add_time(self):
        cart = Cart()
        cart.add_item(FIR)

        # The catalog refetches with a new price for the same id
        repriced = make_tree("a", "Fresh Douglas Fir", price="99.00")
        cart.add_item(repriced)

        line = cart.get("a")
        assert line.unit_price == Money.of("40.00")
        assert line.quantity.value == 2


class TestUpdateQuantity:

    def test_sets_quantity_exactly(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.update_quantity("a", 5)
        assert cart.get("a").quantity.value == 5

    def test_below_one_clamps_to_one(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(FIR)
        cart.update_quantity("a", 0)
        assert cart.get("a").quantity.value == 1
        cart.update_quantity("a", -3)
        assert cart.get("a").quantity.value == 1

    def test_unknown_id_is_noop(self):
        cart = Cart()
        cart.add_item(FIR)
        assert cart.update_quantity("missing", 4) is None
        assert cart.lines == (cart.get("a"),)

    def test_invalid_input_rejected_without_change(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.update_quantity("a", 3)
        with pytest.raises(ValidationError):
            cart.update_quantity("a", float("nan"))
        with pytest.raises(ValidationError):
            cart.update_quantity("a", "lots")
        assert cart.get("a").quantity.value == 3

    def test_update_keeps_position(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        cart.update_quantity("a", 9)
        assert [line.item_id for line in cart.lines] == ["a", "b"]


class TestRemoveAndClear:

    def test_remove_deletes_line(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        cart.remove_item("a")
        assert [line.item_id for line in cart.lines] == ["b"]

    def test_remove_missing_id_is_noop(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.remove_item("missing")
        cart.remove_item("missing")
        assert cart.line_count == 1

    def test_clear_empties_cart(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        cart.clear()
        assert cart.is_empty
        assert cart.total_quantity == 0


class TestRemoveOrdered:

    def _ordered(self, cart):
        return compose_order(cart.lines, GUEST).lines

    def test_unchanged_cart_is_emptied(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        cart.remove_ordered(self._ordered(cart))
        assert cart.is_empty

    def test_units_added_after_ordering_stay(self):
        cart = Cart()
        cart.add_item(FIR)
        ordered = self._ordered(cart)
        cart.add_item(FIR)
        cart.add_item(PINE)

        cart.remove_ordered(ordered)

        assert [(line.item_id, line.quantity.value) for line in cart.lines] == [("a", 1), ("c", 1)]

    def test_lines_removed_meanwhile_are_skipped(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        ordered = self._ordered(cart)
        cart.remove_item("a")

        cart.remove_ordered(ordered)
        assert cart.is_empty


class TestDerivedCounts:

    def test_line_count_vs_total_quantity(self):
        cart = Cart()
        cart.add_item(FIR)
        cart.add_item(FIR)
        cart.add_item(SPRUCE)
        cart.update_quantity("b", 4)
        assert cart.line_count == 2
        assert cart.total_quantity == 6
        assert cart.total_quantity == sum(line.quantity.value for line in cart.lines)

    def test_no_duplicate_ids_after_mixed_operations(self):
        cart = Cart()
        for item in (FIR, SPRUCE, FIR, PINE, SPRUCE, FIR):
            cart.add_item(item)
        cart.remove_item("c")
        cart.add_item(PINE)
        cart.update_quantity("a", 0)
        ids = [line.item_id for line in cart.lines]
        assert len(ids) == len(set(ids))
        assert cart.line_count == len(ids)

    def test_lines_snapshot_unaffected_by_later_edits(self):
        cart = Cart()
        cart.add_item(FIR)
        before = cart.lines
        cart.add_item(FIR)
        assert before[0].quantity.value == 1
