"""Cart reducer behaviour: pricing snapshots, quantity rules and the running total."""

from datetime import date, timedelta

import pytest

from flowershop.errors import InvalidInput
from flowershop.models.cart import CartState
from flowershop.services import cart as cart_engine
from flowershop.services.catalog import EXTRAS

TODAY = date(2026, 2, 10)


def _expected_total(cart):
    return sum(i.unit_price * i.quantity for i in cart.items)


class TestAddItem:
    def test_unit_price_includes_extras(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet, [EXTRAS["premium-wrap"], EXTRAS["love-card"]])

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1
        assert cart.items[0].unit_price == 500000 + 25000 + 8000
        assert cart.total == 533000

    def test_same_product_twice_gives_two_lines(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet, [EXTRAS["premium-wrap"]])
        cart = cart_engine.add_item(cart, bouquet, [EXTRAS["teddy-bear"]])

        assert len(cart.items) == 2
        assert [i.unit_price for i in cart.items] == [525000, 545000]
        assert cart.items[0].line_id != cart.items[1].line_id
        assert cart.total == 525000 + 545000

    def test_identical_adds_are_not_merged(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet)
        cart = cart_engine.add_item(cart, bouquet)

        assert len(cart.items) == 2
        assert all(i.quantity == 1 for i in cart.items)

    def test_input_state_is_not_mutated(self, bouquet):
        empty = CartState()
        cart_engine.add_item(empty, bouquet)

        assert empty.items == []
        assert empty.total == 0

    def test_price_is_snapshotted_at_add_time(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet, [EXTRAS["deluxe-box"]])
        bouquet.price = 999999

        cart = cart_engine.update_quantity(cart, cart.items[0].line_id, 2)
        assert cart.items[0].unit_price == 550000
        assert cart.total == 1100000

    def test_delivery_date_must_be_at_least_tomorrow(self, bouquet):
        with pytest.raises(InvalidInput) as exc:
            cart_engine.add_item(CartState(), bouquet, delivery_date=TODAY, today=TODAY)
        assert exc.value.fields == ["delivery_date"]

    def test_delivery_date_tomorrow_is_accepted(self, bouquet):
        tomorrow = TODAY + timedelta(days=1)
        cart = cart_engine.add_item(CartState(), bouquet, delivery_date=tomorrow, today=TODAY)

        assert cart.items[0].delivery_date == tomorrow


class TestUpdateQuantity:
    def test_example_line_total(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet, [EXTRAS["premium-wrap"]])
        cart = cart_engine.update_quantity(cart, cart.items[0].line_id, 2)

        assert cart.items[0].unit_price == 525000
        assert cart.items[0].line_total == 1050000
        assert cart.total == 1050000

    def test_zero_removes_line(self, bouquet, basket):
        cart = cart_engine.add_item(CartState(), bouquet)
        cart = cart_engine.add_item(cart, basket)

        cart = cart_engine.update_quantity(cart, cart.items[0].line_id, 0)
        assert [i.product.id for i in cart.items] == [3]
        assert cart.total == 800000

    def test_negative_behaves_like_zero(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet)
        line_id = cart.items[0].line_id

        assert cart_engine.update_quantity(cart, line_id, -3).model_dump() == cart_engine.update_quantity(cart, line_id, 0).model_dump()
        assert cart_engine.update_quantity(cart, line_id, -3).items == []

    def test_unknown_line_is_a_no_op(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet)

        updated = cart_engine.update_quantity(cart, "missing", 5)
        assert updated.items == cart.items
        assert updated.total == cart.total


class TestRemoveAndClear:
    def test_remove_targets_one_line_only(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet)
        cart = cart_engine.add_item(cart, bouquet, [EXTRAS["balloon-set"]])

        cart = cart_engine.remove_item(cart, cart.items[0].line_id)
        assert len(cart.items) == 1
        assert cart.items[0].unit_price == 530000
        assert cart.total == 530000

    def test_clear(self, bouquet, basket):
        cart = cart_engine.add_item(CartState(), bouquet)
        cart = cart_engine.add_item(cart, basket)

        cart = cart_engine.clear_cart(cart)
        assert cart.items == []
        assert cart.total == 0
        assert cart.item_count == 0


def test_total_matches_lines_after_every_mutation(bouquet, basket):
    cart = CartState()
    steps = [
        lambda c: cart_engine.add_item(c, bouquet, [EXTRAS["chocolate-box"]]),
        lambda c: cart_engine.add_item(c, basket),
        lambda c: cart_engine.update_quantity(c, c.items[0].line_id, 4),
        lambda c: cart_engine.add_item(c, bouquet),
        lambda c: cart_engine.update_quantity(c, c.items[1].line_id, -1),
        lambda c: cart_engine.remove_item(c, c.items[0].line_id),
        lambda c: cart_engine.update_quantity(c, c.items[0].line_id, 3),
    ]
    for step in steps:
        cart = step(cart)
        assert cart.total == _expected_total(cart)
    assert cart.item_count == 3


class TestDerivedTotal:
    def test_rebuilt_from_items(self, bouquet, basket):
        cart = cart_engine.add_item(CartState(), bouquet)
        cart = cart_engine.add_item(cart, basket)

        assert CartState(items=cart.items).total == 1300000

    def test_stored_total_is_ignored(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet, [EXTRAS["love-card"]])
        data = {**cart.model_dump(mode="json"), "total": 1}

        assert CartState.model_validate(data).total == 508000

    def test_total_follows_line_changes(self, bouquet):
        cart = cart_engine.add_item(CartState(), bouquet)
        cart.items[0].quantity = 3

        assert cart.total == 1500000
