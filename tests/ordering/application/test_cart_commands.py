"""Application tests for cart commands via domain.process() and the live cart view."""

from uuid import uuid4

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import (
    AddToCart,
    ClearCart,
    MoveToCart,
    RemoveFromCart,
    SaveForLater,
    UpdateCartQuantity,
)
from ordering.cart.view import cart_view
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import StateError
from shared.locks import dispatch

USER = "user-cart-001"


@pytest.fixture()
def lamp(catalogue):
    return catalogue.add_product(str(uuid4()), "Desk Lamp", 50.0).product_id


@pytest.fixture()
def desk(catalogue):
    return catalogue.add_product(str(uuid4()), "Standing Desk", 400.0, discount_price=350.0).product_id


def _add(product_id, quantity=1, user_id=USER):
    return current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


class TestAddToCart:
    def test_first_add_creates_the_cart(self, lamp):
        _add(lamp, 2)

        cart = current_domain.repository_for(ShoppingCart).get(USER)
        assert len(cart.items) == 1
        assert cart.total == 100.0

    def test_repeated_adds_sum_quantities(self, lamp):
        for quantity in (1, 2, 3, 4):
            dispatch(AddToCart(user_id=USER, product_id=lamp, quantity=quantity), USER, "cart")

        view = cart_view(USER)
        assert len(view["items"]) == 1
        assert view["items"][0]["quantity"] == 10
        assert view["total"] == 500.0

    def test_unknown_product(self, catalogue):
        with pytest.raises(ObjectNotFoundError):
            _add(str(uuid4()))

    def test_malformed_product_id(self):
        with pytest.raises(ValidationError):
            _add("prod-001")

    def test_zero_quantity(self, lamp):
        with pytest.raises(ValidationError):
            _add(lamp, 0)

    def test_add_returns_item_id(self, lamp):
        item_id = _add(lamp)
        assert cart_view(USER)["items"][0]["item_id"] == item_id


class TestItemCommands:
    def test_update_quantity_reprices(self, lamp):
        item_id = _add(lamp)
        current_domain.process(UpdateCartQuantity(user_id=USER, item_id=item_id, new_quantity=3), asynchronous=False)

        cart = current_domain.repository_for(ShoppingCart).get(USER)
        assert cart.items[0].quantity == 3
        assert cart.total == 150.0

    def test_update_without_cart(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateCartQuantity(user_id=USER, item_id="missing", new_quantity=1),
                asynchronous=False,
            )

    def test_remove_item(self, lamp, desk):
        item_id = _add(lamp)
        _add(desk)
        current_domain.process(RemoveFromCart(user_id=USER, item_id=item_id), asynchronous=False)

        view = cart_view(USER)
        assert [line["name"] for line in view["items"]] == ["Standing Desk"]
        assert view["total"] == 350.0

    def test_remove_unknown_item(self, lamp):
        _add(lamp)
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveFromCart(user_id=USER, item_id="missing"), asynchronous=False)

    def test_save_for_later_and_back(self, lamp, desk):
        _add(lamp, 2)
        desk_item = _add(desk)

        current_domain.process(SaveForLater(user_id=USER, item_id=desk_item), asynchronous=False)
        view = cart_view(USER)
        assert view["total"] == 100.0
        assert [line["name"] for line in view["saved_for_later"]] == ["Standing Desk"]

        current_domain.process(MoveToCart(user_id=USER, item_id=desk_item), asynchronous=False)
        assert cart_view(USER)["total"] == 450.0

    def test_move_active_item_to_cart(self, lamp):
        item_id = _add(lamp)
        with pytest.raises(StateError):
            current_domain.process(MoveToCart(user_id=USER, item_id=item_id), asynchronous=False)

    def test_clear_keeps_saved_items(self, lamp, desk):
        _add(lamp)
        desk_item = _add(desk)
        current_domain.process(SaveForLater(user_id=USER, item_id=desk_item), asynchronous=False)

        current_domain.process(ClearCart(user_id=USER), asynchronous=False)

        view = cart_view(USER)
        assert view["items"] == []
        assert len(view["saved_for_later"]) == 1
        assert view["total"] == 0.0


class TestCartView:
    def test_missing_cart_is_empty(self):
        assert cart_view("nobody") == {"items": [], "saved_for_later": [], "total": 0.0}

    def test_lines_carry_live_product_details(self, desk):
        _add(desk)
        line = cart_view(USER)["items"][0]
        assert line["name"] == "Standing Desk"
        assert line["price"] == 400.0
        assert line["discount_price"] == 350.0

    def test_price_change_shows_without_cart_mutation(self, catalogue, lamp):
        _add(lamp, 2)
        assert cart_view(USER)["total"] == 100.0

        catalogue.set_price(lamp, 60.0)
        assert cart_view(USER)["total"] == 120.0

    def test_vanished_product(self, catalogue, lamp, desk):
        _add(lamp, 2)
        _add(desk)
        catalogue.remove_product(desk)

        view = cart_view(USER)
        vanished = next(line for line in view["items"] if line["product_id"] == desk)
        assert vanished["name"] is None
        assert vanished["price"] is None
        assert view["total"] == 100.0
