"""Shared BDD fixtures and step definitions for the Ordering domain."""

from uuid import uuid4

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart
from protean import current_domain
from pytest_bdd import given, parsers, then

SHOPPER = "user-bdd-101"


@pytest.fixture()
def context():
    """Mutable scenario state shared between steps."""
    return {"products": {}}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:g}'))
def _(catalogue, context, name, price):
    context["products"][name] = catalogue.add_product(str(uuid4()), name, float(price)).product_id


@given(parsers.cfparse('the shopper has {quantity:d} of "{name}" in the cart'))
def _(context, quantity, name):
    current_domain.process(
        AddToCart(user_id=SHOPPER, product_id=context["products"][name], quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} active items"))
def _(count):
    cart = current_domain.repository_for(ShoppingCart).get(SHOPPER)
    assert len(cart.active_items()) == count
