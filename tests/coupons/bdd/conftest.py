"""Shared BDD fixtures and step definitions for the coupon workflow."""

from datetime import date, timedelta

import pytest
from marketplace.cart.cart import ShoppingCart
from marketplace.coupon.coupon import Coupon
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def marketplace_state():
    """Ids created by Given steps, keyed by role."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a seller listing "{name}" at {price:f}'))
def seller_with_product(seller_id, create_product, marketplace_state, name, price):
    marketplace_state["seller_id"] = seller_id
    marketplace_state["product_id"] = create_product(name=name, price=price)


@given(parsers.cfparse('a buyer "{username}" with {quantity:d} of the product in an active cart'))
def buyer_with_cart(register_user, open_cart, marketplace_state, username, quantity):
    buyer = register_user(username, role="Buyer")
    cart_id, (item_id,) = open_cart(buyer, marketplace_state["product_id"], quantity=quantity)
    marketplace_state.update(buyer_id=buyer, cart_id=cart_id, item_id=item_id)


@given(parsers.cfparse('an active coupon "{code}" with {discount:d}% off'))
def active_coupon(create_coupon, marketplace_state, code, discount):
    create_coupon(code=code, discount_percentage=float(discount), owner=marketplace_state["seller_id"])


@given(parsers.cfparse('an active coupon "{code}" with {discount:d}% off limited to {limit:d} redemption'))
def capped_coupon(create_coupon, marketplace_state, code, discount, limit):
    create_coupon(
        code=code,
        discount_percentage=float(discount),
        max_redemptions=limit,
        owner=marketplace_state["seller_id"],
    )


@given(parsers.cfparse('an expired coupon "{code}" with {discount:d}% off'))
def expired_coupon(create_coupon, marketplace_state, code, discount):
    today = date.today()
    create_coupon(
        code=code,
        discount_percentage=float(discount),
        start=today - timedelta(days=30),
        end=today - timedelta(days=1),
        owner=marketplace_state["seller_id"],
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the redeem count of "{code}" is {count:d}'))
def redeem_count_is(code, count):
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    assert coupon.redeem_count == count


@then(parsers.cfparse("the cart line total is {total:f}"))
def cart_line_total_is(marketplace_state, total):
    cart = current_domain.repository_for(ShoppingCart).get(marketplace_state["cart_id"])
    assert cart.find_item(marketplace_state["item_id"]).total_price == total


@then(parsers.cfparse("the application is rejected with {error_name}"))
def application_rejected(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name

