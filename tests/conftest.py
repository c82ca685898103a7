import os
from datetime import date, timedelta
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from marketplace.domain import marketplace

    marketplace.init()
    marketplace.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db, setup_db

    setup_db(marketplace)

    yield

    drop_db(marketplace)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared marketplace fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def today():
    return date.today()


@pytest.fixture()
def register_user():
    """Register an account through the domain and return its id."""
    from marketplace.identity.registration import RegisterUser
    from protean.utils.globals import current_domain

    def _register(username, role="Buyer"):
        command = RegisterUser(username=username, email=f"{username}@example.com", role=role)
        return current_domain.process(command, asynchronous=False)

    return _register


@pytest.fixture()
def seller_id(register_user):
    return register_user("acme-store", role="Seller")


@pytest.fixture()
def buyer_id(register_user):
    return register_user("jane.doe", role="Buyer")


@pytest.fixture()
def create_product(seller_id):
    from marketplace.catalogue.products import CreateProduct
    from protean.utils.globals import current_domain

    def _create(name="Ceramic Mug", price=100.00, owner=None, **kwargs):
        command = CreateProduct(name=name, price=price, seller_id=owner or seller_id, **kwargs)
        return current_domain.process(command, asynchronous=False)

    return _create


@pytest.fixture()
def product_id(create_product):
    return create_product()


@pytest.fixture()
def open_cart():
    """Open a cart for the buyer and put products into it. Returns ``(cart_id, [item_id, ...])``."""
    from marketplace.cart.items import AddToCart
    from marketplace.cart.management import CreateCart
    from protean.utils.globals import current_domain

    def _open(buyer, *products, quantity=1):
        cart_id = current_domain.process(CreateCart(buyer_id=buyer), asynchronous=False)
        item_ids = [
            current_domain.process(
                AddToCart(cart_id=cart_id, product_id=product, quantity=quantity),
                asynchronous=False,
            )
            for product in products
        ]
        return cart_id, item_ids

    return _open


@pytest.fixture()
def create_coupon(seller_id, today):
    """Issue a coupon through the domain and return its snapshot."""
    from marketplace.coupon.management import CreateCoupon
    from protean.utils.globals import current_domain

    def _create(code="SPRING10", discount_percentage=10.0, start=None, end=None, max_redemptions=None, owner=None):
        command = CreateCoupon(
            code=code,
            discount_percentage=discount_percentage,
            start_date=(start or today - timedelta(days=1)).isoformat(),
            end_date=(end or today + timedelta(days=30)).isoformat(),
            max_redemptions=max_redemptions,
            seller_id=owner or seller_id,
        )
        return current_domain.process(command, asynchronous=False)

    return _create


@pytest.fixture()
def apply_coupon():
    from marketplace.coupon.application import ApplyCouponToProduct
    from protean.utils.globals import current_domain

    def _apply(coupon_id, product_id, buyer_id):
        command = ApplyCouponToProduct(coupon_id=coupon_id, product_id=product_id, buyer_id=buyer_id)
        return current_domain.process(command, asynchronous=False)

    return _apply
