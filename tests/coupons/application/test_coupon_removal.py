"""Application tests for taking coupons back off cart items and products."""

import pytest
from marketplace.cart.cart import ShoppingCart
from marketplace.cart.management import AbandonCart
from marketplace.catalogue.product import Product
from marketplace.catalogue.products import UpdateProductDetails
from marketplace.coupon.application import RemoveCouponFromCartItem, RemoveCouponFromProduct
from marketplace.coupon.coupon import Coupon
from marketplace.coupon.errors import CouponNotAppliedError
from marketplace.coupon.management import DeleteCoupon
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


def _remove_from_item(item_id):
    return current_domain.process(RemoveCouponFromCartItem(cart_item_id=item_id), asynchronous=False)


def _remove_from_product(product_id):
    return current_domain.process(RemoveCouponFromProduct(product_id=product_id), asynchronous=False)


@pytest.fixture()
def applied(create_coupon, apply_coupon, open_cart, buyer_id, product_id):
    """A 10% coupon applied to a 100.00 product sitting twice in the buyer's cart."""
    cart_id, (item_id,) = open_cart(buyer_id, product_id, quantity=2)
    coupon = create_coupon()
    apply_coupon(coupon.id, product_id, buyer_id)
    return {"coupon_id": coupon.id, "cart_id": cart_id, "item_id": item_id}


def _item(cart_id, item_id):
    return current_domain.repository_for(ShoppingCart).get(cart_id).find_item(item_id)


class TestRemoveCouponFromCartItem:
    def test_restores_undiscounted_total(self, applied):
        item = _item(applied["cart_id"], applied["item_id"])
        assert item.total_price == 180.00

        _remove_from_item(applied["item_id"])

        item = _item(applied["cart_id"], applied["item_id"])
        assert item.applied_coupon_id is None
        assert item.discounted_price is None
        assert item.total_price == 200.00

    def test_decrements_redeem_count(self, applied):
        _remove_from_item(applied["item_id"])
        assert current_domain.repository_for(Coupon).get(applied["coupon_id"]).redeem_count == 0

    def test_reprices_at_current_product_price(self, applied, product_id):
        current_domain.process(UpdateProductDetails(product_id=product_id, price=120.00), asynchronous=False)

        _remove_from_item(applied["item_id"])

        item = _item(applied["cart_id"], applied["item_id"])
        assert item.unit_price == 120.00
        assert item.total_price == 240.00

    def test_product_keeps_its_coupon(self, applied, product_id):
        _remove_from_item(applied["item_id"])
        product = current_domain.repository_for(Product).get(product_id)
        assert str(product.coupon_id) == applied["coupon_id"]

    def test_second_removal_rejected(self, applied):
        _remove_from_item(applied["item_id"])
        with pytest.raises(CouponNotAppliedError):
            _remove_from_item(applied["item_id"])

    def test_unknown_item(self):
        with pytest.raises(ObjectNotFoundError):
            _remove_from_item("missing-item")

    def test_item_in_abandoned_cart_not_found(self, applied):
        current_domain.process(AbandonCart(cart_id=applied["cart_id"]), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _remove_from_item(applied["item_id"])

    def test_counter_at_zero_stays_at_zero(self, applied):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(applied["coupon_id"])
        coupon.redeem_count = 0
        repo.add(coupon)

        _remove_from_item(applied["item_id"])

        assert repo.get(applied["coupon_id"]).redeem_count == 0

    def test_deleted_coupon_still_removed_from_item(self, applied):
        current_domain.process(DeleteCoupon(coupon_id=applied["coupon_id"]), asynchronous=False)

        _remove_from_item(applied["item_id"])

        item = _item(applied["cart_id"], applied["item_id"])
        assert item.applied_coupon_id is None
        assert item.total_price == 200.00


class TestRedeemCounterProperty:
    def test_count_is_applications_minus_removals(
        self, register_user, create_product, create_coupon, apply_coupon, open_cart
    ):
        coupon = create_coupon(max_redemptions=10)
        products = [create_product(name=f"Mug {n}", price=20.00) for n in range(3)]

        # Each buyer gets one product so the coupon is never already applied
        item_ids = []
        for n, product in enumerate(products):
            buyer = register_user(f"buyer-{n}")
            _, (item_id,) = open_cart(buyer, product)
            apply_coupon(coupon.id, product, buyer)
            item_ids.append(item_id)

        _remove_from_item(item_ids[0])
        _remove_from_item(item_ids[2])

        assert current_domain.repository_for(Coupon).get(coupon.id).redeem_count == 3 - 2


class TestRemoveCouponFromProduct:
    def test_clears_reference(self, applied, product_id):
        _remove_from_product(product_id)
        assert current_domain.repository_for(Product).get(product_id).coupon_id is None

    def test_without_coupon_rejected(self, product_id):
        with pytest.raises(CouponNotAppliedError):
            _remove_from_product(product_id)

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _remove_from_product("missing-product")
