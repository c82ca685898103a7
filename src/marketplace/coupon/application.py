"""Coupon application: applying coupons to cart items and taking them back off.

Applying a coupon touches four aggregates: the product (its coupon reference),
the buyer's cart (line item pricing), the usage ledger (a new entry) and the
coupon (its redeem counter). The handler's unit of work commits all of them
together or none of them.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product
from marketplace.coupon.coupon import Coupon
from marketplace.coupon.snapshot import CouponSnapshot
from marketplace.coupon.usage import CouponUsage
from marketplace.coupon.validation import validate_coupon
from marketplace.domain import marketplace
from marketplace.identity.user import User
from marketplace.shared.pricing import discounted_unit_price

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Coupon")
class ApplyCouponToProduct:
    """Redeem a coupon for a product that sits in the buyer's active cart."""

    coupon_id = Identifier(required=True)
    product_id = Identifier(required=True)
    buyer_id = Identifier(required=True)


@marketplace.command(part_of="Coupon")
class RemoveCouponFromCartItem:
    """Undo a redemption: reprice the item at the product price and give the redemption back."""

    cart_item_id = Identifier(required=True)


@marketplace.command(part_of="Product")
class RemoveCouponFromProduct:
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Coupon)
class CouponApplicationHandler:
    @handle(ApplyCouponToProduct)
    def apply_coupon_to_product(self, command):
        coupon_repo = current_domain.repository_for(Coupon)
        product_repo = current_domain.repository_for(Product)
        cart_repo = current_domain.repository_for(ShoppingCart)

        coupon = coupon_repo.get(command.coupon_id)
        product = product_repo.get(command.product_id)
        buyer = current_domain.repository_for(User).get_buyer(command.buyer_id)

        validate_coupon(coupon, product, buyer)

        cart = cart_repo.find_active_by_buyer(buyer.id)
        if cart is None:
            raise ObjectNotFoundError({"cart": [f"Active shopping cart not found for buyer: {buyer.id}"]})

        item = cart.item_for_product(product.id)
        if item is None:
            raise ObjectNotFoundError({"product_id": [f"Product not found in cart: {product.id}"]})

        product.apply_coupon(coupon.id)
        product_repo.add(product)

        unit_price = discounted_unit_price(product.price, coupon.discount_percentage)
        cart.apply_coupon_to_item(item.id, coupon.id, unit_price)
        cart_repo.add(cart)

        current_domain.repository_for(CouponUsage).add(
            CouponUsage.record(coupon_id=coupon.id, buyer_id=buyer.id, product_id=product.id)
        )

        coupon.redeem(product_id=product.id, buyer_id=buyer.id)
        coupon_repo.add(coupon)

        logger.info(
            "Coupon applied to product",
            coupon_id=str(coupon.id),
            product_id=str(product.id),
            buyer_id=str(buyer.id),
            redeem_count=coupon.redeem_count,
        )
        return CouponSnapshot.from_coupon(coupon)

    @handle(RemoveCouponFromCartItem)
    def remove_coupon_from_cart_item(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_by_item(command.cart_item_id)
        if cart is None:
            raise ObjectNotFoundError({"cart_item_id": [f"Cart item not found with id: {command.cart_item_id}"]})

        item = cart.find_item(command.cart_item_id)
        product = current_domain.repository_for(Product).get(item.product_id)

        coupon_id = cart.remove_coupon_from_item(item.id, current_unit_price=product.price)
        cart_repo.add(cart)

        coupon_repo = current_domain.repository_for(Coupon)
        try:
            coupon = coupon_repo.get(coupon_id)
        except ObjectNotFoundError:
            logger.warning(
                "Removed coupon no longer exists, redeem count left untouched",
                coupon_id=str(coupon_id),
                cart_item_id=str(command.cart_item_id),
            )
            return

        coupon.reverse_redemption(cart_item_id=item.id)
        coupon_repo.add(coupon)

        logger.info(
            "Coupon removed from cart item",
            coupon_id=str(coupon.id),
            cart_item_id=str(command.cart_item_id),
            redeem_count=coupon.redeem_count,
        )


@marketplace.command_handler(part_of=Product)
class ProductCouponHandler:
    @handle(RemoveCouponFromProduct)
    def remove_coupon_from_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.remove_coupon()
        repo.add(product)

        logger.info("Coupon removed from product", product_id=str(product.id))
