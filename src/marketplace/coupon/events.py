"""Domain events for the Coupon aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Coupon")
class CouponCreated:
    """A seller issued a new coupon."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True, sanitize=False)
    discount_percentage = Float(required=True)
    seller_id = Identifier(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Coupon")
class CouponDetailsUpdated:
    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True, sanitize=False)
    discount_percentage = Float(required=True)
    max_redemptions = Integer()


@marketplace.event(part_of="Coupon")
class CouponRedeemed:
    """A buyer applied the coupon to a product in their cart."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    product_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    redeem_count = Integer(required=True)


@marketplace.event(part_of="Coupon")
class CouponRedemptionReversed:
    """The coupon was removed from a cart item."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    redeem_count = Integer(required=True)
