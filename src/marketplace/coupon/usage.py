"""CouponUsage aggregate: one entry in the redemption ledger."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Identifier

from marketplace.domain import marketplace


@marketplace.aggregate
class CouponUsage:
    """Records that a buyer redeemed a coupon for a product.

    Entries are written once and never changed; they disappear only together
    with their coupon.
    """

    coupon_id: Identifier(required=True)
    buyer_id: Identifier(required=True)
    product_id: Identifier(required=True)
    used: Boolean(default=True)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def record(cls, coupon_id, buyer_id, product_id):
        return cls(
            coupon_id=coupon_id,
            buyer_id=buyer_id,
            product_id=product_id,
            used=True,
            created_at=datetime.now(),
        )
