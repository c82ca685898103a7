"""Coupon aggregate: a seller-issued percentage discount with a validity window."""

from datetime import date, datetime

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, Float, Identifier, Integer, String

from marketplace.coupon.events import (
    CouponCreated,
    CouponDetailsUpdated,
    CouponRedeemed,
    CouponRedemptionReversed,
)
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


@marketplace.aggregate
class Coupon:
    """A discount code issued by one seller.

    ``redeem_count`` is a running counter of successful applications. It is
    incremented on every redemption and decremented when a coupon is removed
    from a cart item, and it never drops below zero.
    """

    code: String(required=True, max_length=50, unique=True, sanitize=False)
    discount_percentage: Float(required=True, min_value=0.0, max_value=100.0)
    start_date: Date(required=True)
    end_date: Date(required=True)
    max_redemptions: Integer(min_value=1)
    redeem_count: Integer(default=0, min_value=0)
    seller_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": ["End date cannot be before start date"]})

    @classmethod
    def create(cls, code, discount_percentage, start_date, end_date, seller_id, max_redemptions=None):
        now = datetime.now()
        coupon = cls(
            code=code,
            discount_percentage=discount_percentage,
            start_date=start_date,
            end_date=end_date,
            max_redemptions=max_redemptions,
            redeem_count=0,
            seller_id=seller_id,
            created_at=now,
            updated_at=now,
        )
        coupon.raise_(
            CouponCreated(
                coupon_id=coupon.id,
                code=code,
                discount_percentage=discount_percentage,
                seller_id=seller_id,
                created_at=now,
            )
        )
        return coupon

    def is_active_on(self, day: date) -> bool:
        """Whether ``day`` falls inside the inclusive validity window."""
        return self.start_date <= day <= self.end_date

    @property
    def is_capped(self):
        return self.max_redemptions is not None

    def update_details(
        self, code=None, discount_percentage=None, start_date=None, end_date=None, max_redemptions=None
    ):
        with atomic_change(self):
            if code is not None:
                self.code = code
            if discount_percentage is not None:
                self.discount_percentage = discount_percentage
            if start_date is not None:
                self.start_date = start_date
            if end_date is not None:
                self.end_date = end_date
            if max_redemptions is not None:
                self.max_redemptions = max_redemptions

            self.updated_at = datetime.now()

        self.raise_(
            CouponDetailsUpdated(
                coupon_id=self.id,
                code=self.code,
                discount_percentage=self.discount_percentage,
                max_redemptions=self.max_redemptions,
            )
        )

    def redeem(self, product_id, buyer_id):
        self.redeem_count += 1
        self.updated_at = datetime.now()

        self.raise_(
            CouponRedeemed(
                coupon_id=self.id,
                product_id=product_id,
                buyer_id=buyer_id,
                redeem_count=self.redeem_count,
            )
        )

    def reverse_redemption(self, cart_item_id):
        """Give back one redemption. A counter already at zero stays at zero."""
        if self.redeem_count == 0:
            logger.warning(
                "Redeem count already zero, not decremented",
                coupon_id=str(self.id),
                cart_item_id=str(cart_item_id),
            )
        else:
            self.redeem_count -= 1
        self.updated_at = datetime.now()

        self.raise_(
            CouponRedemptionReversed(
                coupon_id=self.id,
                cart_item_id=cart_item_id,
                redeem_count=self.redeem_count,
            )
        )
