"""Coupon validation rules.

``validate_coupon`` guards the application workflow and raises the first rule
that fails. ``is_coupon_valid`` answers the lighter read-only question used when
displaying carts, and never raises.
"""

from datetime import date

import structlog
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.coupon.coupon import Coupon
from marketplace.coupon.errors import (
    CouponAlreadyAppliedError,
    CouponAlreadyUsedError,
    CouponExpiredError,
    CouponLimitReachedError,
)
from marketplace.coupon.usage import CouponUsage

logger = structlog.get_logger(__name__)


def _limit_reached(coupon: Coupon) -> bool:
    if not coupon.is_capped:
        return False
    usage_count = current_domain.repository_for(CouponUsage).count_by_coupon(coupon.id)
    return usage_count >= coupon.max_redemptions


def validate_coupon(coupon: Coupon, product: Product, buyer, today: date | None = None) -> None:
    """Check whether ``buyer`` may apply ``coupon`` to ``product``.

    Rules are checked in order and the first failure is raised:

    1. today is inside the coupon's validity window (``CouponExpiredError``)
    2. the redemption cap, if any, is not yet reached (``CouponLimitReachedError``)
    3. the buyer has not redeemed the coupon for this product before
       (``CouponAlreadyUsedError``)
    4. the coupon is not already the product's applied coupon
       (``CouponAlreadyAppliedError``)
    """
    today = today or date.today()

    if not coupon.is_active_on(today):
        raise CouponExpiredError({"coupon": ["Coupon has expired or is not yet active"]})

    if _limit_reached(coupon):
        raise CouponLimitReachedError({"coupon": ["Coupon redemption limit has been reached"]})

    usage_repo = current_domain.repository_for(CouponUsage)
    if usage_repo.exists_for(coupon.id, buyer.id, product.id):
        raise CouponAlreadyUsedError({"coupon": ["You have already used this coupon for this product"]})

    if product.coupon_id is not None and str(product.coupon_id) == str(coupon.id):
        raise CouponAlreadyAppliedError({"coupon": ["This coupon is already applied to the product"]})


def is_coupon_valid(coupon_id, product_id, today: date | None = None) -> bool:
    """Whether the coupon is currently usable on the product.

    Checks the validity window, the redemption cap and that the product carries
    the coupon. Any failure, including missing records, yields ``False``.
    """
    today = today or date.today()

    try:
        coupon = current_domain.repository_for(Coupon).get(coupon_id)
        if not coupon.is_active_on(today) or _limit_reached(coupon):
            return False

        product = current_domain.repository_for(Product).get(product_id)
        return product.coupon_id is not None and str(product.coupon_id) == str(coupon.id)
    except Exception as exc:
        logger.debug(
            "Coupon validity check failed",
            coupon_id=str(coupon_id),
            product_id=str(product_id),
            error=str(exc),
        )
        return False
