"""Read-side coupon lookups returning snapshots."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.coupon.coupon import Coupon
from marketplace.coupon.snapshot import CouponSnapshot
from marketplace.coupon.validation import is_coupon_valid
from marketplace.identity.user import User

logger = structlog.get_logger(__name__)

__all__ = ["get_coupon", "get_coupon_by_code", "list_seller_coupons", "is_coupon_valid"]


def get_coupon(coupon_id) -> CouponSnapshot:
    coupon = current_domain.repository_for(Coupon).get(coupon_id)
    logger.debug("Coupon retrieved", coupon_id=str(coupon_id))
    return CouponSnapshot.from_coupon(coupon)


def get_coupon_by_code(code: str) -> CouponSnapshot:
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None:
        raise ObjectNotFoundError({"coupon": [f"Coupon not found with code: {code}"]})

    logger.debug("Coupon retrieved", code=code)
    return CouponSnapshot.from_coupon(coupon)


def list_seller_coupons(seller_id) -> list[CouponSnapshot]:
    """All coupons issued by a seller. Raises ``ObjectNotFoundError`` for unknown sellers."""
    seller = current_domain.repository_for(User).get_seller(seller_id)
    coupons = current_domain.repository_for(Coupon).find_by_seller(seller.id)
    return [CouponSnapshot.from_coupon(coupon) for coupon in coupons]
