"""Read-only view of a coupon handed back to callers."""

from dataclasses import asdict, dataclass
from datetime import date


@dataclass(frozen=True)
class CouponSnapshot:
    """Coupon state as seen by the presentation layer."""

    id: str
    code: str
    discount_percentage: float
    start_date: date
    end_date: date
    max_redemptions: int | None
    redeem_count: int
    seller_id: str

    @classmethod
    def from_coupon(cls, coupon):
        return cls(
            id=str(coupon.id),
            code=coupon.code,
            discount_percentage=coupon.discount_percentage,
            start_date=coupon.start_date,
            end_date=coupon.end_date,
            max_redemptions=coupon.max_redemptions,
            redeem_count=coupon.redeem_count,
            seller_id=str(coupon.seller_id),
        )

    def to_dict(self):
        return asdict(self)
