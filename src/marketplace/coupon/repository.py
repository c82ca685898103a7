"""Repositories for the Coupon aggregate and the usage ledger."""

from marketplace.coupon.coupon import Coupon
from marketplace.coupon.usage import CouponUsage
from marketplace.domain import marketplace


@marketplace.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code: str) -> Coupon | None:
        return self._dao.query.filter(code=code).all().first

    def exists_by_code(self, code: str) -> bool:
        return self.find_by_code(code) is not None

    def find_by_seller(self, seller_id) -> list[Coupon]:
        return self._dao.query.filter(seller_id=str(seller_id)).all().items


@marketplace.repository(part_of=CouponUsage)
class CouponUsageRepository:
    def count_by_coupon(self, coupon_id) -> int:
        return self._dao.query.filter(coupon_id=str(coupon_id)).all().total

    def exists_for(self, coupon_id, buyer_id, product_id) -> bool:
        return (
            self._dao.query.filter(
                coupon_id=str(coupon_id),
                buyer_id=str(buyer_id),
                product_id=str(product_id),
            )
            .all()
            .first
            is not None
        )

    def find_by_coupon(self, coupon_id) -> list[CouponUsage]:
        return self._dao.query.filter(coupon_id=str(coupon_id)).all().items
