"""Coupon lifecycle: create, update and delete commands with their handler.

Infrastructure failures while storing or deleting a coupon are logged and
surfaced as ``CouponPersistenceError``; domain errors pass through untouched.
"""

from datetime import date

import structlog
from protean import handle
from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.coupon.coupon import Coupon
from marketplace.coupon.errors import CouponCodeConflictError, CouponPersistenceError
from marketplace.coupon.snapshot import CouponSnapshot
from marketplace.coupon.usage import CouponUsage
from marketplace.domain import marketplace
from marketplace.identity.user import User

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Coupon")
class CreateCoupon:
    """Issue a new coupon on behalf of a seller."""

    code: String(required=True, max_length=50, sanitize=False)
    discount_percentage: Float(required=True, min_value=0.0, max_value=100.0)
    start_date: String(required=True, max_length=10)
    end_date: String(required=True, max_length=10)
    max_redemptions: Integer(min_value=1)
    seller_id: Identifier(required=True)


@marketplace.command(part_of="Coupon")
class UpdateCoupon:
    coupon_id: Identifier(required=True)
    code: String(max_length=50, sanitize=False)
    discount_percentage: Float(min_value=0.0, max_value=100.0)
    start_date: String(max_length=10)
    end_date: String(max_length=10)
    max_redemptions: Integer(min_value=1)


@marketplace.command(part_of="Coupon")
class DeleteCoupon:
    coupon_id: Identifier(required=True)


@marketplace.command(part_of="Coupon")
class DeleteCouponByCode:
    code: String(required=True, max_length=50, sanitize=False)


def _parse_date(field, value):
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError({field: [f"Invalid date: {value}"]}) from None


def _coupon_by_code(code):
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None:
        raise ObjectNotFoundError({"coupon": [f"Coupon not found with code: {code}"]})
    return coupon


@marketplace.command_handler(part_of=Coupon)
class ManageCouponHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.exists_by_code(command.code):
            logger.warning("Coupon creation rejected, code already in use", code=command.code)
            raise CouponCodeConflictError({"code": ["Coupon code already in use"]})

        seller = current_domain.repository_for(User).get_seller(command.seller_id)

        coupon = Coupon.create(
            code=command.code,
            discount_percentage=command.discount_percentage,
            start_date=_parse_date("start_date", command.start_date),
            end_date=_parse_date("end_date", command.end_date),
            max_redemptions=command.max_redemptions,
            seller_id=seller.id,
        )
        self._store(repo, coupon, "Failed to create coupon")

        logger.info("Coupon created", coupon_id=str(coupon.id), code=coupon.code)
        return CouponSnapshot.from_coupon(coupon)

    @handle(UpdateCoupon)
    def update_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)

        if command.code and command.code != coupon.code and repo.exists_by_code(command.code):
            raise CouponCodeConflictError({"code": ["Coupon code already in use"]})

        coupon.update_details(
            code=command.code,
            discount_percentage=command.discount_percentage,
            start_date=_parse_date("start_date", command.start_date),
            end_date=_parse_date("end_date", command.end_date),
            max_redemptions=command.max_redemptions,
        )
        self._store(repo, coupon, "Failed to update coupon")

        logger.info("Coupon updated", coupon_id=str(coupon.id), code=coupon.code)
        return CouponSnapshot.from_coupon(coupon)

    @handle(DeleteCoupon)
    def delete_coupon(self, command):
        coupon = current_domain.repository_for(Coupon).get(command.coupon_id)
        self._delete(coupon)

    @handle(DeleteCouponByCode)
    def delete_coupon_by_code(self, command):
        self._delete(_coupon_by_code(command.code))

    def _store(self, repo, coupon, failure_message):
        """Add the coupon and commit straight away, so storage failures surface here."""
        try:
            with UnitOfWork():
                repo.add(coupon)
        except ValidationError:
            raise
        except Exception as exc:
            logger.error("Coupon persistence failed", code=coupon.code, exc_info=True)
            raise CouponPersistenceError({"coupon": [failure_message]}) from exc

    def _delete(self, coupon):
        """Detach the coupon from its products, drop its ledger entries, then delete it.

        All steps share one unit of work committed inside the guarded block, so
        either every step is stored or none is.
        """
        product_repo = current_domain.repository_for(Product)
        usage_repo = current_domain.repository_for(CouponUsage)

        products = product_repo.find_by_coupon(coupon.id)
        try:
            with UnitOfWork():
                for product in products:
                    product.remove_coupon()
                    product_repo.add(product)

                for usage in usage_repo.find_by_coupon(coupon.id):
                    usage_repo._dao.delete(usage)
                current_domain.repository_for(Coupon)._dao.delete(coupon)
        except Exception as exc:
            logger.error("Coupon deletion failed", coupon_id=str(coupon.id), exc_info=True)
            raise CouponPersistenceError({"coupon": ["Failed to delete coupon"]}) from exc

        logger.info(
            "Coupon deleted",
            coupon_id=str(coupon.id),
            code=coupon.code,
            detached_products=len(products),
        )
