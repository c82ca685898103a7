"""Coupon failure kinds.

Each kind extends the Protean exception that generic handlers already catch,
so callers can handle either the precise kind or the broad family.
"""

from protean.exceptions import InvalidOperationError, ProteanException, ValidationError


class CouponCodeConflictError(ValidationError):
    """A coupon with the same code already exists."""


class CouponExpiredError(ValidationError):
    """Today falls outside the coupon's validity window."""


class CouponLimitReachedError(ValidationError):
    """The coupon has been redeemed as many times as it allows."""


class CouponAlreadyUsedError(ValidationError):
    """The buyer already redeemed this coupon for this product."""


class CouponAlreadyAppliedError(ValidationError):
    """The coupon is already the product's applied coupon."""


class CouponNotAppliedError(InvalidOperationError):
    """There is no coupon to remove."""


class CouponPersistenceError(ProteanException):
    """Storing or deleting a coupon failed in the persistence layer."""
