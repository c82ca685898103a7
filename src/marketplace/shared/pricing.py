"""Monetary arithmetic for catalogue and cart prices.

Prices are stored as floats on aggregates and converted to ``Decimal`` for every
calculation, so rounding is always two places, half-up.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
_HUNDRED = Decimal(100)


def to_decimal(value) -> Decimal:
    """Convert a stored float (or int/str) amount to ``Decimal`` without binary noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def discount_multiplier(discount_percentage) -> Decimal:
    """Fraction of the price left after the discount, e.g. 10 -> 0.90.

    The discount fraction is rounded to two places before it is subtracted.
    """
    fraction = (to_decimal(discount_percentage) / _HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)
    return Decimal(1) - fraction


def discounted_unit_price(price, discount_percentage) -> Decimal:
    return round_money(to_decimal(price) * discount_multiplier(discount_percentage))


def line_total(unit_price, quantity: int) -> Decimal:
    return round_money(to_decimal(unit_price) * quantity)
