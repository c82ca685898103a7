"""Marketplace API package."""

from marketplace.api.errors import register_exception_handlers
from marketplace.api.routes import (
    cart_router,
    category_router,
    coupon_router,
    product_router,
    user_router,
)

__all__ = [
    "user_router",
    "product_router",
    "category_router",
    "cart_router",
    "coupon_router",
    "register_exception_handlers",
]
