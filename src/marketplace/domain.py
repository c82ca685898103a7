"""Marketplace domain: catalogue, buyer/seller accounts, shopping carts and coupons.

Coupon application mutates a product, a cart, the usage ledger and the coupon
itself, so all of them live in one domain and share one unit of work per command.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging(log_file_prefix="marketplace")

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
