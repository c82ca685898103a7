"""Shopping Cart aggregate: a buyer's in-progress selection of products.

Each line item keeps the unit price captured when it was added and a cached
line total. When a coupon is applied to the item, the discounted unit price is
cached alongside the coupon reference and the total is recomputed from it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.cart.events import (
    CartAbandoned,
    CartCreated,
    CartItemAdded,
    CartItemCouponApplied,
    CartItemCouponRemoved,
    CartItemRemoved,
    CartQuantityUpdated,
)
from marketplace.coupon.errors import CouponNotAppliedError
from marketplace.domain import marketplace
from marketplace.shared.pricing import line_total


class CartStatus(Enum):
    ACTIVE = "Active"
    ABANDONED = "Abandoned"


@marketplace.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    applied_coupon_id = Identifier()
    discounted_price = Float(min_value=0.0)
    total_price = Float(min_value=0.0)
    added_at = DateTime()

    @property
    def effective_unit_price(self):
        if self.applied_coupon_id is not None and self.discounted_price is not None:
            return self.discounted_price
        return self.unit_price

    def recompute_total(self):
        self.total_price = float(line_total(self.effective_unit_price, self.quantity))


@marketplace.aggregate
class ShoppingCart:
    buyer_id = Identifier(required=True)
    items = HasMany(CartItem)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def discounted_items_must_reference_a_coupon(self):
        for item in self.items:
            if item.discounted_price is not None and item.applied_coupon_id is None:
                raise ValidationError({"items": ["A discounted price requires an applied coupon"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, buyer_id):
        now = datetime.now(UTC)
        cart = cls(
            buyer_id=buyer_id,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartCreated(cart_id=str(cart.id), buyer_id=str(buyer_id)))
        return cart

    @property
    def is_active(self):
        return CartStatus(self.status) == CartStatus.ACTIVE

    def _ensure_active(self, action):
        if not self.is_active:
            raise ValidationError({"status": [f"{action} requires an active cart"]})

    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _get_item(self, item_id):
        item = self.find_item(item_id)
        if item is None:
            raise ObjectNotFoundError({"item_id": [f"Cart item not found with id: {item_id}"]})
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, unit_price):
        """Add a product to the cart (or increase quantity if already present)."""
        self._ensure_active("Adding items")

        existing = self.item_for_product(product_id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            existing.recompute_total()
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                unit_price=unit_price,
                added_at=now,
            )
            item.recompute_total()
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                unit_price=unit_price,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        self._ensure_active("Updating quantities")

        item = self._get_item(item_id)
        previous_quantity = item.quantity
        item.quantity = new_quantity
        item.recompute_total()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                total_price=item.total_price,
            )
        )

    def remove_item(self, item_id):
        self._ensure_active("Removing items")

        item = self._get_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    # -------------------------------------------------------------------
    # Coupon pricing
    # -------------------------------------------------------------------
    def apply_coupon_to_item(self, item_id, coupon_id, discounted_price):
        """Price a line item with a coupon's discounted unit price."""
        self._ensure_active("Applying coupons")

        item = self._get_item(item_id)
        with atomic_change(self):
            item.applied_coupon_id = coupon_id
            item.discounted_price = float(discounted_price)
            item.recompute_total()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemCouponApplied(
                cart_id=str(self.id),
                item_id=str(item.id),
                coupon_id=str(coupon_id),
                discounted_price=item.discounted_price,
                total_price=item.total_price,
            )
        )

    def remove_coupon_from_item(self, item_id, current_unit_price):
        """Drop the item's coupon and reprice it at ``current_unit_price``.

        Returns the id of the coupon that was removed.
        """
        self._ensure_active("Removing coupons")

        item = self._get_item(item_id)
        if item.applied_coupon_id is None:
            raise CouponNotAppliedError({"coupon": ["No coupon applied to this cart item"]})

        coupon_id = item.applied_coupon_id
        with atomic_change(self):
            item.discounted_price = None
            item.applied_coupon_id = None
            item.unit_price = current_unit_price
            item.recompute_total()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemCouponRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                coupon_id=str(coupon_id),
                total_price=item.total_price,
            )
        )
        return coupon_id

    # -------------------------------------------------------------------
    # Cart lifecycle
    # -------------------------------------------------------------------
    def abandon(self):
        self._ensure_active("Abandoning")

        now = datetime.now(UTC)
        self.status = CartStatus.ABANDONED.value
        self.updated_at = now

        self.raise_(CartAbandoned(cart_id=str(self.id), abandoned_at=now))
