"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="ShoppingCart")
class CartCreated:
    """A buyer opened a new active cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    buyer_id = Identifier(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_price = Float(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemCouponApplied:
    """A cart item was repriced with a coupon's discounted unit price."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    coupon_id = Identifier(required=True)
    discounted_price = Float(required=True)
    total_price = Float(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemCouponRemoved:
    """A cart item's coupon was removed and the item repriced at the product price."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    coupon_id = Identifier(required=True)
    total_price = Float(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartAbandoned:
    """The cart was abandoned by the buyer."""

    __version__ = 1

    cart_id = Identifier(required=True)
    abandoned_at = DateTime(required=True)
