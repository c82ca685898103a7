"""Domain events for the Product and Category aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """A seller listed a new product."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductDetailsUpdated:
    """Name, description, price or minimum order quantity changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)


@marketplace.event(part_of="Product")
class ProductCouponApplied:
    """A coupon was attached to the product."""

    __version__ = 1

    product_id = Identifier(required=True)
    coupon_id = Identifier(required=True)
    previous_coupon_id = Identifier()


@marketplace.event(part_of="Product")
class ProductCouponRemoved:
    """The product's coupon reference was cleared."""

    __version__ = 1

    product_id = Identifier(required=True)
    coupon_id = Identifier(required=True)


@marketplace.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    parent_category_id = Identifier()
    level = Integer(required=True)


@marketplace.event(part_of="Category")
class CategoryDetailsUpdated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    description = Text()


@marketplace.event(part_of="Category")
class CategoryMoved:
    """A category was re-parented or detached to become a root."""

    __version__ = 1

    category_id = Identifier(required=True)
    parent_category_id = Identifier()
    level = Integer(required=True)
