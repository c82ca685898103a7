"""Product aggregate: a seller's listing with a base price and at most one applied coupon."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.shared.pricing import round_money


@marketplace.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.01)
    seller_id: Identifier(required=True)
    category_id: Identifier()
    minimum_order_quantity: Integer(default=1, min_value=1)
    coupon_id: Identifier()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def price_must_have_two_decimal_places(self):
        if self.price is not None and float(round_money(self.price)) != self.price:
            raise ValidationError({"price": ["Price cannot have more than two decimal places"]})

    @classmethod
    def create(cls, name, price, seller_id, description=None, category_id=None, minimum_order_quantity=None):
        from marketplace.catalogue.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            seller_id=seller_id,
            category_id=category_id,
            minimum_order_quantity=minimum_order_quantity or 1,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                seller_id=seller_id,
                name=name,
                price=price,
                created_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, minimum_order_quantity=None):
        from marketplace.catalogue.events import ProductDetailsUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if minimum_order_quantity is not None:
            self.minimum_order_quantity = minimum_order_quantity

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
            )
        )

    def apply_coupon(self, coupon_id):
        """Attach a coupon, replacing whichever coupon was applied before."""
        from marketplace.catalogue.events import ProductCouponApplied

        previous_coupon_id = self.coupon_id
        self.coupon_id = coupon_id
        self.updated_at = datetime.now()

        self.raise_(
            ProductCouponApplied(
                product_id=self.id,
                coupon_id=coupon_id,
                previous_coupon_id=previous_coupon_id,
            )
        )

    def remove_coupon(self):
        from marketplace.catalogue.events import ProductCouponRemoved
        from marketplace.coupon.errors import CouponNotAppliedError

        if self.coupon_id is None:
            raise CouponNotAppliedError({"coupon": ["No coupon is applied to this product"]})

        coupon_id = self.coupon_id
        self.coupon_id = None
        self.updated_at = datetime.now()

        self.raise_(
            ProductCouponRemoved(
                product_id=self.id,
                coupon_id=coupon_id,
            )
        )
