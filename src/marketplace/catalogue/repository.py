"""Repositories for the Product and Category aggregates."""

from marketplace.catalogue.category import Category
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace


@marketplace.repository(part_of=Product)
class ProductRepository:
    def find_by_coupon(self, coupon_id) -> list[Product]:
        """Products that currently carry the given coupon."""
        return self._dao.query.filter(coupon_id=str(coupon_id)).all().items


@marketplace.repository(part_of=Category)
class CategoryRepository:
    def find_all(self) -> list[Category]:
        return self._dao.query.all().items

    def find_roots(self) -> list[Category]:
        return [category for category in self.find_all() if category.parent_category_id is None]

    def find_children(self, parent_category_id) -> list[Category]:
        return self._dao.query.filter(parent_category_id=str(parent_category_id)).all().items

    def all_names(self) -> list[str]:
        return [category.name for category in self.find_all()]
