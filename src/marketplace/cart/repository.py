"""Repository for the ShoppingCart aggregate."""

from marketplace.cart.cart import CartStatus, ShoppingCart
from marketplace.domain import marketplace


@marketplace.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_active_by_buyer(self, buyer_id) -> ShoppingCart | None:
        """The buyer's single active cart, if one is open."""
        return self._dao.query.filter(buyer_id=str(buyer_id), status=CartStatus.ACTIVE.value).all().first

    def find_by_item(self, item_id) -> ShoppingCart | None:
        """The active cart holding the given line item."""
        active_carts = self._dao.query.filter(status=CartStatus.ACTIVE.value).all().items
        return next((cart for cart in active_carts if cart.find_item(item_id) is not None), None)
