"""Cart management: commands and handler for opening and abandoning carts."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.domain import marketplace
from marketplace.identity.user import User


@marketplace.command(part_of="ShoppingCart")
class CreateCart:
    """Open a new active shopping cart for a buyer."""

    buyer_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class AbandonCart:
    cart_id = Identifier(required=True)


@marketplace.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        buyer = current_domain.repository_for(User).get_buyer(command.buyer_id)

        repo = current_domain.repository_for(ShoppingCart)
        if repo.find_active_by_buyer(buyer.id) is not None:
            raise ValidationError({"buyer_id": ["Buyer already has an active cart"]})

        cart = ShoppingCart.create(buyer_id=buyer.id)
        repo.add(cart)
        return str(cart.id)

    @handle(AbandonCart)
    def abandon_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.abandon()
        repo.add(cart)
