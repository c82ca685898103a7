"""Product listing: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.identity.user import User


@marketplace.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.01)
    seller_id: Identifier(required=True)
    description: Text()
    category_id: Identifier()
    minimum_order_quantity: Integer(min_value=1)


@marketplace.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.01)
    minimum_order_quantity: Integer(min_value=1)


@marketplace.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        seller = current_domain.repository_for(User).get_seller(command.seller_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            seller_id=seller.id,
            description=command.description,
            category_id=command.category_id,
            minimum_order_quantity=command.minimum_order_quantity,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            minimum_order_quantity=command.minimum_order_quantity,
        )
        repo.add(product)
