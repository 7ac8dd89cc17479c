"""Variant management — command and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class AddVariant:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)
    options_text = String(max_length=255)
    sku = String(max_length=50)


@marketplace.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        variant = product.add_variant(
            price=command.price,
            options_text=command.options_text,
            sku=command.sku,
        )
        repo.add(product)
        return str(variant.id)
