"""Product creation — command and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, String, Text
from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    sku = String(max_length=50)
    group_buy = Boolean(default=False)
    distributor_ids = Text()  # JSON: list of distributor ids selling the product directly


@marketplace.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        distributor_ids = json.loads(command.distributor_ids) if command.distributor_ids else []

        # Fails with ObjectNotFoundError for unknown distributors
        distributor_repo = current_domain.repository_for(Distributor)
        for distributor_id in distributor_ids:
            distributor_repo.get(distributor_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            group_buy=command.group_buy,
            sku=command.sku,
            currency=command.currency or "USD",
            distributor_ids=distributor_ids,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
