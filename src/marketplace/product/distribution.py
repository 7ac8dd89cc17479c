"""Direct product distribution — commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class AddProductDistributor:
    product_id = Identifier(required=True)
    distributor_id = Identifier(required=True)


@marketplace.command(part_of="Product")
class RemoveProductDistributor:
    product_id = Identifier(required=True)
    distributor_id = Identifier(required=True)


@marketplace.command_handler(part_of=Product)
class ManageProductDistributionHandler:
    @handle(AddProductDistributor)
    def add_distributor(self, command):
        current_domain.repository_for(Distributor).get(command.distributor_id)

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.add_distributor(command.distributor_id)
        repo.add(product)

    @handle(RemoveProductDistributor)
    def remove_distributor(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.remove_distributor(command.distributor_id)
        repo.add(product)
