"""Order cycle management — commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.domain import marketplace
from marketplace.order_cycle.order_cycle import OrderCycle
from marketplace.product.product import Product


@marketplace.command(part_of="OrderCycle")
class CreateOrderCycle:
    name = String(required=True, max_length=255)
    orders_open_at = DateTime()
    orders_close_at = DateTime()


@marketplace.command(part_of="OrderCycle")
class AddOrderCycleDistribution:
    """Offer variants through a distributor in an order cycle.

    ``variant_ids`` defaults to every variant of ``product_ids`` when omitted.
    """

    order_cycle_id = Identifier(required=True)
    distributor_id = Identifier(required=True)
    variant_ids = Text()  # JSON: list of variant ids
    product_ids = Text()  # JSON: list of product ids whose variants are all offered


@marketplace.command_handler(part_of=OrderCycle)
class ManageOrderCycleHandler:
    @handle(CreateOrderCycle)
    def create_order_cycle(self, command):
        order_cycle = OrderCycle.create(
            name=command.name,
            orders_open_at=command.orders_open_at,
            orders_close_at=command.orders_close_at,
        )
        current_domain.repository_for(OrderCycle).add(order_cycle)
        return str(order_cycle.id)

    @handle(AddOrderCycleDistribution)
    def add_distribution(self, command):
        current_domain.repository_for(Distributor).get(command.distributor_id)

        variant_ids = json.loads(command.variant_ids) if command.variant_ids else []
        product_ids = json.loads(command.product_ids) if command.product_ids else []
        product_repo = current_domain.repository_for(Product)
        for product_id in product_ids:
            variant_ids.extend(product_repo.get(product_id).variant_ids())

        if not variant_ids:
            raise ValidationError({"variant_ids": ["Provide variant_ids or product_ids to distribute"]})

        repo = current_domain.repository_for(OrderCycle)
        order_cycle = repo.get(command.order_cycle_id)
        order_cycle.distribute(command.distributor_id, variant_ids)
        repo.add(order_cycle)
