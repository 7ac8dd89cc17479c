"""Domain events for the OrderCycle aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="OrderCycle")
class OrderCycleCreated:
    """A new order cycle (offer window) was scheduled."""

    __version__ = 1

    order_cycle_id = Identifier(required=True)
    name = String(required=True)
    orders_open_at = DateTime()
    orders_close_at = DateTime()


@marketplace.event(part_of="OrderCycle")
class OrderCycleDistributionAdded:
    """A distributor was given variants to offer in the order cycle."""

    __version__ = 1

    order_cycle_id = Identifier(required=True)
    distributor_id = Identifier(required=True)
    variant_ids = Text(required=True)  # JSON: full list of variant ids now offered by the distributor
