"""Domain events for the Order aggregate."""

from protean.fields import Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderDistributionCommitted:
    """The first item entered the cart; the order is now bound to this distribution."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = Identifier()
    distributor_id = Identifier(required=True)
    distributor_name = String(required=True)
    order_cycle_id = Identifier()


@marketplace.event(part_of="Order")
class LineItemAdded:
    """A variant was added to the cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    line_item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    title = String(required=True)
    quantity = Integer(required=True)
    max_quantity = Integer(required=True)
    unit_price = Float(required=True)
    currency = String(required=True)


@marketplace.event(part_of="Order")
class LineItemUpdated:
    """A variant already in the cart was added again with new quantities."""

    __version__ = 1

    order_id = Identifier(required=True)
    line_item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    quantity = Integer(required=True)
    max_quantity = Integer(required=True)
