"""Domain events for the ShopperSession aggregate."""

from protean.fields import DateTime, Identifier

from marketplace.domain import marketplace


@marketplace.event(part_of="ShopperSession")
class ShoppingStarted:
    """A shopper started browsing the marketplace."""

    __version__ = 1

    session_id = Identifier(required=True)
    started_at = DateTime(required=True)


@marketplace.event(part_of="ShopperSession")
class DistributionSelected:
    """The shopper chose a distributor and, optionally, an order cycle to shop with."""

    __version__ = 1

    session_id = Identifier(required=True)
    distributor_id = Identifier()
    order_cycle_id = Identifier()
