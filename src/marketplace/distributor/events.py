"""Domain events for the Distributor aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Distributor")
class DistributorRegistered:
    """A new enterprise started distributing through the marketplace."""

    __version__ = 1

    distributor_id = Identifier(required=True)
    name = String(required=True)
    city = String()
    registered_at = DateTime(required=True)
