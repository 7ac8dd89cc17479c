"""Distributor aggregate — an enterprise through which products reach shoppers."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String, Text

from marketplace.distributor.events import DistributorRegistered
from marketplace.domain import marketplace


@marketplace.aggregate
class Distributor:
    name = String(required=True, max_length=255)
    description = Text()
    city = String(max_length=100)
    is_active = Boolean(default=True)
    registered_at = DateTime()

    @classmethod
    def register(cls, name, description=None, city=None):
        now = datetime.now(UTC)
        distributor = cls(
            name=name,
            description=description,
            city=city,
            is_active=True,
            registered_at=now,
        )
        distributor.raise_(
            DistributorRegistered(
                distributor_id=str(distributor.id),
                name=name,
                city=city,
                registered_at=now,
            )
        )
        return distributor
