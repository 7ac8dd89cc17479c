"""OrderCycle aggregate — a time-boxed window in which distributors offer variants.

Each outgoing exchange links one distributor to the variants it offers in the
cycle. When order cycles are enabled, a product is available from a
distributor only through such an exchange.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.order_cycle.events import OrderCycleCreated, OrderCycleDistributionAdded


@marketplace.entity(part_of="OrderCycle")
class OutgoingExchange:
    distributor_id = Identifier(required=True)
    variant_ids = Text(default="[]")  # JSON: list of variant ids

    def offered_variant_ids(self):
        return set(json.loads(self.variant_ids)) if self.variant_ids else set()


@marketplace.aggregate
class OrderCycle:
    name = String(required=True, max_length=255)
    orders_open_at = DateTime()
    orders_close_at = DateTime()
    exchanges = HasMany(OutgoingExchange)
    created_at = DateTime()

    @invariant.post
    def window_must_open_before_it_closes(self):
        if self.orders_open_at and self.orders_close_at and self.orders_open_at >= self.orders_close_at:
            raise ValidationError({"orders_close_at": ["Orders must close after they open"]})

    @classmethod
    def create(cls, name, orders_open_at=None, orders_close_at=None):
        order_cycle = cls(
            name=name,
            orders_open_at=orders_open_at,
            orders_close_at=orders_close_at,
            created_at=datetime.now(UTC),
        )
        order_cycle.raise_(
            OrderCycleCreated(
                order_cycle_id=str(order_cycle.id),
                name=name,
                orders_open_at=orders_open_at,
                orders_close_at=orders_close_at,
            )
        )
        return order_cycle

    def is_open(self, at=None):
        """Whether orders are accepted at ``at`` (now by default). Unbounded ends are open."""
        at = at or datetime.now(UTC)
        if self.orders_open_at and at < _aware(self.orders_open_at):
            return False
        if self.orders_close_at and at >= _aware(self.orders_close_at):
            return False
        return True

    def _exchange_for(self, distributor_id):
        return next((e for e in self.exchanges if str(e.distributor_id) == str(distributor_id)), None)

    def distributor_ids(self):
        return [str(e.distributor_id) for e in self.exchanges]

    def has_distributor(self, distributor_id):
        return distributor_id is not None and self._exchange_for(distributor_id) is not None

    def distributes(self, distributor_id, variant_ids):
        """Whether the distributor offers any of ``variant_ids`` in this cycle."""
        exchange = self._exchange_for(distributor_id) if distributor_id is not None else None
        if exchange is None:
            return False
        return bool(exchange.offered_variant_ids() & {str(v) for v in variant_ids})

    def channels_for(self, variant_ids):
        """Distributor ids offering any of ``variant_ids`` in this cycle."""
        wanted = {str(v) for v in variant_ids}
        return [str(e.distributor_id) for e in self.exchanges if e.offered_variant_ids() & wanted]

    def distribute(self, distributor_id, variant_ids):
        """Offer variants through a distributor; merges with what it already offers."""
        if not variant_ids:
            raise ValidationError({"variant_ids": ["At least one variant must be distributed"]})

        exchange = self._exchange_for(distributor_id)
        if exchange is None:
            offered = [str(v) for v in dict.fromkeys(variant_ids)]
            exchange = OutgoingExchange(distributor_id=distributor_id, variant_ids=json.dumps(offered))
            self.add_exchanges(exchange)
        else:
            offered = json.loads(exchange.variant_ids) if exchange.variant_ids else []
            offered.extend(str(v) for v in variant_ids if str(v) not in offered)
            exchange.variant_ids = json.dumps(offered)

        self.raise_(
            OrderCycleDistributionAdded(
                order_cycle_id=str(self.id),
                distributor_id=str(distributor_id),
                variant_ids=json.dumps(offered),
            )
        )


def _aware(moment):
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)
