"""ShopperSession aggregate — the shopper's distribution selection and cart in progress.

The selection can change at any time; the cart's own distributor and order
cycle cannot (see Order). Selecting a different distributor while an order
is committed is allowed, but every later add-to-cart is then rejected.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier

from marketplace.domain import marketplace
from marketplace.shopper.events import DistributionSelected, ShoppingStarted


@marketplace.aggregate
class ShopperSession:
    distributor_id = Identifier()
    order_cycle_id = Identifier()
    order_id = Identifier()
    started_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def start(cls):
        now = datetime.now(UTC)
        session = cls(started_at=now, updated_at=now)
        session.raise_(ShoppingStarted(session_id=str(session.id), started_at=now))
        return session

    def select_distribution(self, distributor=None, order_cycle=None):
        """Select a distributor and/or order cycle; both must agree when given together."""
        if order_cycle is not None:
            if not order_cycle.is_open():
                raise ValidationError({"order_cycle_id": [f"Orders are closed for {order_cycle.name}"]})
            if distributor is not None and not order_cycle.has_distributor(distributor.id):
                raise ValidationError(
                    {"order_cycle_id": [f"{distributor.name} is not distributing in {order_cycle.name}"]}
                )

        self.distributor_id = str(distributor.id) if distributor is not None else None
        self.order_cycle_id = str(order_cycle.id) if order_cycle is not None else None
        self.updated_at = datetime.now(UTC)

        self.raise_(
            DistributionSelected(
                session_id=str(self.id),
                distributor_id=self.distributor_id,
                order_cycle_id=self.order_cycle_id,
            )
        )

    def attach_order(self, order_id):
        if self.order_id is not None and str(self.order_id) != str(order_id):
            raise ValidationError({"order_id": ["Session already has an order in progress"]})
        self.order_id = str(order_id)
        self.updated_at = datetime.now(UTC)
