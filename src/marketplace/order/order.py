"""Order aggregate — the shopper's cart, bound to a single distribution.

State Machine:
    EMPTY → COMMITTED on the first successful add; distributor and order
    cycle are stamped then and never change. Every later add is checked
    against them (see ``marketplace.order.admission``).
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.order.admission import Distribution, check_admission, line_item_quantities
from marketplace.order.events import LineItemAdded, LineItemUpdated, OrderDistributionCommitted


class OrderState(Enum):
    EMPTY = "Empty"
    COMMITTED = "Committed"


@marketplace.entity(part_of="Order")
class LineItem:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    max_quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def total(self):
        return round(self.unit_price * self.quantity, 2)


@marketplace.aggregate
class Order:
    session_id = Identifier()
    state = String(choices=OrderState, default=OrderState.EMPTY.value)
    distributor_id = Identifier()
    distributor_name = String(max_length=255)
    order_cycle_id = Identifier()
    line_items = HasMany(LineItem)
    currency = String(max_length=3, default="USD")
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def max_quantity_never_below_quantity(self):
        for item in self.line_items:
            if item.max_quantity < item.quantity:
                raise ValidationError({"max_quantity": ["Max quantity cannot be less than quantity"]})

    @invariant.post
    def line_items_require_committed_distribution(self):
        if self.line_items and (self.state != OrderState.COMMITTED.value or not self.distributor_id):
            raise ValidationError({"distributor_id": ["An order with items must have a distributor"]})

    @classmethod
    def create(cls, session_id=None, currency="USD"):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            state=OrderState.EMPTY.value,
            currency=currency,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_committed(self):
        return OrderState(self.state) == OrderState.COMMITTED

    @property
    def item_total(self):
        return round(sum(item.total for item in self.line_items), 2)

    def line_item_for(self, variant_id):
        return next((i for i in self.line_items if str(i.variant_id) == str(variant_id)), None)

    def add_line_item(self, product, quantity, distribution: Distribution, variant_id=None, max_quantity=None):
        """Admit ``product`` into the cart through ``distribution``.

        Raises a ``CartAdmissionError`` without touching the order when the
        shopper's selection cannot supply this cart.
        """
        check_admission(self, product, distribution)
        variant = product.find_variant(variant_id)
        if self.is_committed and variant.currency != self.currency:
            raise ValidationError(
                {"currency": [f"{product.name} is priced in {variant.currency}, this cart is in {self.currency}"]}
            )
        quantity, max_quantity = line_item_quantities(product.group_buy, quantity, max_quantity)

        now = datetime.now(UTC)
        existing = self.line_item_for(variant.id)
        if existing:
            previous_quantity = existing.quantity
            with atomic_change(self):
                existing.quantity = quantity
                existing.max_quantity = max_quantity
                self.updated_at = now

            self.raise_(
                LineItemUpdated(
                    order_id=str(self.id),
                    line_item_id=str(existing.id),
                    previous_quantity=previous_quantity,
                    quantity=quantity,
                    max_quantity=max_quantity,
                )
            )
            return existing

        item = LineItem(
            product_id=str(product.id),
            variant_id=str(variant.id),
            title=_title(product, variant),
            quantity=quantity,
            max_quantity=max_quantity,
            unit_price=variant.price,
        )
        with atomic_change(self):
            if not self.is_committed:
                self._commit(distribution, variant.currency)
            self.add_line_items(item)
            self.updated_at = now

        self.raise_(
            LineItemAdded(
                order_id=str(self.id),
                line_item_id=str(item.id),
                product_id=str(product.id),
                variant_id=str(variant.id),
                title=item.title,
                quantity=quantity,
                max_quantity=max_quantity,
                unit_price=item.unit_price,
                currency=self.currency,
            )
        )
        return item

    def _commit(self, distribution, currency):
        self.state = OrderState.COMMITTED.value
        self.distributor_id = distribution.distributor_id
        self.distributor_name = distribution.distributor.name
        self.order_cycle_id = distribution.order_cycle_id if distribution.order_cycles_enabled else None
        self.currency = currency

        self.raise_(
            OrderDistributionCommitted(
                order_id=str(self.id),
                session_id=str(self.session_id) if self.session_id else None,
                distributor_id=self.distributor_id,
                distributor_name=self.distributor_name,
                order_cycle_id=self.order_cycle_id,
            )
        )


def _title(product, variant):
    return f"{product.name} ({variant.options_text})" if variant.options_text else product.name
