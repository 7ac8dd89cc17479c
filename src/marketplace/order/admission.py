"""Cart admission rules.

An order is shopped from exactly one distributor (and, when order cycles are
enabled, one order cycle). The rules here decide whether a product may enter
a cart given the shopper's current selection, and how the requested
quantities are stored on the line item.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from protean.exceptions import ValidationError

if TYPE_CHECKING:
    from marketplace.distributor.distributor import Distributor
    from marketplace.order_cycle.order_cycle import OrderCycle
    from marketplace.product.product import Product

ORDER_CYCLE_REQUIRED = "Please choose an order cycle for this order."
DISTRIBUTOR_REQUIRED = "That product is not available from the chosen distributor or order cycle."
DISTRIBUTION_MISMATCH = "Please complete your order at {distributor_name} before shopping with another distributor."


class CartAdmissionError(ValidationError):
    """An add-to-cart request the shopper can resolve by choosing differently."""

    code = "cart_admission"

    def __init__(self, message):
        self.message = message
        super().__init__({"cart": [message]})


class OrderCycleRequired(CartAdmissionError):
    code = "order_cycle_required"

    def __init__(self):
        super().__init__(ORDER_CYCLE_REQUIRED)


class DistributorRequired(CartAdmissionError):
    code = "distributor_required"

    def __init__(self):
        super().__init__(DISTRIBUTOR_REQUIRED)


class DistributionMismatch(CartAdmissionError):
    code = "distribution_mismatch"

    def __init__(self, distributor_name):
        self.distributor_name = distributor_name
        super().__init__(DISTRIBUTION_MISMATCH.format(distributor_name=distributor_name))


@dataclass(frozen=True)
class Distribution:
    """The channel a shopper is buying through: distributor, order cycle and mode."""

    distributor: "Distributor | None" = None
    order_cycle: "OrderCycle | None" = None
    order_cycles_enabled: bool = False

    @property
    def distributor_id(self):
        return str(self.distributor.id) if self.distributor is not None else None

    @property
    def order_cycle_id(self):
        return str(self.order_cycle.id) if self.order_cycle is not None else None

    def offers(self, product: "Product") -> bool:
        if self.distributor is None:
            return False
        if self.order_cycles_enabled:
            return self.order_cycle is not None and self.order_cycle.distributes(
                self.distributor_id, product.variant_ids()
            )
        return product.is_distributed_by(self.distributor_id)


def check_admission(order, product, distribution: Distribution) -> None:
    """Raise the first rule the request breaks; return quietly when it may proceed."""
    if distribution.order_cycles_enabled and distribution.order_cycle is None:
        raise OrderCycleRequired()

    if distribution.distributor is None:
        raise DistributorRequired()

    if order.is_committed:
        if distribution.distributor_id != str(order.distributor_id):
            raise DistributionMismatch(order.distributor_name)
        if distribution.order_cycles_enabled and distribution.order_cycle_id != _str_or_none(order.order_cycle_id):
            raise DistributionMismatch(order.distributor_name)
        if not distribution.offers(product):
            raise DistributionMismatch(order.distributor_name)
    elif not distribution.offers(product):
        raise DistributorRequired()


def line_item_quantities(group_buy, quantity, max_quantity=None):
    """Return ``(quantity, max_quantity)`` as stored on a line item.

    Only group buys keep the requested ceiling, and the ceiling never drops
    below the quantity.
    """
    if not group_buy or max_quantity is None:
        max_quantity = quantity
    return quantity, max(max_quantity, quantity)


def _str_or_none(value):
    return str(value) if value is not None else None
