"""Add to cart — command and handler.

The handler resolves the shopper's selection into a ``Distribution`` and lets
the Order decide. Nothing is written unless the order accepts the item, so a
rejected request leaves the order, its line items and the session unchanged.
"""

from protean import handle
from protean.fields import Boolean, Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.domain import logger, marketplace
from marketplace.order.admission import CartAdmissionError, Distribution
from marketplace.order.order import Order
from marketplace.order_cycle.order_cycle import OrderCycle
from marketplace.product.product import Product
from marketplace.shopper.session import ShopperSession


@marketplace.command(part_of="Order")
class AddToCart:
    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant_id = Identifier()  # Master variant when omitted
    quantity = Integer(required=True, min_value=1)
    max_quantity = Integer(min_value=1)
    order_cycles_enabled = Boolean(default=False)


def distribution_for(session, order_cycles_enabled):
    """Load the distributor and order cycle a session has selected."""
    distributor = None
    if session.distributor_id:
        distributor = current_domain.repository_for(Distributor).get(session.distributor_id)

    order_cycle = None
    if session.order_cycle_id:
        order_cycle = current_domain.repository_for(OrderCycle).get(session.order_cycle_id)

    return Distribution(
        distributor=distributor,
        order_cycle=order_cycle,
        order_cycles_enabled=bool(order_cycles_enabled),
    )


def current_order_for(session):
    """The session's cart in progress, or ``None`` before its first item."""
    if not session.order_id:
        return None
    return current_domain.repository_for(Order).get(session.order_id)


@marketplace.command_handler(part_of=Order)
class AddToCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        session_repo = current_domain.repository_for(ShopperSession)
        session = session_repo.get(command.session_id)
        product = current_domain.repository_for(Product).get(command.product_id)
        distribution = distribution_for(session, command.order_cycles_enabled)

        order = current_order_for(session)
        if order is None:
            order = Order.create(session_id=str(session.id))
        try:
            item = order.add_line_item(
                product,
                command.quantity,
                distribution,
                variant_id=command.variant_id,
                max_quantity=command.max_quantity,
            )
        except CartAdmissionError as exc:
            logger.info(
                "add_to_cart_rejected",
                session_id=command.session_id,
                product_id=command.product_id,
                code=exc.code,
            )
            raise

        current_domain.repository_for(Order).add(order)
        if session.order_id is None:
            session.attach_order(order.id)
            session_repo.add(session)

        logger.info(
            "add_to_cart_accepted",
            session_id=command.session_id,
            order_id=str(order.id),
            variant_id=str(item.variant_id),
            quantity=item.quantity,
            max_quantity=item.max_quantity,
        )
        return str(order.id)
