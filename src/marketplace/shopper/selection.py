"""Shopper session — commands and handler for starting and choosing distribution."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.domain import logger, marketplace
from marketplace.order_cycle.order_cycle import OrderCycle
from marketplace.shopper.session import ShopperSession


@marketplace.command(part_of="ShopperSession")
class StartShopping:
    """Start a session, optionally preselecting a distributor (e.g. from its shopfront link)."""

    distributor_id = Identifier()
    order_cycle_id = Identifier()


@marketplace.command(part_of="ShopperSession")
class SelectDistribution:
    session_id = Identifier(required=True)
    distributor_id = Identifier()
    order_cycle_id = Identifier()


@marketplace.command_handler(part_of=ShopperSession)
class ShopperSessionHandler:
    @handle(StartShopping)
    def start_shopping(self, command):
        session = ShopperSession.start()
        if command.distributor_id or command.order_cycle_id:
            distributor, order_cycle = _load_selection(command)
            session.select_distribution(distributor=distributor, order_cycle=order_cycle)

        current_domain.repository_for(ShopperSession).add(session)
        return str(session.id)

    @handle(SelectDistribution)
    def select_distribution(self, command):
        repo = current_domain.repository_for(ShopperSession)
        session = repo.get(command.session_id)

        distributor, order_cycle = _load_selection(command)
        session.select_distribution(distributor=distributor, order_cycle=order_cycle)
        repo.add(session)

        logger.info(
            "distribution_selected",
            session_id=command.session_id,
            distributor_id=session.distributor_id,
            order_cycle_id=session.order_cycle_id,
        )


def _load_selection(command):
    distributor = None
    if command.distributor_id:
        distributor = current_domain.repository_for(Distributor).get(command.distributor_id)

    order_cycle = None
    if command.order_cycle_id:
        order_cycle = current_domain.repository_for(OrderCycle).get(command.order_cycle_id)

    return distributor, order_cycle
