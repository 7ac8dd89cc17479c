"""Application tests for starting a shopping session and choosing a distribution."""

import pytest
from marketplace.distributor.registration import RegisterDistributor
from marketplace.order_cycle.management import AddOrderCycleDistribution, CreateOrderCycle
from marketplace.product.creation import CreateProduct
from marketplace.shopper.selection import SelectDistribution, StartShopping
from marketplace.shopper.session import ShopperSession
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


@pytest.fixture()
def distributor_id():
    return current_domain.process(RegisterDistributor(name="Green Valley Co-op"), asynchronous=False)


@pytest.fixture()
def order_cycle_id(distributor_id):
    product_id = current_domain.process(CreateProduct(name="Eggs", price=6.0), asynchronous=False)
    cycle_id = current_domain.process(CreateOrderCycle(name="Weekly Box"), asynchronous=False)
    current_domain.process(
        AddOrderCycleDistribution(
            order_cycle_id=cycle_id,
            distributor_id=distributor_id,
            product_ids=f'["{product_id}"]',
        ),
        asynchronous=False,
    )
    return cycle_id


def _session(session_id):
    return current_domain.repository_for(ShopperSession).get(session_id)


class TestStartShopping:
    def test_starts_without_selection(self):
        session_id = current_domain.process(StartShopping(), asynchronous=False)

        session = _session(session_id)
        assert session.distributor_id is None
        assert session.order_id is None

    def test_preselects_distributor(self, distributor_id):
        session_id = current_domain.process(StartShopping(distributor_id=distributor_id), asynchronous=False)

        assert _session(session_id).distributor_id == distributor_id

    def test_unknown_distributor(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(StartShopping(distributor_id="dist-missing"), asynchronous=False)


class TestSelectDistribution:
    def test_select_distributor_and_cycle(self, distributor_id, order_cycle_id):
        session_id = current_domain.process(StartShopping(), asynchronous=False)

        current_domain.process(
            SelectDistribution(session_id=session_id, distributor_id=distributor_id, order_cycle_id=order_cycle_id),
            asynchronous=False,
        )

        session = _session(session_id)
        assert session.distributor_id == distributor_id
        assert session.order_cycle_id == order_cycle_id

    def test_cycle_without_distributor_is_rejected(self, order_cycle_id):
        other_id = current_domain.process(RegisterDistributor(name="Riverside Hub"), asynchronous=False)
        session_id = current_domain.process(StartShopping(), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(
                SelectDistribution(session_id=session_id, distributor_id=other_id, order_cycle_id=order_cycle_id),
                asynchronous=False,
            )

        assert _session(session_id).distributor_id is None

    def test_unknown_session(self, distributor_id):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                SelectDistribution(session_id="sess-missing", distributor_id=distributor_id),
                asynchronous=False,
            )
