"""Shared BDD fixtures and step definitions for the storefront."""

import json

import pytest
from marketplace.distributor.registration import RegisterDistributor
from marketplace.product.creation import CreateProduct
from marketplace.shopper.selection import SelectDistribution, StartShopping
from protean import current_domain
from pytest_bdd import given, parsers


# ---------------------------------------------------------------------------
# Scenario state
# ---------------------------------------------------------------------------
@pytest.fixture()
def shop():
    """Distributor and product ids by name, plus the order cycle setting."""
    return {"distributors": {}, "products": {}, "order_cycles_enabled": False}


@pytest.fixture()
def session_id():
    return current_domain.process(StartShopping(), asynchronous=False)


@pytest.fixture()
def error():
    """Container for a captured cart admission error."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a distributor "{name}"'))
def a_distributor(shop, name):
    distributor_id = current_domain.process(RegisterDistributor(name=name), asynchronous=False)
    shop["distributors"][name] = distributor_id


def _create_product(shop, name, price, distributor, group_buy=False):
    product_id = current_domain.process(
        CreateProduct(
            name=name,
            price=price,
            group_buy=group_buy,
            distributor_ids=json.dumps([shop["distributors"][distributor]]),
        ),
        asynchronous=False,
    )
    shop["products"][name] = product_id


@given(parsers.cfparse('a product "{name}" priced {price:f} sold by "{distributor}"'))
def a_product(shop, name, price, distributor):
    _create_product(shop, name, price, distributor)


@given(parsers.cfparse('a group buy product "{name}" priced {price:f} sold by "{distributor}"'))
def a_group_buy_product(shop, name, price, distributor):
    _create_product(shop, name, price, distributor, group_buy=True)


@given("order cycles are enabled")
def order_cycles_enabled(shop):
    shop["order_cycles_enabled"] = True


@given(parsers.cfparse('the shopper has selected "{distributor}"'))
def shopper_selects(shop, session_id, distributor):
    current_domain.process(
        SelectDistribution(session_id=session_id, distributor_id=shop["distributors"][distributor]),
        asynchronous=False,
    )
