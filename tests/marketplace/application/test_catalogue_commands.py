"""Application tests for distributor, product and order cycle commands."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from marketplace.distributor.distributor import Distributor
from marketplace.distributor.registration import RegisterDistributor
from marketplace.order_cycle.management import AddOrderCycleDistribution, CreateOrderCycle
from marketplace.order_cycle.order_cycle import OrderCycle
from marketplace.product.creation import CreateProduct
from marketplace.product.distribution import AddProductDistributor, RemoveProductDistributor
from marketplace.product.product import Product
from marketplace.product.variants import AddVariant
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _register(name="Green Valley Co-op", **overrides):
    return current_domain.process(RegisterDistributor(name=name, **overrides), asynchronous=False)


def _create_product(name="Heirloom Tomatoes", price=12.34, **overrides):
    return current_domain.process(CreateProduct(name=name, price=price, **overrides), asynchronous=False)


class TestRegisterDistributor:
    def test_persists_distributor(self):
        distributor_id = _register(city="Fairfield")

        distributor = current_domain.repository_for(Distributor).get(distributor_id)
        assert distributor.name == "Green Valley Co-op"
        assert distributor.city == "Fairfield"
        assert distributor.is_active is True

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            current_domain.process(RegisterDistributor(city="Fairfield"), asynchronous=False)


class TestCreateProduct:
    def test_persists_product_with_master_variant(self):
        product_id = _create_product(group_buy=True, sku="TOM-1")

        product = current_domain.repository_for(Product).get(product_id)
        assert product.group_buy is True
        assert product.master.price == 12.34
        assert product.master.sku == "TOM-1"

    def test_with_distributors(self):
        distributor_id = _register()

        product_id = _create_product(distributor_ids=json.dumps([distributor_id]))

        product = current_domain.repository_for(Product).get(product_id)
        assert product.distributor_ids() == [distributor_id]

    def test_unknown_distributor(self):
        with pytest.raises(ObjectNotFoundError):
            _create_product(distributor_ids=json.dumps(["dist-missing"]))

        assert current_domain.repository_for(Product).catalogue() == []

    def test_catalogue_is_ordered_by_name(self):
        _create_product(name="Zucchini")
        _create_product(name="Apples")

        names = [p.name for p in current_domain.repository_for(Product).catalogue()]
        assert names == ["Apples", "Zucchini"]


class TestAddVariant:
    def test_adds_variant(self):
        product_id = _create_product()

        variant_id = current_domain.process(
            AddVariant(product_id=product_id, price=30.0, options_text="Case of 12"),
            asynchronous=False,
        )

        product = current_domain.repository_for(Product).get(product_id)
        assert len(product.variants) == 2
        assert product.find_variant(variant_id).options_text == "Case of 12"


class TestProductDistributors:
    def test_add_and_remove(self):
        distributor_id = _register()
        product_id = _create_product()

        current_domain.process(
            AddProductDistributor(product_id=product_id, distributor_id=distributor_id),
            asynchronous=False,
        )
        assert current_domain.repository_for(Product).get(product_id).is_distributed_by(distributor_id)

        current_domain.process(
            RemoveProductDistributor(product_id=product_id, distributor_id=distributor_id),
            asynchronous=False,
        )
        assert not current_domain.repository_for(Product).get(product_id).is_distributed_by(distributor_id)

    def test_unknown_distributor(self):
        product_id = _create_product()

        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                AddProductDistributor(product_id=product_id, distributor_id="dist-missing"),
                asynchronous=False,
            )


class TestOrderCycles:
    def test_create_and_distribute_products(self):
        distributor_id = _register()
        product_id = _create_product()
        cycle_id = current_domain.process(CreateOrderCycle(name="Weekly Box"), asynchronous=False)

        current_domain.process(
            AddOrderCycleDistribution(
                order_cycle_id=cycle_id,
                distributor_id=distributor_id,
                product_ids=json.dumps([product_id]),
            ),
            asynchronous=False,
        )

        cycle = current_domain.repository_for(OrderCycle).get(cycle_id)
        product = current_domain.repository_for(Product).get(product_id)
        assert cycle.distributes(distributor_id, product.variant_ids())

    def test_distribute_explicit_variants(self):
        distributor_id = _register()
        product_id = _create_product()
        variant_id = current_domain.process(AddVariant(product_id=product_id, price=30.0), asynchronous=False)
        cycle_id = current_domain.process(CreateOrderCycle(name="Weekly Box"), asynchronous=False)

        current_domain.process(
            AddOrderCycleDistribution(
                order_cycle_id=cycle_id,
                distributor_id=distributor_id,
                variant_ids=json.dumps([variant_id]),
            ),
            asynchronous=False,
        )

        cycle = current_domain.repository_for(OrderCycle).get(cycle_id)
        assert cycle.exchanges[0].offered_variant_ids() == {variant_id}

    def test_nothing_to_distribute(self):
        distributor_id = _register()
        cycle_id = current_domain.process(CreateOrderCycle(name="Weekly Box"), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(
                AddOrderCycleDistribution(order_cycle_id=cycle_id, distributor_id=distributor_id),
                asynchronous=False,
            )

    def test_open_cycles_excludes_closed(self):
        now = datetime.now(UTC)
        current_domain.process(CreateOrderCycle(name="This Week"), asynchronous=False)
        current_domain.process(
            CreateOrderCycle(name="Last Week", orders_close_at=now - timedelta(days=1)),
            asynchronous=False,
        )

        names = [c.name for c in current_domain.repository_for(OrderCycle).open_cycles()]
        assert names == ["This Week"]


class TestLargeCatalogues:
    def test_catalogue_returns_every_product(self):
        repo = current_domain.repository_for(Product)
        for i in range(120):
            repo.add(Product.create(name=f"Product {i:03d}", price=1.0))

        names = [p.name for p in repo.catalogue()]

        assert len(names) == 120
        assert names[0] == "Product 000"
        assert names[-1] == "Product 119"

    def test_open_cycles_returns_every_cycle(self):
        repo = current_domain.repository_for(OrderCycle)
        for i in range(105):
            repo.add(OrderCycle.create(name=f"Cycle {i:03d}"))

        assert len(repo.open_cycles()) == 105


class TestProductCurrency:
    def test_unsupported_currency_is_rejected(self):
        with pytest.raises(ValidationError):
            _create_product(name="Rice", currency="JPY")

        assert current_domain.repository_for(Product).catalogue() == []
