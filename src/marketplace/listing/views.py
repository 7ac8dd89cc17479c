"""Storefront views: the split product listing and the add-to-cart form.

Both views decide whether to offer the add-to-cart button. Once a cart is
committed to a distributor, products that distribution cannot supply are
shown without the button and with a notice asking the shopper to finish
their order there first.
"""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.listing.strategy import DistributionSplitStrategy, ListingStrategy
from marketplace.order.admission import DISTRIBUTION_MISMATCH, Distribution
from marketplace.order.cart import current_order_for, distribution_for
from marketplace.order_cycle.order_cycle import OrderCycle
from marketplace.product.product import Product
from marketplace.settings import DistributionSettings
from marketplace.shared.money import format_amount
from marketplace.shopper.session import ShopperSession


@dataclass(frozen=True)
class ProductCard:
    product_id: str
    name: str
    price: str
    group_buy: bool
    can_add_to_cart: bool
    notice: str | None = None


@dataclass(frozen=True)
class ProductListing:
    distributor_id: str | None
    order_cycle_id: str | None
    local: list[ProductCard] = field(default_factory=list)
    remote: list[ProductCard] = field(default_factory=list)
    unavailable: list[ProductCard] = field(default_factory=list)
    notice: str | None = None


@dataclass(frozen=True)
class VariantOption:
    variant_id: str
    label: str
    price: str
    is_master: bool


@dataclass(frozen=True)
class OrderCycleOption:
    order_cycle_id: str
    name: str


@dataclass(frozen=True)
class ProductPage:
    product_id: str
    name: str
    description: str | None
    group_buy: bool
    show_max_quantity: bool
    variants: list[VariantOption]
    order_cycle_options: list[OrderCycleOption] | None
    can_add_to_cart: bool
    notice: str | None = None


class _CartGuard:
    """Answers "may this product be added?" for a session at display time."""

    def __init__(self, session, selected: Distribution, settings: DistributionSettings):
        self.order = current_order_for(session)
        self.committed = None
        self.notice = None
        self.selection_matches = True

        if self.order is not None and self.order.is_committed:
            self.notice = DISTRIBUTION_MISMATCH.format(distributor_name=self.order.distributor_name)
            order_cycle = None
            if self.order.order_cycle_id:
                order_cycle = current_domain.repository_for(OrderCycle).get(self.order.order_cycle_id)
            self.committed = Distribution(
                distributor=current_domain.repository_for(Distributor).get(self.order.distributor_id),
                order_cycle=order_cycle,
                order_cycles_enabled=settings.order_cycles_enabled,
            )
            self.selection_matches = selected.distributor_id == self.committed.distributor_id and (
                not settings.order_cycles_enabled or selected.order_cycle_id == self.committed.order_cycle_id
            )

    @property
    def selection_conflicts(self):
        return self.committed is not None and not self.selection_matches

    def allows(self, product):
        if self.committed is None:
            return True
        return self.selection_matches and self.committed.offers(product)

    def notice_for(self, product):
        return None if self.allows(product) else self.notice


def _card(product, guard):
    master = product.master
    return ProductCard(
        product_id=str(product.id),
        name=product.name,
        price=format_amount(master.price, master.currency),
        group_buy=bool(product.group_buy),
        can_add_to_cart=guard.allows(product),
        notice=guard.notice_for(product),
    )


def build_product_listing(
    session_id,
    settings: DistributionSettings,
    strategy: ListingStrategy | None = None,
) -> ProductListing:
    strategy = strategy or DistributionSplitStrategy()
    session = current_domain.repository_for(ShopperSession).get(session_id)
    distribution = distribution_for(session, settings.order_cycles_enabled)
    guard = _CartGuard(session, distribution, settings)

    products = current_domain.repository_for(Product).catalogue()
    order_cycles = current_domain.repository_for(OrderCycle).open_cycles() if settings.order_cycles_enabled else []
    split = strategy.split(products, distribution, order_cycles)

    return ProductListing(
        distributor_id=distribution.distributor_id,
        order_cycle_id=distribution.order_cycle_id,
        local=[_card(p, guard) for p in split.local],
        remote=[_card(p, guard) for p in split.remote],
        unavailable=[_card(p, guard) for p in split.unavailable],
        notice=guard.notice if guard.selection_conflicts else None,
    )


def build_product_page(session_id, product_id, settings: DistributionSettings) -> ProductPage:
    session = current_domain.repository_for(ShopperSession).get(session_id)
    product = current_domain.repository_for(Product).get(product_id)
    distribution = distribution_for(session, settings.order_cycles_enabled)
    guard = _CartGuard(session, distribution, settings)

    order_cycle_options = None
    if settings.order_cycles_enabled:
        variant_ids = product.variant_ids()
        order_cycle_options = [
            OrderCycleOption(order_cycle_id=str(cycle.id), name=cycle.name)
            for cycle in current_domain.repository_for(OrderCycle).open_cycles()
            if cycle.channels_for(variant_ids)
        ]

    return ProductPage(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        group_buy=bool(product.group_buy),
        show_max_quantity=bool(product.group_buy),
        variants=[
            VariantOption(
                variant_id=str(v.id),
                label=v.options_text or product.name,
                price=format_amount(v.price, v.currency),
                is_master=bool(v.is_master),
            )
            for v in product.variants
        ],
        order_cycle_options=order_cycle_options,
        can_add_to_cart=guard.allows(product),
        notice=guard.notice_for(product),
    )
