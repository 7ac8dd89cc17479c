"""Product listing strategy (port and default adapter).

The listing endpoint receives its strategy through a FastAPI dependency, so a
storefront can swap how the catalogue is arranged without touching the
handler. The default arranges products by distribution.
"""

from abc import ABC, abstractmethod

from marketplace.listing.splitter import ProductSplit, split_products_by_distribution
from marketplace.order.admission import Distribution


class ListingStrategy(ABC):
    """Arranges a catalogue into local, remote and unavailable products."""

    @abstractmethod
    def split(self, products, distribution: Distribution, order_cycles) -> ProductSplit:
        ...


class DistributionSplitStrategy(ListingStrategy):
    def split(self, products, distribution: Distribution, order_cycles) -> ProductSplit:
        return split_products_by_distribution(
            products,
            distributor=distribution.distributor,
            order_cycle=distribution.order_cycle,
            order_cycles=order_cycles,
            order_cycles_enabled=distribution.order_cycles_enabled,
        )


def get_listing_strategy() -> ListingStrategy:
    """FastAPI dependency; override it to inject another strategy."""
    return DistributionSplitStrategy()
