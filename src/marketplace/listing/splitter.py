"""Split a product list by the shopper's distribution.

``local`` products can be bought through the selected distributor (and order
cycle), ``remote`` ones only through some other channel, and ``unavailable``
ones through no channel at all. Relative order is preserved in every bucket.
"""

from typing import NamedTuple


class ProductSplit(NamedTuple):
    local: list
    remote: list
    unavailable: list


def split_products_by_distribution(
    products,
    distributor=None,
    order_cycle=None,
    order_cycles=(),
    order_cycles_enabled=False,
) -> ProductSplit:
    """Partition ``products`` into local, remote and unavailable.

    ``order_cycles`` are all the cycles a remote offer may come from; the
    selected ``order_cycle`` need not be among them.
    """
    split = ProductSplit(local=[], remote=[], unavailable=[])

    if distributor is None:
        split.remote.extend(products)
        return split

    distributor_id = str(distributor.id)
    cycles = list(order_cycles)
    if order_cycle is not None and all(str(c.id) != str(order_cycle.id) for c in cycles):
        cycles.append(order_cycle)

    for product in products:
        if _is_local(product, distributor_id, order_cycle, order_cycles_enabled):
            split.local.append(product)
        elif _has_other_channel(product, distributor_id, order_cycle, cycles, order_cycles_enabled):
            split.remote.append(product)
        else:
            split.unavailable.append(product)

    return split


def _is_local(product, distributor_id, order_cycle, order_cycles_enabled):
    if order_cycles_enabled:
        return order_cycle is not None and order_cycle.distributes(distributor_id, product.variant_ids())
    return product.is_distributed_by(distributor_id)


def _has_other_channel(product, distributor_id, order_cycle, cycles, order_cycles_enabled):
    other_direct = any(d != distributor_id for d in product.distributor_ids())
    if not order_cycles_enabled:
        return other_direct
    if other_direct:
        return True

    variant_ids = product.variant_ids()
    for cycle in cycles:
        for channel in cycle.channels_for(variant_ids):
            selected = order_cycle is not None and str(cycle.id) == str(order_cycle.id) and channel == distributor_id
            if not selected:
                return True
    return False
