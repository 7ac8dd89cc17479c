"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue with its master variant."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    master_variant_id = Identifier(required=True)
    price = Float(required=True)
    currency = String(required=True)
    group_buy = Boolean(default=False)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class VariantAdded:
    """An extra purchasable variant (size, packaging) was added to a product."""

    __version__ = 1

    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    sku = String()
    options_text = String()
    price = Float(required=True)
    currency = String(required=True)


@marketplace.event(part_of="Product")
class ProductDistributorAdded:
    """A distributor started selling the product directly."""

    __version__ = 1

    product_id = Identifier(required=True)
    distributor_id = Identifier(required=True)


@marketplace.event(part_of="Product")
class ProductDistributorRemoved:
    """A distributor stopped selling the product directly."""

    __version__ = 1

    product_id = Identifier(required=True)
    distributor_id = Identifier(required=True)
