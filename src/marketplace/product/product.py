"""Product aggregate root with Variant and ProductDistribution entities.

Every product carries one master variant (the default purchasable unit) and
any number of extra variants. Direct distributor associations live on the
product; order cycle associations live on the OrderCycle aggregate.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.product.events import (
    ProductCreated,
    ProductDistributorAdded,
    ProductDistributorRemoved,
    VariantAdded,
)
from marketplace.shared.money import CURRENCY_SYMBOLS


@marketplace.entity(part_of="Product")
class Variant:
    """A purchasable unit of a product."""

    sku = String(max_length=50)
    options_text = String(max_length=255)
    price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    is_master = Boolean(default=False)


@marketplace.entity(part_of="Product")
class ProductDistribution:
    distributor_id = Identifier(required=True)


@marketplace.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    group_buy = Boolean(default=False)
    variants = HasMany(Variant)
    distributions = HasMany(ProductDistribution)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def only_one_master_variant(self):
        if len([v for v in self.variants if v.is_master]) > 1:
            raise ValidationError({"variants": ["A product can only have one master variant"]})

    @invariant.post
    def distributors_must_be_unique(self):
        distributor_ids = self.distributor_ids()
        if len(distributor_ids) != len(set(distributor_ids)):
            raise ValidationError({"distributions": ["A distributor can only be associated once"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, description=None, group_buy=False, sku=None, currency="USD", distributor_ids=None):
        _check_currency(currency)
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            group_buy=bool(group_buy),
            created_at=now,
            updated_at=now,
        )

        master = Variant(sku=sku, price=price, currency=currency, is_master=True)
        product.add_variants(master)
        for distributor_id in distributor_ids or []:
            product.add_distributions(ProductDistribution(distributor_id=distributor_id))

        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=name,
                master_variant_id=str(master.id),
                price=price,
                currency=currency,
                group_buy=bool(group_buy),
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Variants
    # -------------------------------------------------------------------
    @property
    def master(self):
        return next(v for v in self.variants if v.is_master)

    def variant_ids(self):
        return [str(v.id) for v in self.variants]

    def find_variant(self, variant_id):
        """Return the variant with this id; the master variant when no id is given."""
        if variant_id is None:
            return self.master

        variant = next((v for v in self.variants if str(v.id) == str(variant_id)), None)
        if variant is None:
            raise ValidationError({"variant_id": [f"Variant {variant_id} does not belong to {self.name}"]})
        return variant

    def add_variant(self, price, options_text=None, sku=None, currency=None):
        currency = currency or self.master.currency
        _check_currency(currency)
        variant = Variant(
            sku=sku,
            options_text=options_text,
            price=price,
            currency=currency,
        )
        self.add_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantAdded(
                product_id=str(self.id),
                variant_id=str(variant.id),
                sku=sku,
                options_text=options_text,
                price=price,
                currency=variant.currency,
            )
        )
        return variant

    # -------------------------------------------------------------------
    # Direct distribution
    # -------------------------------------------------------------------
    def distributor_ids(self):
        return [str(d.distributor_id) for d in self.distributions]

    def is_distributed_by(self, distributor_id):
        return distributor_id is not None and str(distributor_id) in self.distributor_ids()

    def add_distributor(self, distributor_id):
        if self.is_distributed_by(distributor_id):
            raise ValidationError({"distributor_id": ["Product is already sold by this distributor"]})

        self.add_distributions(ProductDistribution(distributor_id=distributor_id))
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDistributorAdded(
                product_id=str(self.id),
                distributor_id=str(distributor_id),
            )
        )

    def remove_distributor(self, distributor_id):
        distribution = next(
            (d for d in self.distributions if str(d.distributor_id) == str(distributor_id)),
            None,
        )
        if distribution is None:
            raise ValidationError({"distributor_id": ["Product is not sold by this distributor"]})

        self.remove_distributions(distribution)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDistributorRemoved(
                product_id=str(self.id),
                distributor_id=str(distributor_id),
            )
        )


def _check_currency(currency):
    if currency not in CURRENCY_SYMBOLS:
        raise ValidationError({"currency": [f"Unsupported currency: {currency}"]})
