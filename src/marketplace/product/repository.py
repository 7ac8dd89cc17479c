"""Repository for the Product aggregate."""

from marketplace.domain import marketplace
from marketplace.product.product import Product
from marketplace.utils.query import fetch_all


@marketplace.repository(part_of=Product)
class ProductRepository:
    def catalogue(self) -> list[Product]:
        """All products in storefront order (by name)."""
        return fetch_all(self._dao.query.order_by("name"))
