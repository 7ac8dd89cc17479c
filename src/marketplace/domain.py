"""Marketplace bounded context — distributors, order cycles and shopper carts.

Handles catalogue distribution (which distributor or order cycle offers a
product), the shopper's distribution selection, and the cart admission rules
that keep every order with a single distributor.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

marketplace = Domain(name="marketplace")
