"""Marketplace API package."""

from marketplace.api.routes import (
    distributor_router,
    install_exception_handlers,
    order_cycle_router,
    product_router,
    session_router,
)

__all__ = [
    "distributor_router",
    "product_router",
    "order_cycle_router",
    "session_router",
    "install_exception_handlers",
]
