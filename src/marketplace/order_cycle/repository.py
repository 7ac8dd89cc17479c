"""Repository for the OrderCycle aggregate."""

from marketplace.domain import marketplace
from marketplace.order_cycle.order_cycle import OrderCycle
from marketplace.utils.query import fetch_all


@marketplace.repository(part_of=OrderCycle)
class OrderCycleRepository:
    def open_cycles(self, at=None) -> list[OrderCycle]:
        """Order cycles currently accepting orders."""
        return [cycle for cycle in fetch_all(self._dao.query.order_by("name")) if cycle.is_open(at)]
