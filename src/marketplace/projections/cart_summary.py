"""Cart summary — the shopper's cart as shown on the cart page."""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.events import LineItemAdded, LineItemUpdated, OrderDistributionCommitted
from marketplace.order.order import Order


@marketplace.projection
class CartSummary:
    order_id = Identifier(identifier=True, required=True)
    session_id = Identifier()
    distributor_id = Identifier()
    distributor_name = String()
    order_cycle_id = Identifier()
    # JSON: list of {line_item_id, product_id, variant_id, title, quantity, max_quantity, unit_price}
    line_items = Text()
    item_count = Integer(default=0)
    item_total = Float(default=0.0)
    currency = String(max_length=3, default="USD")


@marketplace.projector(projector_for=CartSummary, aggregates=[Order])
class CartSummaryProjector:
    @on(OrderDistributionCommitted)
    def on_distribution_committed(self, event):
        repo = current_domain.repository_for(CartSummary)
        view = self._get_or_create_view(repo, event.order_id)
        view.session_id = event.session_id
        view.distributor_id = event.distributor_id
        view.distributor_name = event.distributor_name
        view.order_cycle_id = event.order_cycle_id
        repo.add(view)

    @on(LineItemAdded)
    def on_line_item_added(self, event):
        repo = current_domain.repository_for(CartSummary)
        view = self._get_or_create_view(repo, event.order_id)

        items = json.loads(view.line_items) if view.line_items else []
        items.append(
            {
                "line_item_id": str(event.line_item_id),
                "product_id": str(event.product_id),
                "variant_id": str(event.variant_id),
                "title": event.title,
                "quantity": event.quantity,
                "max_quantity": event.max_quantity,
                "unit_price": event.unit_price,
            }
        )
        view.currency = event.currency
        self._store_items(repo, view, items)

    @on(LineItemUpdated)
    def on_line_item_updated(self, event):
        repo = current_domain.repository_for(CartSummary)
        view = self._get_or_create_view(repo, event.order_id)

        items = json.loads(view.line_items) if view.line_items else []
        for item in items:
            if item["line_item_id"] == str(event.line_item_id):
                item["quantity"] = event.quantity
                item["max_quantity"] = event.max_quantity
                break
        self._store_items(repo, view, items)

    @staticmethod
    def _store_items(repo, view, items):
        view.line_items = json.dumps(items)
        view.item_count = len(items)
        view.item_total = round(sum(i["unit_price"] * i["quantity"] for i in items), 2)
        repo.add(view)

    @staticmethod
    def _get_or_create_view(repo, order_id):
        try:
            return repo.get(order_id)
        except ObjectNotFoundError:
            return CartSummary(order_id=order_id, line_items="[]", item_count=0, item_total=0.0)
