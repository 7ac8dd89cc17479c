"""BDD tests for adding products to a distributor-bound cart."""

from marketplace.order.admission import CartAdmissionError
from marketplace.order.cart import AddToCart
from marketplace.order.order import Order
from marketplace.shared.money import format_amount
from marketplace.shopper.session import ShopperSession
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/add_to_cart.feature")


def _add_to_cart(shop, session_id, name, quantity, max_quantity=None):
    current_domain.process(
        AddToCart(
            session_id=session_id,
            product_id=shop["products"][name],
            quantity=quantity,
            max_quantity=max_quantity,
            order_cycles_enabled=shop["order_cycles_enabled"],
        ),
        asynchronous=False,
    )


def _order(session_id):
    session = current_domain.repository_for(ShopperSession).get(session_id)
    return current_domain.repository_for(Order).get(session.order_id)


# ---------------------------------------------------------------------------
# Given / When steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the shopper has added {quantity:d} of "{name}"'))
def shopper_has_added(shop, session_id, quantity, name):
    _add_to_cart(shop, session_id, name, quantity)


@when(parsers.cfparse('the shopper adds {quantity:d} of "{name}" with a max of {max_quantity:d}'))
def shopper_adds_with_max(shop, session_id, quantity, name, max_quantity, error):
    try:
        _add_to_cart(shop, session_id, name, quantity, max_quantity)
    except CartAdmissionError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the shopper adds {quantity:d} of "{name}"'))
def shopper_adds(shop, session_id, quantity, name, error):
    try:
        _add_to_cart(shop, session_id, name, quantity)
    except CartAdmissionError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line item"))
def cart_has_line_items(session_id, count):
    assert len(_order(session_id).line_items) == count


@then(parsers.cfparse('the cart is committed to "{distributor}"'))
def cart_committed_to(shop, session_id, distributor):
    order = _order(session_id)
    assert order.is_committed
    assert order.distributor_id == shop["distributors"][distributor]


@then(parsers.cfparse('the cart total is "{total}"'))
def cart_total_is(session_id, total):
    order = _order(session_id)
    assert format_amount(order.item_total, order.currency) == total


@then(parsers.cfparse('the shopper is told "{message}"'))
def shopper_is_told(error, message):
    assert error["exc"] is not None
    assert error["exc"].message == message


@then("the shopper has no cart")
def shopper_has_no_cart(session_id):
    assert current_domain.repository_for(ShopperSession).get(session_id).order_id is None


@then(parsers.cfparse('the line item for "{name}" has quantity {quantity:d} and max quantity {max_quantity:d}'))
def line_item_quantities_are(shop, session_id, name, quantity, max_quantity):
    item = next(i for i in _order(session_id).line_items if str(i.product_id) == shop["products"][name])
    assert item.quantity == quantity
    assert item.max_quantity == max_quantity
