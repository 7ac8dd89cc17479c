"""FastAPI routes for the Marketplace — catalogue, order cycles and shopper sessions."""

import json
from dataclasses import asdict

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    AddOrderCycleDistributionRequest,
    AddProductDistributorRequest,
    AddToCartRequest,
    AddVariantRequest,
    CartAdmissionErrorResponse,
    CartLineItemSchema,
    CartResponse,
    CreateOrderCycleRequest,
    CreateProductRequest,
    DistributorIdResponse,
    OrderCycleIdResponse,
    OrderIdResponse,
    ProductIdResponse,
    ProductListingResponse,
    ProductPageResponse,
    RegisterDistributorRequest,
    SelectDistributionRequest,
    SessionIdResponse,
    StartShoppingRequest,
    StatusResponse,
    VariantIdResponse,
)
from marketplace.distributor.registration import RegisterDistributor
from marketplace.listing.strategy import ListingStrategy, get_listing_strategy
from marketplace.listing.views import build_product_listing, build_product_page
from marketplace.order.admission import CartAdmissionError
from marketplace.order.cart import AddToCart
from marketplace.order_cycle.management import AddOrderCycleDistribution, CreateOrderCycle
from marketplace.product.creation import CreateProduct
from marketplace.product.distribution import AddProductDistributor, RemoveProductDistributor
from marketplace.product.variants import AddVariant
from marketplace.projections.cart_summary import CartSummary
from marketplace.settings import DistributionSettings, get_settings
from marketplace.shared.money import format_amount
from marketplace.shopper.selection import SelectDistribution, StartShopping
from marketplace.shopper.session import ShopperSession


async def cart_admission_error_handler(request: Request, exc: CartAdmissionError) -> JSONResponse:
    """Admission failures are shopper-recoverable; report the exact message."""
    body = CartAdmissionErrorResponse(code=exc.code, message=exc.message)
    return JSONResponse(status_code=422, content=body.model_dump())


def install_exception_handlers(app: FastAPI) -> None:
    """Protean errors (400/404) plus 422 for cart admission failures."""
    register_exception_handlers(app)
    app.add_exception_handler(CartAdmissionError, cart_admission_error_handler)


# ---------------------------------------------------------------------------
# Distributor Router
# ---------------------------------------------------------------------------
distributor_router = APIRouter(prefix="/distributors", tags=["distributors"])


@distributor_router.post("", status_code=201, response_model=DistributorIdResponse)
async def register_distributor(body: RegisterDistributorRequest) -> DistributorIdResponse:
    command = RegisterDistributor(
        name=body.name,
        description=body.description,
        city=body.city,
    )
    distributor_id = current_domain.process(command, asynchronous=False)
    return DistributorIdResponse(distributor_id=distributor_id)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        currency=body.currency,
        sku=body.sku,
        group_buy=body.group_buy,
        distributor_ids=json.dumps(body.distributor_ids),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@product_router.post("/{product_id}/variants", status_code=201, response_model=VariantIdResponse)
async def add_variant(product_id: str, body: AddVariantRequest) -> VariantIdResponse:
    command = AddVariant(
        product_id=product_id,
        price=body.price,
        options_text=body.options_text,
        sku=body.sku,
    )
    variant_id = current_domain.process(command, asynchronous=False)
    return VariantIdResponse(variant_id=variant_id)


@product_router.post("/{product_id}/distributors", response_model=StatusResponse)
async def add_product_distributor(product_id: str, body: AddProductDistributorRequest) -> StatusResponse:
    command = AddProductDistributor(product_id=product_id, distributor_id=body.distributor_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}/distributors/{distributor_id}", response_model=StatusResponse)
async def remove_product_distributor(product_id: str, distributor_id: str) -> StatusResponse:
    command = RemoveProductDistributor(product_id=product_id, distributor_id=distributor_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order Cycle Router
# ---------------------------------------------------------------------------
order_cycle_router = APIRouter(prefix="/order-cycles", tags=["order-cycles"])


@order_cycle_router.post("", status_code=201, response_model=OrderCycleIdResponse)
async def create_order_cycle(body: CreateOrderCycleRequest) -> OrderCycleIdResponse:
    command = CreateOrderCycle(
        name=body.name,
        orders_open_at=body.orders_open_at,
        orders_close_at=body.orders_close_at,
    )
    order_cycle_id = current_domain.process(command, asynchronous=False)
    return OrderCycleIdResponse(order_cycle_id=order_cycle_id)


@order_cycle_router.post("/{order_cycle_id}/distributions", response_model=StatusResponse)
async def add_order_cycle_distribution(
    order_cycle_id: str, body: AddOrderCycleDistributionRequest
) -> StatusResponse:
    command = AddOrderCycleDistribution(
        order_cycle_id=order_cycle_id,
        distributor_id=body.distributor_id,
        variant_ids=json.dumps(body.variant_ids),
        product_ids=json.dumps(body.product_ids),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Shopper Session Router
# ---------------------------------------------------------------------------
session_router = APIRouter(prefix="/sessions", tags=["sessions"])


@session_router.post("", status_code=201, response_model=SessionIdResponse)
async def start_shopping(body: StartShoppingRequest | None = None) -> SessionIdResponse:
    body = body or StartShoppingRequest()
    command = StartShopping(
        distributor_id=body.distributor_id,
        order_cycle_id=body.order_cycle_id,
    )
    session_id = current_domain.process(command, asynchronous=False)
    return SessionIdResponse(session_id=session_id)


@session_router.put("/{session_id}/distribution", response_model=StatusResponse)
async def select_distribution(session_id: str, body: SelectDistributionRequest) -> StatusResponse:
    command = SelectDistribution(
        session_id=session_id,
        distributor_id=body.distributor_id,
        order_cycle_id=body.order_cycle_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@session_router.get("/{session_id}/products", response_model=ProductListingResponse)
async def list_products(
    session_id: str,
    settings: DistributionSettings = Depends(get_settings),
    strategy: ListingStrategy = Depends(get_listing_strategy),
) -> ProductListingResponse:
    listing = build_product_listing(session_id, settings, strategy)
    return ProductListingResponse.model_validate(asdict(listing))


@session_router.get("/{session_id}/products/{product_id}", response_model=ProductPageResponse)
async def show_product(
    session_id: str,
    product_id: str,
    settings: DistributionSettings = Depends(get_settings),
) -> ProductPageResponse:
    page = build_product_page(session_id, product_id, settings)
    return ProductPageResponse.model_validate(asdict(page))


@session_router.post(
    "/{session_id}/cart/items",
    response_model=OrderIdResponse,
    responses={422: {"model": CartAdmissionErrorResponse}},
)
async def add_to_cart(
    session_id: str,
    body: AddToCartRequest,
    settings: DistributionSettings = Depends(get_settings),
) -> OrderIdResponse:
    command = AddToCart(
        session_id=session_id,
        product_id=body.product_id,
        variant_id=body.variant_id,
        quantity=body.quantity,
        max_quantity=body.max_quantity,
        order_cycles_enabled=settings.order_cycles_enabled,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@session_router.get("/{session_id}/cart", response_model=CartResponse)
async def show_cart(session_id: str) -> CartResponse:
    session = current_domain.repository_for(ShopperSession).get(session_id)
    if not session.order_id:
        return CartResponse(item_total=format_amount(0.0))

    summary = current_domain.repository_for(CartSummary).get(session.order_id)
    items = json.loads(summary.line_items) if summary.line_items else []
    return CartResponse(
        order_id=str(summary.order_id),
        distributor_id=summary.distributor_id,
        distributor_name=summary.distributor_name,
        order_cycle_id=summary.order_cycle_id,
        line_items=[
            CartLineItemSchema(
                line_item_id=item["line_item_id"],
                product_id=item["product_id"],
                variant_id=item["variant_id"],
                title=item["title"],
                quantity=item["quantity"],
                max_quantity=item["max_quantity"],
                unit_price=format_amount(item["unit_price"], summary.currency),
                item_total=format_amount(item["unit_price"] * item["quantity"], summary.currency),
            )
            for item in items
        ],
        item_count=summary.item_count,
        item_total=format_amount(summary.item_total, summary.currency),
    )
