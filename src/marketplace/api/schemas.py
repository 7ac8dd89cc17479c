"""Pydantic request/response schemas for the Marketplace API.

These are external contracts — separate from internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue requests
# ---------------------------------------------------------------------------
class RegisterDistributorRequest(BaseModel):
    name: str
    description: str | None = None
    city: str | None = None


class CreateProductRequest(BaseModel):
    name: str
    price: float = Field(ge=0)
    description: str | None = None
    currency: str = "USD"
    sku: str | None = None
    group_buy: bool = False
    distributor_ids: list[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Heirloom Tomatoes",
                    "price": 12.34,
                    "group_buy": False,
                    "distributor_ids": ["dist-001"],
                }
            ]
        }
    }


class AddVariantRequest(BaseModel):
    price: float = Field(ge=0)
    options_text: str | None = None
    sku: str | None = None


class AddProductDistributorRequest(BaseModel):
    distributor_id: str


class CreateOrderCycleRequest(BaseModel):
    name: str
    orders_open_at: datetime | None = None
    orders_close_at: datetime | None = None


class AddOrderCycleDistributionRequest(BaseModel):
    distributor_id: str
    variant_ids: list[str] = Field(default_factory=list)
    product_ids: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Shopper requests
# ---------------------------------------------------------------------------
class StartShoppingRequest(BaseModel):
    distributor_id: str | None = None
    order_cycle_id: str | None = None


class SelectDistributionRequest(BaseModel):
    distributor_id: str | None = None
    order_cycle_id: str | None = None


class AddToCartRequest(BaseModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(ge=1, default=1)
    max_quantity: int | None = Field(default=None, ge=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                    "max_quantity": 3,
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class DistributorIdResponse(BaseModel):
    distributor_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class VariantIdResponse(BaseModel):
    variant_id: str


class OrderCycleIdResponse(BaseModel):
    order_cycle_id: str


class SessionIdResponse(BaseModel):
    session_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class CartAdmissionErrorResponse(BaseModel):
    code: str
    message: str


class ProductCardSchema(BaseModel):
    product_id: str
    name: str
    price: str
    group_buy: bool
    can_add_to_cart: bool
    notice: str | None = None


class ProductListingResponse(BaseModel):
    distributor_id: str | None = None
    order_cycle_id: str | None = None
    local: list[ProductCardSchema]
    remote: list[ProductCardSchema]
    unavailable: list[ProductCardSchema]
    notice: str | None = None


class VariantOptionSchema(BaseModel):
    variant_id: str
    label: str
    price: str
    is_master: bool


class OrderCycleOptionSchema(BaseModel):
    order_cycle_id: str
    name: str


class ProductPageResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    group_buy: bool
    show_max_quantity: bool
    variants: list[VariantOptionSchema]
    order_cycle_options: list[OrderCycleOptionSchema] | None = None
    can_add_to_cart: bool
    notice: str | None = None


class CartLineItemSchema(BaseModel):
    line_item_id: str
    product_id: str
    variant_id: str
    title: str
    quantity: int
    max_quantity: int
    unit_price: str
    item_total: str


class CartResponse(BaseModel):
    order_id: str | None = None
    distributor_id: str | None = None
    distributor_name: str | None = None
    order_cycle_id: str | None = None
    line_items: list[CartLineItemSchema] = Field(default_factory=list)
    item_count: int = 0
    item_total: str
