"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), kept apart from
the internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class PricingSchema(BaseModel):
    subtotal: float
    shipping: float
    tax: float
    total: float


class CartPricingSchema(PricingSchema):
    amount_to_free_shipping: float

    @classmethod
    def from_breakdown(cls, breakdown) -> "CartPricingSchema":
        return cls(
            **breakdown.as_floats(),
            amount_to_free_shipping=float(breakdown.amount_to_free_shipping),
        )


class AddressSchema(BaseModel):
    first_name: str
    last_name: str
    email: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "browser-session-42",
                }
            ]
        }
    }


class CartIdResponse(BaseModel):
    cart_id: str


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "e1",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    # Zero or negative removes the line
    new_quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    image: str | None = None
    quantity: int
    stock_count: int
    line_total: float


class CartResponse(BaseModel):
    cart_id: str
    customer_id: str | None = None
    session_id: str | None = None
    item_count: int
    items: list[CartLineResponse]
    pricing: CartPricingSchema

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        return cls(
            cart_id=str(cart.id),
            customer_id=cart.customer_id,
            session_id=cart.session_id,
            item_count=cart.item_count,
            items=[
                CartLineResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    unit_price=item.unit_price,
                    image=item.image,
                    quantity=item.quantity,
                    stock_count=item.stock_count,
                    line_total=float(item.total),
                )
                for item in cart.items
            ],
            pricing=CartPricingSchema.from_breakdown(cart.price_breakdown()),
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class StartCheckoutRequest(BaseModel):
    cart_id: str


class CheckoutIdResponse(BaseModel):
    checkout_id: str


class ShippingRequest(BaseModel):
    # Blank values are accepted here and reported per field by the domain
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "email": "jane@example.com",
                    "street": "1 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "United States",
                }
            ]
        }
    }


class PaymentRequest(BaseModel):
    card_number: str = ""
    card_name: str = ""
    expiry: str = ""
    cvv: str = ""


class CheckoutResponse(BaseModel):
    checkout_id: str
    cart_id: str
    customer_id: str | None = None
    step: str
    placement: str
    shipping_address: AddressSchema | None = None
    payment_method: str | None = None
    card_holder: str | None = None
    order_id: str | None = None
    last_error: str | None = None
    pricing: CartPricingSchema | None = None

    @classmethod
    def from_checkout(cls, checkout, cart=None) -> "CheckoutResponse":
        address = checkout.shipping_address
        return cls(
            checkout_id=str(checkout.id),
            cart_id=str(checkout.cart_id),
            customer_id=checkout.customer_id,
            step=checkout.step,
            placement=checkout.placement,
            shipping_address=AddressSchema(**address.to_dict()) if address else None,
            payment_method=checkout.payment_method,
            card_holder=checkout.card_holder,
            order_id=checkout.order_id,
            last_error=checkout.last_error,
            pricing=CartPricingSchema.from_breakdown(cart.price_breakdown()) if cart is not None else None,
        )


class PlaceOrderResponse(BaseModel):
    checkout_id: str
    order_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    image: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    items: list[OrderItemResponse]
    pricing: PricingSchema
    shipping_address: AddressSchema
    payment_method: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            customer_id=str(order.customer_id),
            status=order.status,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in order.items
            ],
            pricing=PricingSchema(
                subtotal=order.pricing.subtotal,
                shipping=order.pricing.shipping,
                tax=order.pricing.tax,
                total=order.pricing.total,
            ),
            shipping_address=AddressSchema(**order.shipping_address.to_dict()),
            payment_method=order.payment_method,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    count: int
    orders: list[OrderResponse]


class UpdateOrderStatusRequest(BaseModel):
    status: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "shipped",
                }
            ]
        }
    }


class DashboardResponse(BaseModel):
    total_revenue: float
    order_count: int
    pending_orders: int
    orders_by_status: dict[str, int]
    product_count: int
    category_count: int
