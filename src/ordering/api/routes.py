"""FastAPI routes for the Ordering domain: carts, checkouts, orders and the admin dashboard."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from catalogue.category.categories import CATEGORIES
from catalogue.domain import catalogue
from catalogue.product.search import all_products, get_product
from identity.api.dependencies import current_actor, optional_actor
from ordering.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CartResponse,
    CheckoutIdResponse,
    CheckoutResponse,
    CreateCartRequest,
    DashboardResponse,
    OrderListResponse,
    OrderResponse,
    PaymentRequest,
    PlaceOrderResponse,
    ShippingRequest,
    StartCheckoutRequest,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import ClearCart, CreateCart
from ordering.checkout.checkout import CheckoutSession
from ordering.checkout.placement import place_order
from ordering.checkout.steps import GoBack, StartCheckout, SubmitPayment, SubmitShipping
from ordering.order.queries import dashboard_stats, get_order, list_orders
from ordering.order.status import UpdateOrderStatus
from shared.actor import Actor
from shared.errors import Forbidden


def _product_reference(product_id: str) -> dict:
    """Canonical product fields for ``AddToCart``, read from the catalogue."""
    with catalogue.domain_context():
        product = get_product(product_id)
        return {
            "product_id": str(product.id),
            "name": product.name,
            "unit_price": product.price,
            "image": product.image,
            "stock_count": product.stock_count,
            "in_stock": product.in_stock,
        }


def _ensure_owner(owner_id, actor: Actor | None) -> None:
    """Carts and checkouts owned by a customer are only reachable by that customer."""
    if owner_id and (actor is None or str(actor.user_id) != str(owner_id)):
        raise Forbidden("This belongs to another customer")


def _owned_cart(cart_id: str, actor: Actor | None) -> ShoppingCart:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    _ensure_owner(cart.customer_id, actor)
    return cart


def _owned_checkout(checkout_id: str, actor: Actor | None) -> CheckoutSession:
    checkout = current_domain.repository_for(CheckoutSession).get(checkout_id)
    _ensure_owner(checkout.customer_id, actor)
    return checkout


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest, actor: Actor | None = Depends(optional_actor)) -> CartIdResponse:
    command = CreateCart(
        customer_id=actor.user_id if actor else None,
        session_id=body.session_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def cart_detail(cart_id: str, actor: Actor | None = Depends(optional_actor)) -> CartResponse:
    return CartResponse.from_cart(_owned_cart(cart_id, actor))


@cart_router.post("/{cart_id}/items", response_model=CartResponse)
async def add_cart_item(
    cart_id: str, body: AddToCartRequest, actor: Actor | None = Depends(optional_actor)
) -> CartResponse:
    _owned_cart(cart_id, actor)
    command = AddToCart(
        cart_id=cart_id,
        quantity=body.quantity,
        **_product_reference(body.product_id),
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(current_domain.repository_for(ShoppingCart).get(cart_id))


@cart_router.put("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    cart_id: str,
    product_id: str,
    body: UpdateCartQuantityRequest,
    actor: Actor | None = Depends(optional_actor),
) -> CartResponse:
    _owned_cart(cart_id, actor)
    command = UpdateCartQuantity(
        cart_id=cart_id,
        product_id=product_id,
        new_quantity=body.new_quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(current_domain.repository_for(ShoppingCart).get(cart_id))


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(
    cart_id: str, product_id: str, actor: Actor | None = Depends(optional_actor)
) -> CartResponse:
    _owned_cart(cart_id, actor)
    command = RemoveFromCart(
        cart_id=cart_id,
        product_id=product_id,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(current_domain.repository_for(ShoppingCart).get(cart_id))


@cart_router.delete("/{cart_id}/items", response_model=StatusResponse)
async def clear_cart(cart_id: str, actor: Actor | None = Depends(optional_actor)) -> StatusResponse:
    _owned_cart(cart_id, actor)
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkouts", tags=["checkouts"])


def _checkout_view(checkout_id: str) -> CheckoutResponse:
    checkout = current_domain.repository_for(CheckoutSession).get(checkout_id)
    cart = current_domain.repository_for(ShoppingCart).get(checkout.cart_id)
    return CheckoutResponse.from_checkout(checkout, cart)


@checkout_router.post("", status_code=201, response_model=CheckoutIdResponse)
async def start_checkout(
    body: StartCheckoutRequest, actor: Actor | None = Depends(optional_actor)
) -> CheckoutIdResponse:
    command = StartCheckout(
        cart_id=body.cart_id,
        customer_id=actor.user_id if actor else None,
    )
    result = current_domain.process(command, asynchronous=False)
    return CheckoutIdResponse(checkout_id=result)


@checkout_router.get("/{checkout_id}", response_model=CheckoutResponse)
async def checkout_detail(checkout_id: str, actor: Actor | None = Depends(optional_actor)) -> CheckoutResponse:
    _owned_checkout(checkout_id, actor)
    return _checkout_view(checkout_id)


@checkout_router.put("/{checkout_id}/shipping", response_model=CheckoutResponse)
async def submit_shipping(
    checkout_id: str, body: ShippingRequest, actor: Actor | None = Depends(optional_actor)
) -> CheckoutResponse:
    _owned_checkout(checkout_id, actor)
    command = SubmitShipping(checkout_id=checkout_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return _checkout_view(checkout_id)


@checkout_router.put("/{checkout_id}/payment", response_model=CheckoutResponse)
async def submit_payment(
    checkout_id: str, body: PaymentRequest, actor: Actor | None = Depends(optional_actor)
) -> CheckoutResponse:
    _owned_checkout(checkout_id, actor)
    command = SubmitPayment(checkout_id=checkout_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return _checkout_view(checkout_id)


@checkout_router.put("/{checkout_id}/back", response_model=CheckoutResponse)
async def go_back(checkout_id: str, actor: Actor | None = Depends(optional_actor)) -> CheckoutResponse:
    _owned_checkout(checkout_id, actor)
    current_domain.process(GoBack(checkout_id=checkout_id), asynchronous=False)
    return _checkout_view(checkout_id)


@checkout_router.post("/{checkout_id}/place", status_code=201, response_model=PlaceOrderResponse)
async def place_checkout_order(checkout_id: str, actor: Actor = Depends(current_actor)) -> PlaceOrderResponse:
    """Place the order for the signed-in customer.

    Holds the request for the configured processing delay.
    """
    order_id = await place_order(checkout_id, customer_id=actor.user_id)
    return PlaceOrderResponse(checkout_id=checkout_id, order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderListResponse)
async def my_orders(actor: Actor = Depends(current_actor)) -> OrderListResponse:
    orders = list_orders(actor)
    return OrderListResponse(
        count=len(orders),
        orders=[OrderResponse.from_order(o) for o in orders],
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return OrderResponse.from_order(get_order(order_id, actor))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, actor: Actor = Depends(current_actor)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        actor_id=actor.user_id,
        actor_role=actor.role.value,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(get_order(order_id, actor))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(actor: Actor = Depends(current_actor)) -> DashboardResponse:
    if not actor.is_admin:
        raise Forbidden("Admin access required")

    stats = dashboard_stats()
    with catalogue.domain_context():
        product_count = len(all_products())

    return DashboardResponse(
        **stats,
        product_count=product_count,
        category_count=len(CATEGORIES),
    )
