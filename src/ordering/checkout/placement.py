"""Order placement: the final checkout step.

Placement runs in three phases, each its own unit of work:

1. ``BeginPlacement`` checks the caller owns the checkout and marks it in
   flight. A second submission while the first is still running fails with
   ``CheckoutInProgress``.
2. A fixed processing delay is awaited (``CHECKOUT_PROCESSING_DELAY``).
3. ``PlaceOrder`` builds the order from the cart, adds it to the ledger,
   clears the cart and marks the checkout placed, all or nothing.

If phase 2 or 3 fails, ``AbortPlacement`` returns the checkout to review with
the error recorded and the caller gets ``OrderCreationFailed``. A cancelled
placement is aborted the same way before the cancellation propagates. The cart
is left as it was so the customer can retry.
"""

import asyncio

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.checkout.checkout import CheckoutSession
from ordering.domain import ordering
from ordering.order.creation import build_order, record_order
from shared.errors import OrderCreationFailed
from shared.settings import checkout_processing_delay

logger = structlog.get_logger(__name__)


@ordering.command(part_of="CheckoutSession")
class BeginPlacement:
    checkout_id = Identifier(required=True)
    customer_id = Identifier()


@ordering.command(part_of="CheckoutSession")
class PlaceOrder:
    checkout_id = Identifier(required=True)


@ordering.command(part_of="CheckoutSession")
class AbortPlacement:
    checkout_id = Identifier(required=True)
    reason = String(max_length=500)


def snapshot_items(cart):
    """Freeze the cart lines into order item dicts."""
    return [
        {
            "product_id": str(item.product_id),
            "product_name": item.name,
            "unit_price": item.unit_price,
            "quantity": item.quantity,
            "image": item.image,
        }
        for item in cart.items
    ]


@ordering.command_handler(part_of=CheckoutSession)
class PlacementHandler:
    @handle(BeginPlacement)
    def begin_placement(self, command):
        repo = current_domain.repository_for(CheckoutSession)
        checkout = repo.get(command.checkout_id)
        checkout.begin_placement(customer_id=command.customer_id)
        repo.add(checkout)

    @handle(PlaceOrder)
    def place_order(self, command):
        checkout_repo = current_domain.repository_for(CheckoutSession)
        cart_repo = current_domain.repository_for(ShoppingCart)

        checkout = checkout_repo.get(command.checkout_id)
        cart = cart_repo.get(checkout.cart_id)

        order = build_order(
            customer_id=checkout.customer_id,
            items_data=snapshot_items(cart),
            shipping_address=checkout.shipping_address,
            payment_method=checkout.payment_method,
        )
        cart.clear()
        checkout.complete_placement(str(order.id), total=order.pricing.total)

        # Persist only once every step has succeeded
        order_id = record_order(order)
        cart_repo.add(cart)
        checkout_repo.add(checkout)

        return order_id

    @handle(AbortPlacement)
    def abort_placement(self, command):
        repo = current_domain.repository_for(CheckoutSession)
        checkout = repo.get(command.checkout_id)
        checkout.fail_placement(command.reason)
        repo.add(checkout)


def _abort(checkout_id, reason):
    current_domain.process(
        AbortPlacement(checkout_id=checkout_id, reason=reason),
        asynchronous=False,
    )


async def place_order(checkout_id, customer_id=None, delay=None):
    """Run the full placement for a checkout and return the new order id.

    Once the checkout is in flight it always settles: placed on success,
    back to review on any failure or cancellation.
    """
    current_domain.process(
        BeginPlacement(checkout_id=checkout_id, customer_id=customer_id),
        asynchronous=False,
    )
    logger.info("Order placement started", checkout_id=checkout_id)

    try:
        await asyncio.sleep(checkout_processing_delay() if delay is None else delay)
        order_id = current_domain.process(PlaceOrder(checkout_id=checkout_id), asynchronous=False)
    except asyncio.CancelledError:
        logger.warning("Order placement cancelled", checkout_id=checkout_id)
        _abort(checkout_id, "Order placement was interrupted. Please try again.")
        raise
    except Exception as exc:
        logger.exception("Order placement failed", checkout_id=checkout_id)
        _abort(checkout_id, str(exc))
        raise OrderCreationFailed(
            "Failed to place order. Please try again.",
            checkout_id=checkout_id,
        ) from exc

    logger.info("Order placed", checkout_id=checkout_id, order_id=order_id)
    return order_id
