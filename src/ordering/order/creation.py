"""Order creation: command, handler and the ledger's single way in.

Pricing is never taken from the caller: ``build_order`` derives the breakdown
from the item snapshots so the stored total always matches its components.
Checkout placement and ``CreateOrder`` both go through ``build_order`` and
``record_order``.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.pricing import line_total, price_breakdown, to_money

logger = structlog.get_logger(__name__)


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


def price_items(items_data):
    """Shared pricing breakdown for a list of item snapshot dicts."""
    subtotal = sum(
        (line_total(item["unit_price"], item["quantity"]) for item in items_data),
        to_money(0),
    )
    return price_breakdown(subtotal)


def build_order(customer_id, items_data, shipping_address, payment_method):
    """A new, unsaved order priced from its item snapshots."""
    return Order.place(
        customer_id=customer_id,
        items_data=items_data,
        breakdown=price_items(items_data) if items_data else None,
        shipping_address=shipping_address,
        payment_method=payment_method,
    )


def record_order(order):
    """Append ``order`` to the ledger."""
    current_domain.repository_for(Order).add(order)
    logger.info(
        "Order created",
        order_id=str(order.id),
        customer_id=order.customer_id,
        total=order.pricing.total,
    )
    return str(order.id)


@ordering.command(part_of="Order")
class CreateOrder:
    customer_id = Identifier()
    items = Text(required=True)  # JSON: list of item snapshot dicts
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(max_length=50)


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        order = build_order(
            customer_id=command.customer_id,
            items_data=_loads(command.items) or [],
            shipping_address=_loads(command.shipping_address),
            payment_method=command.payment_method,
        )
        return record_order(order)
