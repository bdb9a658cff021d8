"""Order aggregate: an immutable record of a placed order with a mutable status.

Items, pricing, shipping address and payment descriptor are snapshots taken
at placement time; later catalogue or cart changes never reach them. Only the
status changes afterwards, and only through an admin actor.

Status values:
    pending → processing → shipped → delivered
    cancelled (from any non-terminal state)

Transitions are not enforced: any status may be set from any other. Terminal
states (delivered, cancelled) are informational.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.pricing import to_money
from ordering.shared.address import ShippingAddress


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def mask_card_number(card_number):
    """``****`` followed by the last four digits of the card."""
    digits = "".join(ch for ch in str(card_number) if ch.isdigit())
    return f"****{digits[-4:]}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class OrderPricing:
    """Financial summary locked at placement: subtotal, shipping, tax and total."""

    subtotal = Float(required=True, min_value=0.0)
    shipping = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)

    @invariant.post
    def total_must_equal_components(self):
        expected = to_money(self.subtotal) + to_money(self.shipping or 0) + to_money(self.tax or 0)
        if to_money(self.total) != expected:
            raise ValidationError({"total": [f"Total {self.total} does not equal subtotal + shipping + tax ({expected})"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A snapshot of one cart line at the moment the order was placed."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, items_data, breakdown, shipping_address, payment_method):
        """Create a pending order from item snapshots and a price breakdown.

        Args:
            customer_id: The authenticated user placing the order.
            items_data: List of dicts with product_id, product_name, unit_price,
                        quantity and image.
            breakdown: ``ordering.pricing.PriceBreakdown`` for the items.
            shipping_address: ``ShippingAddress`` value object or dict.
            payment_method: Masked payment descriptor.
        """
        if not customer_id:
            raise ValidationError({"customer_id": ["An authenticated user is required to place an order"]})
        if not items_data:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        if isinstance(shipping_address, dict):
            shipping_address = ShippingAddress(**shipping_address)

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            items=[OrderItem(**item) for item in items_data],
            pricing=OrderPricing(**breakdown.as_floats()),
            status=OrderStatus.PENDING.value,
            shipping_address=shipping_address,
            payment_method=payment_method,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=sum(item.quantity for item in order.items),
                total=order.pricing.total,
                placed_at=now,
            )
        )
        return order

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status, changed_by=None):
        """Set the status to any known value."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError(
                {"status": [f"Unknown order status {new_status!r}. Expected one of: {', '.join(s.value for s in OrderStatus)}"]}
            ) from None

        previous = self.status
        self.status = target.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_by=changed_by,
                changed_at=now,
            )
        )
