"""Domain events for the CheckoutSession aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="CheckoutSession")
class CheckoutStarted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    customer_id = Identifier()
    started_at = DateTime(required=True)


@ordering.event(part_of="CheckoutSession")
class ShippingDetailsAccepted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    city = String(max_length=100)
    country = String(max_length=100)


@ordering.event(part_of="CheckoutSession")
class PaymentDetailsAccepted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    payment_method = String(required=True, max_length=50)


@ordering.event(part_of="CheckoutSession")
class CheckoutSteppedBack:
    __version__ = 1

    checkout_id = Identifier(required=True)
    from_step = String(required=True)
    to_step = String(required=True)


@ordering.event(part_of="CheckoutSession")
class PlacementStarted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    started_at = DateTime(required=True)


@ordering.event(part_of="CheckoutSession")
class PlacementFailed:
    """Order placement failed; the checkout is back on the review step."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    reason = String(required=True)
    failed_at = DateTime(required=True)


@ordering.event(part_of="CheckoutSession")
class CheckoutCompleted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    order_id = Identifier(required=True)
    total = Float()
    completed_at = DateTime(required=True)
