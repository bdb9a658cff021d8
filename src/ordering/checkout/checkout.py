"""CheckoutSession aggregate: the multi-step path from a cart to an order.

Steps:
    shipping → payment → review → placed

``go_back`` walks one step back from payment or review. Placement is tracked
separately in ``placement`` (idle / in_flight) so a second submission while an
order is being created is rejected instead of producing a duplicate order.
Only the masked card number and the cardholder name are ever stored.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, ValueObject

from ordering.checkout.events import (
    CheckoutCompleted,
    CheckoutStarted,
    CheckoutSteppedBack,
    PaymentDetailsAccepted,
    PlacementFailed,
    PlacementStarted,
    ShippingDetailsAccepted,
)
from ordering.checkout.validation import normalize_card_number, payment_errors, shipping_errors
from ordering.domain import ordering
from ordering.order.order import mask_card_number
from ordering.shared.address import ADDRESS_FIELDS, ShippingAddress
from shared.errors import CheckoutInProgress, Forbidden


class CheckoutStep(Enum):
    SHIPPING = "shipping"
    PAYMENT = "payment"
    REVIEW = "review"
    PLACED = "placed"


class PlacementState(Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


_PREVIOUS_STEP = {
    CheckoutStep.PAYMENT.value: CheckoutStep.SHIPPING.value,
    CheckoutStep.REVIEW.value: CheckoutStep.PAYMENT.value,
}


@ordering.aggregate
class CheckoutSession:
    cart_id = Identifier(required=True)
    customer_id = Identifier()
    step = String(choices=CheckoutStep, default=CheckoutStep.SHIPPING.value)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(max_length=50)  # Masked, e.g. ****4242
    card_holder = String(max_length=255)
    placement = String(choices=PlacementState, default=PlacementState.IDLE.value)
    order_id = Identifier()
    last_error = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, cart, customer_id=None):
        """Open a checkout for a non-empty cart.

        A cart owned by a customer can only be checked out by that customer.
        """
        if cart.customer_id and str(cart.customer_id) != str(customer_id or ""):
            raise Forbidden("This cart belongs to another customer", cart_id=str(cart.id))
        if cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

        now = datetime.now(UTC)
        checkout = cls(
            cart_id=str(cart.id),
            customer_id=customer_id or cart.customer_id,
            step=CheckoutStep.SHIPPING.value,
            placement=PlacementState.IDLE.value,
            created_at=now,
            updated_at=now,
        )

        checkout.raise_(
            CheckoutStarted(
                checkout_id=str(checkout.id),
                cart_id=str(cart.id),
                customer_id=checkout.customer_id,
                started_at=now,
            )
        )
        return checkout

    @property
    def is_placing(self):
        return self.placement == PlacementState.IN_FLIGHT.value

    @property
    def is_placed(self):
        return self.step == CheckoutStep.PLACED.value

    def _ensure_editable(self, expected_step):
        if self.is_placing or self.is_placed:
            raise CheckoutInProgress(
                "This checkout is already being placed",
                checkout_id=str(self.id),
            )
        if self.step != expected_step.value:
            raise ValidationError({"step": [f"Checkout is on the {self.step} step, not {expected_step.value}"]})

    # -------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------
    def submit_shipping(self, **fields):
        self._ensure_editable(CheckoutStep.SHIPPING)

        errors = shipping_errors(fields)
        if errors:
            raise ValidationError(errors)

        self.shipping_address = ShippingAddress(**{name: str(fields[name]).strip() for name in ADDRESS_FIELDS})
        self.step = CheckoutStep.PAYMENT.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ShippingDetailsAccepted(
                checkout_id=str(self.id),
                city=self.shipping_address.city,
                country=self.shipping_address.country,
            )
        )

    def submit_payment(self, card_number, card_name, expiry, cvv):
        self._ensure_editable(CheckoutStep.PAYMENT)

        errors = payment_errors(card_number, card_name, expiry, cvv)
        if errors:
            raise ValidationError(errors)

        self.payment_method = mask_card_number(normalize_card_number(card_number))
        self.card_holder = card_name.strip()
        self.step = CheckoutStep.REVIEW.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentDetailsAccepted(
                checkout_id=str(self.id),
                payment_method=self.payment_method,
            )
        )

    def go_back(self):
        if self.is_placing or self.is_placed:
            raise CheckoutInProgress("This checkout is already being placed", checkout_id=str(self.id))

        previous = _PREVIOUS_STEP.get(self.step)
        if previous is None:
            raise ValidationError({"step": [f"Cannot go back from the {self.step} step"]})

        from_step = self.step
        self.step = previous
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CheckoutSteppedBack(
                checkout_id=str(self.id),
                from_step=from_step,
                to_step=previous,
            )
        )

    # -------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------
    def ensure_owned_by(self, customer_id):
        if self.customer_id and str(self.customer_id) != str(customer_id or ""):
            raise Forbidden("This checkout belongs to another customer", checkout_id=str(self.id))

    def begin_placement(self, customer_id=None):
        """Mark the checkout in flight on behalf of ``customer_id``.

        A guest checkout is adopted by the first signed-in customer to place it.
        """
        self.ensure_owned_by(customer_id)
        self._ensure_editable(CheckoutStep.REVIEW)

        now = datetime.now(UTC)
        if customer_id and not self.customer_id:
            self.customer_id = customer_id
        self.placement = PlacementState.IN_FLIGHT.value
        self.last_error = None
        self.updated_at = now

        self.raise_(PlacementStarted(checkout_id=str(self.id), started_at=now))

    def complete_placement(self, order_id, total=None):
        if not self.is_placing:
            raise ValidationError({"placement": ["No placement is in progress"]})

        now = datetime.now(UTC)
        self.order_id = order_id
        self.step = CheckoutStep.PLACED.value
        self.placement = PlacementState.IDLE.value
        self.updated_at = now

        self.raise_(
            CheckoutCompleted(
                checkout_id=str(self.id),
                order_id=order_id,
                total=total,
                completed_at=now,
            )
        )

    def fail_placement(self, reason):
        """Return to the review step with the placement idle."""
        now = datetime.now(UTC)
        self.step = CheckoutStep.REVIEW.value
        self.placement = PlacementState.IDLE.value
        self.last_error = (reason or "Order placement failed")[:500]
        self.updated_at = now

        self.raise_(
            PlacementFailed(
                checkout_id=str(self.id),
                reason=self.last_error,
                failed_at=now,
            )
        )
