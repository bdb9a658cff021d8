"""Checkout step commands: start, shipping, payment and stepping back."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.checkout.checkout import CheckoutSession
from ordering.domain import ordering
from ordering.shared.address import ADDRESS_FIELDS

logger = structlog.get_logger(__name__)


@ordering.command(part_of="CheckoutSession")
class StartCheckout:
    cart_id = Identifier(required=True)
    customer_id = Identifier()


@ordering.command(part_of="CheckoutSession")
class SubmitShipping:
    # Fields are optional here so blank ones reach the per-field form messages
    checkout_id = Identifier(required=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    email = String(max_length=254)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@ordering.command(part_of="CheckoutSession")
class SubmitPayment:
    checkout_id = Identifier(required=True)
    card_number = String(max_length=32)
    card_name = String(max_length=255)
    expiry = String(max_length=10)
    cvv = String(max_length=10)


@ordering.command(part_of="CheckoutSession")
class GoBack:
    checkout_id = Identifier(required=True)


@ordering.command_handler(part_of=CheckoutSession)
class CheckoutStepsHandler:
    @handle(StartCheckout)
    def start_checkout(self, command):
        cart = current_domain.repository_for(ShoppingCart).get(command.cart_id)
        checkout = CheckoutSession.start(cart, customer_id=command.customer_id)
        current_domain.repository_for(CheckoutSession).add(checkout)

        logger.info("Checkout started", checkout_id=str(checkout.id), cart_id=command.cart_id)
        return str(checkout.id)

    @handle(SubmitShipping)
    def submit_shipping(self, command):
        repo = current_domain.repository_for(CheckoutSession)
        checkout = repo.get(command.checkout_id)
        checkout.submit_shipping(**{name: getattr(command, name) for name in ADDRESS_FIELDS})
        repo.add(checkout)

    @handle(SubmitPayment)
    def submit_payment(self, command):
        repo = current_domain.repository_for(CheckoutSession)
        checkout = repo.get(command.checkout_id)
        checkout.submit_payment(
            card_number=command.card_number,
            card_name=command.card_name,
            expiry=command.expiry,
            cvv=command.cvv,
        )
        repo.add(checkout)

    @handle(GoBack)
    def go_back(self, command):
        repo = current_domain.repository_for(CheckoutSession)
        checkout = repo.get(command.checkout_id)
        checkout.go_back()
        repo.add(checkout)
