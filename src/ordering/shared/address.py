"""ShippingAddress value object shared by checkout sessions and orders."""

from protean.fields import String

from ordering.domain import ordering

ADDRESS_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "street",
    "city",
    "state",
    "zip_code",
    "country",
)


@ordering.value_object
class ShippingAddress:
    """Where an order ships, captured during checkout.

    Once recorded on an Order the address never changes, regardless of what
    the customer enters in later checkouts.
    """

    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)