"""Error kinds surfaced by the storefront contexts.

Field-level form and invariant failures use Protean's ``ValidationError``.
The classes below cover the remaining recoverable outcomes; each maps to a
single HTTP status in ``shared.utils.exception_handlers``.
"""


class StorefrontError(Exception):
    """Base class for storefront error kinds."""

    status_code = 400

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        return {"error": type(self).__name__, "message": self.message, **self.details}


class NotFound(StorefrontError):
    status_code = 404


class OutOfStock(StorefrontError):
    status_code = 409


class CheckoutInProgress(StorefrontError):
    status_code = 409


class OrderCreationFailed(StorefrontError):
    """Placement did not produce an order. The cart is preserved and a retry is allowed."""

    status_code = 502


class Forbidden(StorefrontError):
    status_code = 403


class Unauthenticated(StorefrontError):
    status_code = 401
