"""Order pricing: the single breakdown shown in the cart, at checkout and stored on orders.

    shipping = 0 when subtotal >= 100, else 9.99
    tax      = subtotal * 8%, rounded half-up to cents
    total    = subtotal + shipping + tax
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

FREE_SHIPPING_THRESHOLD = Decimal("100.00")
FLAT_SHIPPING_RATE = Decimal("9.99")
TAX_RATE = Decimal("0.08")

_CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a float, int, str or Decimal amount to a cent-quantized Decimal."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity) -> Decimal:
    return to_money(unit_price) * quantity


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    @property
    def amount_to_free_shipping(self) -> Decimal:
        return max(Decimal("0.00"), FREE_SHIPPING_THRESHOLD - self.subtotal)

    def as_floats(self) -> dict:
        return {
            "subtotal": float(self.subtotal),
            "shipping": float(self.shipping),
            "tax": float(self.tax),
            "total": float(self.total),
        }


def price_breakdown(subtotal) -> PriceBreakdown:
    subtotal = to_money(subtotal)
    shipping = Decimal("0.00") if subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_RATE
    tax = to_money(subtotal * TAX_RATE)
    return PriceBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )
