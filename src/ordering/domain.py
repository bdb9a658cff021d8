"""Ordering bounded context: Shopping Cart, Checkout and the Order Ledger.

Handles the per-session shopping cart, the multi-step checkout that turns a
cart into an order, and the ledger of placed orders.
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
