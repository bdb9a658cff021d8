"""Shopping Cart aggregate: the per-session mapping of product to quantity.

Each line carries the product reference captured when it was added (name,
unit price, image and stock ceiling), so the cart can be priced and turned
into an order without reading the catalogue again. Lines are keyed by product
id and a product never appears twice.

Quantities always stay within ``[1, stock_count]``: additions accumulate and
are clamped, direct updates at or below zero remove the line.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering
from ordering.pricing import line_total, price_breakdown, to_money
from shared.errors import OutOfStock


def _clamp(quantity, stock_count):
    return max(1, min(quantity, stock_count))


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    stock_count = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def total(self):
        return line_total(self.unit_price, self.quantity)


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier()  # Nullable for guest carts
    session_id = String(max_length=255)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id=None, session_id=None):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            session_id=session_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self):
        return sum((item.total for item in self.items), to_money(0))

    @property
    def is_empty(self):
        return not self.items

    def price_breakdown(self):
        return price_breakdown(self.subtotal)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, unit_price, stock_count, quantity=1, image=None, in_stock=True):
        """Add ``quantity`` of a product, merging into an existing line."""
        if not in_stock or not stock_count or stock_count <= 0:
            raise OutOfStock(f"{name} is out of stock", product_id=str(product_id))

        now = datetime.now(UTC)
        existing = self.line_for(product_id)

        if existing:
            existing.stock_count = stock_count
            existing.quantity = _clamp(existing.quantity + quantity, stock_count)
            line_quantity = existing.quantity
        else:
            line_quantity = _clamp(quantity, stock_count)
            self.add_items(
                CartItem(
                    product_id=product_id,
                    name=name,
                    unit_price=unit_price,
                    image=image,
                    stock_count=stock_count,
                    quantity=line_quantity,
                    added_at=now,
                )
            )

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity_added=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_quantity(self, product_id, new_quantity):
        """Set a line's quantity. Zero or less removes it; absent lines are ignored."""
        item = self.line_for(product_id)
        if item is None:
            return

        if new_quantity <= 0:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        item.quantity = min(new_quantity, item.stock_count)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove a line. Removing a product that is not in the cart is a no-op."""
        item = self.line_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        lines = list(self.items)
        for item in lines:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                lines_removed=len(lines),
            )
        )
