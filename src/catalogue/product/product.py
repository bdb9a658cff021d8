"""Product aggregate root.

Products are immutable from the storefront's point of view. Images and tags
are stored as JSON text and exposed as lists.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.category.categories import CategoryId
from catalogue.domain import catalogue


def _load_list(raw):
    if not raw:
        return []
    if isinstance(raw, list):
        return raw
    return json.loads(raw)


@catalogue.aggregate
class Product:
    """A sellable item in the storefront catalogue."""

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    original_price: Float(min_value=0.0)
    category: String(required=True, choices=CategoryId)
    image: String(max_length=500)
    images: Text()  # JSON array of image URLs
    rating: Float(min_value=0.0, max_value=5.0, default=0.0)
    review_count: Integer(min_value=0, default=0)
    in_stock: Boolean(default=True)
    stock_count: Integer(min_value=0, default=0)
    featured: Boolean(default=False)
    tags: Text()  # JSON array of tag strings
    created_at: DateTime()

    @invariant.post
    def original_price_must_exceed_price(self):
        if self.original_price is not None and self.original_price <= self.price:
            raise ValidationError({"original_price": ["Original price must be greater than price"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        category,
        id=None,
        description=None,
        original_price=None,
        image=None,
        images=None,
        rating=0.0,
        review_count=0,
        in_stock=True,
        stock_count=0,
        featured=False,
        tags=None,
        created_at=None,
    ):
        from catalogue.product.events import ProductAdded

        images = list(images or ([image] if image else []))
        kwargs = {"id": id} if id else {}
        product = cls(
            **kwargs,
            name=name,
            description=description,
            price=price,
            original_price=original_price,
            category=category,
            image=image or (images[0] if images else None),
            images=json.dumps(images),
            rating=rating,
            review_count=review_count,
            in_stock=in_stock,
            stock_count=stock_count,
            featured=featured,
            tags=json.dumps(list(tags or [])),
            created_at=created_at or datetime.now(UTC),
        )

        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                stock_count=product.stock_count,
            )
        )
        return product

    @property
    def tag_list(self):
        return _load_list(self.tags)

    @property
    def image_list(self):
        return _load_list(self.images)

    @property
    def is_purchasable(self):
        return bool(self.in_stock) and (self.stock_count or 0) > 0

    @property
    def discount_percentage(self):
        """Whole-number saving against the original price, or None without one."""
        if not self.original_price:
            return None
        return round((self.original_price - self.price) / self.original_price * 100)

    def matches_query(self, query):
        """Case-insensitive substring match over name, description and tags."""
        needle = query.lower()
        if needle in (self.name or "").lower():
            return True
        if needle in (self.description or "").lower():
            return True
        return any(needle in tag.lower() for tag in self.tag_list)
