"""Product creation: command and handler."""

import json

from protean import handle
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    product_id: Identifier()  # Optional; generated when absent
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    original_price: Float()
    category: String(required=True, max_length=50)
    image: String(max_length=500)
    images: Text()  # JSON array of image URLs
    rating: Float(default=0.0)
    review_count: Integer(default=0)
    in_stock: Boolean(default=True)
    stock_count: Integer(default=0)
    featured: Boolean(default=False)
    tags: Text()  # JSON array of tags
    created_at: DateTime()


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            id=command.product_id,
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            category=command.category,
            image=command.image,
            images=json.loads(command.images) if command.images else None,
            rating=command.rating,
            review_count=command.review_count,
            in_stock=command.in_stock,
            stock_count=command.stock_count,
            featured=command.featured,
            tags=json.loads(command.tags) if command.tags else None,
            created_at=command.created_at,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
