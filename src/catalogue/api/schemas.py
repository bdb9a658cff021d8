"""Pydantic response schemas for the Catalogue API."""

from pydantic import BaseModel


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    original_price: float | None = None
    discount_percentage: int | None = None
    category: str
    image: str | None = None
    images: list[str] = []
    rating: float
    review_count: int
    in_stock: bool
    stock_count: int
    featured: bool
    tags: list[str] = []

    @classmethod
    def from_product(cls, product):
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            original_price=product.original_price,
            discount_percentage=product.discount_percentage,
            category=product.category,
            image=product.image,
            images=product.image_list,
            rating=product.rating or 0.0,
            review_count=product.review_count or 0,
            in_stock=bool(product.in_stock),
            stock_count=product.stock_count or 0,
            featured=bool(product.featured),
            tags=product.tag_list,
        )


class ProductListResponse(BaseModel):
    count: int
    products: list[ProductResponse]


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    image: str
    product_count: int
