"""Static category table.

Categories are fixed; only the number of products in each is derived from
the catalogue when read.
"""

from dataclasses import dataclass
from enum import Enum


class CategoryId(Enum):
    ELECTRONICS = "electronics"
    CLOTHING = "clothing"
    HOME_GARDEN = "home-garden"
    ACCESSORIES = "accessories"


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    description: str
    image: str


CATEGORIES = (
    Category(
        id=CategoryId.ELECTRONICS.value,
        name="Electronics",
        description="Latest gadgets and tech essentials",
        image="https://images.unsplash.com/photo-1498049794561-7780e7231661?w=600&q=80",
    ),
    Category(
        id=CategoryId.CLOTHING.value,
        name="Clothing",
        description="Stylish apparel for every occasion",
        image="https://images.unsplash.com/photo-1489987707025-afc232f7ea0f?w=600&q=80",
    ),
    Category(
        id=CategoryId.HOME_GARDEN.value,
        name="Home & Garden",
        description="Beautiful pieces for your living space",
        image="https://images.unsplash.com/photo-1616486338812-3dadae4b4ace?w=600&q=80",
    ),
    Category(
        id=CategoryId.ACCESSORIES.value,
        name="Accessories",
        description="Complete your look with premium accessories",
        image="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=600&q=80",
    ),
)


def category_by_id(category_id):
    return next((c for c in CATEGORIES if c.id == category_id), None)
