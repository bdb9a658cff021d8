"""Catalogue queries: filtering, sorting and lookup of products.

Filtering and sorting are pure functions over product sequences so they can
be applied to any result set. ``list_products`` reads the whole catalogue in
creation order and applies both.
"""

from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.category.categories import CATEGORIES
from catalogue.product.product import Product
from shared.errors import NotFound


class SortKey(Enum):
    FEATURED = "featured"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"
    NEWEST = "newest"


def filter_products(
    products,
    category=None,
    query=None,
    featured=None,
    categories=None,
    min_price=None,
    max_price=None,
):
    """Return the products matching every supplied criterion."""
    result = list(products)

    if query:
        result = [p for p in result if p.matches_query(query)]
    if featured:
        result = [p for p in result if p.featured]
    if category:
        result = [p for p in result if p.category == category]
    if categories:
        wanted = set(categories)
        result = [p for p in result if p.category in wanted]
    if min_price is not None:
        result = [p for p in result if p.price >= min_price]
    if max_price is not None:
        result = [p for p in result if p.price <= max_price]

    return result


def sort_products(products, key=SortKey.FEATURED):
    """Order products by ``key``. Every ordering is stable."""
    key = SortKey(key)

    if key == SortKey.PRICE_ASC:
        return sorted(products, key=lambda p: p.price)
    if key == SortKey.PRICE_DESC:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if key == SortKey.RATING:
        return sorted(products, key=lambda p: p.rating or 0.0, reverse=True)
    if key == SortKey.NEWEST:
        return sorted(products, key=lambda p: p.created_at, reverse=True)
    return sorted(products, key=lambda p: not p.featured)


def all_products():
    """Every product in the catalogue, oldest first."""
    return current_domain.repository_for(Product)._dao.query.order_by("created_at").limit(None).all().items


def list_products(sort=SortKey.FEATURED, **filters):
    return sort_products(filter_products(all_products(), **filters), sort)


def get_product(product_id):
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound(f"Product {product_id} not found", product_id=product_id) from None


def related_products(product_id, limit=4):
    """Other products in the same category, in catalogue order."""
    product = get_product(product_id)
    related = [p for p in all_products() if p.category == product.category and p.id != product.id]
    return related[:limit]


def list_categories():
    """Static categories annotated with the number of products in each."""
    products = all_products()
    return [
        {
            "id": category.id,
            "name": category.name,
            "description": category.description,
            "image": category.image,
            "product_count": sum(1 for p in products if p.category == category.id),
        }
        for category in CATEGORIES
    ]
