"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Query

from catalogue.api.schemas import CategoryResponse, ProductListResponse, ProductResponse
from catalogue.product.search import SortKey, get_product, list_categories, list_products, related_products

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def search_products(
    category: str | None = None,
    categories: list[str] | None = Query(default=None),
    q: str | None = None,
    featured: bool | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    sort: SortKey = SortKey.FEATURED,
) -> ProductListResponse:
    products = list_products(
        sort=sort,
        category=category,
        categories=categories,
        query=q,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
    )
    return ProductListResponse(
        count=len(products),
        products=[ProductResponse.from_product(p) for p in products],
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.get("/{product_id}/related", response_model=ProductListResponse)
async def product_related(product_id: str, limit: int = Query(default=4, ge=1, le=20)) -> ProductListResponse:
    products = related_products(product_id, limit=limit)
    return ProductListResponse(
        count=len(products),
        products=[ProductResponse.from_product(p) for p in products],
    )


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def categories_with_counts() -> list[CategoryResponse]:
    return [CategoryResponse(**category) for category in list_categories()]
