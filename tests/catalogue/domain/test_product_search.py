"""Tests for the pure filtering and sorting functions."""

from datetime import UTC, datetime, timedelta

import pytest
from catalogue.product.product import Product
from catalogue.product.search import SortKey, filter_products, sort_products

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture()
def products():
    rows = [
        ("Headphones", 299.99, "electronics", True, 4.8, ["audio"]),
        ("Speaker", 129.99, "electronics", False, 4.5, ["audio", "portable"]),
        ("T-Shirt", 45.00, "clothing", True, 4.7, ["organic"]),
        ("Lamp", 89.99, "home-garden", False, 4.7, ["lighting"]),
        ("Wallet", 69.99, "accessories", False, 4.8, ["leather"]),
    ]
    return [
        Product.create(
            id=f"p{index}",
            name=name,
            price=price,
            category=category,
            featured=featured,
            rating=rating,
            tags=tags,
            stock_count=10,
            created_at=_EPOCH + timedelta(minutes=index),
        )
        for index, (name, price, category, featured, rating, tags) in enumerate(rows)
    ]


def _names(products):
    return [p.name for p in products]


class TestFilterProducts:
    def test_no_criteria_returns_everything(self, products):
        assert len(filter_products(products)) == 5

    def test_filter_by_category(self, products):
        assert _names(filter_products(products, category="electronics")) == ["Headphones", "Speaker"]

    def test_filter_by_query_matches_tags(self, products):
        assert _names(filter_products(products, query="AUDIO")) == ["Headphones", "Speaker"]

    def test_filter_featured(self, products):
        assert _names(filter_products(products, featured=True)) == ["Headphones", "T-Shirt"]

    def test_filter_by_category_set(self, products):
        result = filter_products(products, categories=["clothing", "accessories"])
        assert _names(result) == ["T-Shirt", "Wallet"]

    def test_price_range_is_inclusive(self, products):
        result = filter_products(products, min_price=69.99, max_price=129.99)
        assert _names(result) == ["Speaker", "Lamp", "Wallet"]

    def test_criteria_combine_with_and(self, products):
        result = filter_products(products, category="electronics", query="portable")
        assert _names(result) == ["Speaker"]

    def test_no_matches(self, products):
        assert filter_products(products, query="nothing-like-this") == []


class TestSortProducts:
    def test_featured_first_keeps_relative_order(self, products):
        assert _names(sort_products(products)) == ["Headphones", "T-Shirt", "Speaker", "Lamp", "Wallet"]

    def test_price_ascending(self, products):
        assert _names(sort_products(products, SortKey.PRICE_ASC)) == [
            "T-Shirt",
            "Wallet",
            "Lamp",
            "Speaker",
            "Headphones",
        ]

    def test_price_descending(self, products):
        assert _names(sort_products(products, "price-desc"))[0] == "Headphones"

    def test_rating_descending_is_stable(self, products):
        assert _names(sort_products(products, SortKey.RATING)) == [
            "Headphones",
            "Wallet",
            "T-Shirt",
            "Lamp",
            "Speaker",
        ]

    def test_newest_first(self, products):
        assert _names(sort_products(products, SortKey.NEWEST)) == [
            "Wallet",
            "Lamp",
            "T-Shirt",
            "Speaker",
            "Headphones",
        ]

    def test_unknown_key_is_rejected(self, products):
        with pytest.raises(ValueError):
            sort_products(products, "alphabetical")
