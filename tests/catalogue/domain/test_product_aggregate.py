"""Tests for the Product aggregate."""

import pytest
from catalogue.product.events import ProductAdded
from catalogue.product.product import Product
from protean.exceptions import ValidationError


def _product(**overrides):
    defaults = {
        "name": "Smart Watch Pro",
        "price": 449.99,
        "category": "electronics",
        "description": "Health monitoring and GPS",
        "stock_count": 32,
        "tags": ["smartwatch", "fitness"],
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_with_supplied_id(self):
        product = _product(id="e2")
        assert product.id == "e2"

    def test_create_generates_id(self):
        assert _product().id is not None

    def test_create_sets_created_at(self):
        assert _product().created_at is not None

    def test_create_raises_product_added(self):
        product = _product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.name == "Smart Watch Pro"
        assert event.stock_count == 32

    def test_primary_image_becomes_gallery(self):
        product = _product(image="https://img/1.jpg")
        assert product.image_list == ["https://img/1.jpg"]

    def test_first_gallery_image_becomes_primary(self):
        product = _product(images=["https://img/a.jpg", "https://img/b.jpg"])
        assert product.image == "https://img/a.jpg"

    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(category="garden-gnomes")

    def test_rating_above_five_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(rating=5.5)


class TestOriginalPrice:
    def test_original_price_must_exceed_price(self):
        with pytest.raises(ValidationError) as exc:
            _product(price=100.0, original_price=100.0)
        assert "original_price" in exc.value.messages

    def test_discount_percentage_rounds_to_whole_number(self):
        product = _product(price=299.99, original_price=349.99)
        assert product.discount_percentage == 14

    def test_no_discount_without_original_price(self):
        assert _product().discount_percentage is None


class TestPurchasable:
    def test_in_stock_with_units_is_purchasable(self):
        assert _product(in_stock=True, stock_count=3).is_purchasable

    def test_zero_stock_is_not_purchasable(self):
        assert not _product(in_stock=True, stock_count=0).is_purchasable

    def test_out_of_stock_flag_wins_over_count(self):
        assert not _product(in_stock=False, stock_count=10).is_purchasable


class TestMatchesQuery:
    def test_matches_name_case_insensitively(self):
        assert _product().matches_query("WATCH")

    def test_matches_description(self):
        assert _product().matches_query("gps")

    def test_matches_tag(self):
        assert _product().matches_query("fitness")

    def test_no_match(self):
        assert not _product().matches_query("sofa")
