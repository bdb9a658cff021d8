"""Tests for the shared pricing breakdown."""

from decimal import Decimal

import pytest
from ordering.pricing import line_total, price_breakdown, to_money


class TestPriceBreakdown:
    def test_below_threshold_pays_flat_shipping(self):
        breakdown = price_breakdown(80)
        assert breakdown.subtotal == Decimal("80.00")
        assert breakdown.shipping == Decimal("9.99")
        assert breakdown.tax == Decimal("6.40")
        assert breakdown.total == Decimal("96.39")

    def test_above_threshold_ships_free(self):
        breakdown = price_breakdown(150)
        assert breakdown.shipping == Decimal("0.00")
        assert breakdown.tax == Decimal("12.00")
        assert breakdown.total == Decimal("162.00")

    def test_threshold_itself_ships_free(self):
        assert price_breakdown(100).shipping == Decimal("0.00")

    def test_just_below_threshold(self):
        assert price_breakdown("99.99").shipping == Decimal("9.99")

    def test_tax_rounds_to_cents(self):
        # 0.07 * 8% = 0.0056, 10.06 * 8% = 0.8048
        assert price_breakdown("0.07").tax == Decimal("0.01")
        assert price_breakdown("10.06").tax == Decimal("0.80")

    def test_empty_cart(self):
        breakdown = price_breakdown(0)
        assert breakdown.tax == Decimal("0.00")
        assert breakdown.total == Decimal("9.99")

    def test_total_is_sum_of_components(self):
        breakdown = price_breakdown("123.45")
        assert breakdown.total == breakdown.subtotal + breakdown.shipping + breakdown.tax

    @pytest.mark.parametrize(
        ("subtotal", "remaining"),
        [(80, "20.00"), (100, "0.00"), (250, "0.00"), ("99.01", "0.99")],
    )
    def test_amount_to_free_shipping(self, subtotal, remaining):
        assert price_breakdown(subtotal).amount_to_free_shipping == Decimal(remaining)

    def test_as_floats(self):
        assert price_breakdown(80).as_floats() == {
            "subtotal": 80.0,
            "shipping": 9.99,
            "tax": 6.4,
            "total": 96.39,
        }


class TestMoneyHelpers:
    def test_to_money_quantizes_floats(self):
        assert to_money(0.1 + 0.2) == Decimal("0.30")

    def test_line_total(self):
        assert line_total(19.99, 3) == Decimal("59.97")
