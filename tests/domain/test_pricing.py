"""Unit tests for the pricing domain service."""

from decimal import Decimal

import pytest

from catalog.domain.model.value_objects import Country
from catalog.domain.service.pricing import final_price, vat_rate


class TestVatRate:

    @pytest.mark.parametrize(
        "country, rate",
        [
            (Country.SWEDEN, Decimal("0.25")),
            (Country.GERMANY, Decimal("0.19")),
            (Country.FRANCE, Decimal("0.20")),
        ],
    )
    def test_fixed_table(self, country, rate):
        assert vat_rate(country) == rate

    def test_accepts_country_name_in_any_case(self):
        assert vat_rate("germany") == Decimal("0.19")

    @pytest.mark.parametrize("country", ["Norway", "", None])
    def test_unsupported_country_has_zero_rate(self, country):
        assert vat_rate(country) == Decimal("0")


class TestFinalPrice:

    def test_discount_then_vat(self):
        price = final_price(Decimal("100.0"), Decimal("10"), Country.SWEDEN)
        assert abs(price - Decimal("112.5")) <= Decimal("0.01")

    def test_no_discount(self):
        assert final_price(Decimal("100"), Decimal("0"), Country.GERMANY) == Decimal("119")

    def test_full_discount_is_free(self):
        assert final_price(Decimal("80"), Decimal("100"), Country.FRANCE) == Decimal("0")

    def test_unsupported_country_gets_no_vat(self):
        assert final_price(Decimal("50"), Decimal("20"), "Atlantis") == Decimal("40")

    def test_zero_base_price(self):
        assert final_price(Decimal("0"), Decimal("15"), Country.SWEDEN) == Decimal("0")
