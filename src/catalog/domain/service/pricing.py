"""Domain service: Pricing.

Owns the country -> VAT rate table and the final price formula::

    final = base * (1 - total_discount / 100) * (1 + vat_rate(country))

The function is total: an unsupported country is priced with a zero
VAT rate instead of failing.  Callers are expected to have normalised
the country before getting here.
"""

from __future__ import annotations

from decimal import Decimal

from catalog.domain.model.value_objects import Country

VAT_RATES: dict[Country, Decimal] = {
    Country.SWEDEN: Decimal("0.25"),
    Country.GERMANY: Decimal("0.19"),
    Country.FRANCE: Decimal("0.20"),
}

_HUNDRED = Decimal("100")


def vat_rate(country: Country | str | None) -> Decimal:
    """Return the VAT rate for a country, or 0 if it is not supported."""
    if not isinstance(country, Country):
        country = Country.parse(country) if isinstance(country, str) else None
    if country is None:
        return Decimal("0")
    return VAT_RATES.get(country, Decimal("0"))


def final_price(
    base_price: Decimal,
    total_discount_percent: Decimal,
    country: Country | str | None,
) -> Decimal:
    """Apply the cumulative discount, then VAT.  No rounding is applied."""
    discounted = Decimal(base_price) * (1 - Decimal(total_discount_percent) / _HUNDRED)
    return discounted * (1 + vat_rate(country))
