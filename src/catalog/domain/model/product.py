"""Product aggregate and its Discount entries.

A product is created once and never updated.  Its discounts are attached
through the discount application use case; the final price is never
stored and is always derived from the discounts currently attached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import Country, Money
from catalog.domain.service import pricing


@dataclass(frozen=True)
class Discount:
    """A caller-named discount.  Identity within a product is ``discount_id``."""

    discount_id: str
    percent: Decimal


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    This is an aggregate root.  ``discounts`` is kept ordered by
    ``discount_id`` so two reads of the same state compare equal.
    """

    id: str
    name: str
    base_price: Money
    country: Country
    discounts: tuple[Discount, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Product ID is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(self.country, Country):
            raise ValidationError(f"Unsupported country: {self.country!r}")
        ordered = tuple(sorted(self.discounts, key=lambda d: d.discount_id))
        object.__setattr__(self, "discounts", ordered)

    @property
    def total_discount_percent(self) -> Decimal:
        return sum((d.percent for d in self.discounts), Decimal("0"))

    @property
    def final_price(self) -> Decimal:
        return pricing.final_price(
            self.base_price.amount, self.total_discount_percent, self.country
        )

    def get_discount(self, discount_id: str) -> Discount | None:
        for d in self.discounts:
            if d.discount_id == discount_id:
                return d
        return None
