"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the transports and the application layer
without exposing domain internals.  ``to_dict`` produces the wire
shape used by the products API.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from catalog.domain.model.product import Product

# Status a transport should answer with for each discount result kind.
HTTP_STATUS: dict[str, int] = {
    "success": 200,
    "already_applied": 409,
    "product_not_found": 404,
    "validation_error": 400,
    "store_error": 503,
}


@dataclass(frozen=True)
class DiscountDTO:
    discount_id: str
    percent: Decimal

    def to_dict(self) -> dict:
        return {"discountId": self.discount_id, "percent": float(self.percent)}


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product with its discounts and derived final price."""

    id: str
    name: str
    base_price: Decimal
    country: str
    discounts: list[DiscountDTO]
    final_price: Decimal

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            base_price=product.base_price.amount,
            country=product.country.value,
            discounts=[
                DiscountDTO(discount_id=d.discount_id, percent=d.percent)
                for d in product.discounts
            ],
            final_price=product.final_price,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "basePrice": float(self.base_price),
            "country": self.country,
            "discounts": [d.to_dict() for d in self.discounts],
            "finalPrice": float(self.final_price),
        }
