"""Application service: Add Product use case.

Catalog seeding is assumed to be single-writer; a duplicate ID is
reported by the store as DuplicateEntityError.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from catalog.application.dto import ProductDTO
from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Country, Money
from catalog.domain.repository.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(
        self,
        product_id: str,
        name: str,
        base_price: str | float | int | Decimal,
        country: str,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        normalized = Country.parse(country)
        if normalized is None:
            raise ValidationError(
                f"Unsupported country: {country}. "
                f"Supported countries: {', '.join(Country.supported())}"
            )

        product = Product(
            id=(product_id or "").strip(),
            name=(name or "").strip(),
            base_price=Money.of(base_price),
            country=normalized,
        )
        logger.info("Creating product: %s", product.id)
        self._store.add_product(product)
        return ProductDTO.from_product(product)
