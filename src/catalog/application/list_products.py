"""Application service: List Products by country (query)."""

from __future__ import annotations

import logging

from catalog.application.dto import ProductDTO
from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import Country
from catalog.domain.repository.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class ListProductsHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(self, country: str | None) -> list[ProductDTO]:
        """Return the products of a country, matched case-insensitively.

        Products without discounts are included with an empty list.
        """
        supported = ", ".join(Country.supported())
        if country is None or not country.strip():
            raise ValidationError(
                f"Country parameter is required. Supported countries: {supported}"
            )

        normalized = Country.parse(country)
        if normalized is None:
            raise ValidationError(
                f"Unsupported country: {country}. Supported countries: {supported}"
            )

        products = self._store.list_by_country(normalized)
        logger.debug("Returning %d products for country %s", len(products), normalized)
        return [ProductDTO.from_product(p) for p in products]
