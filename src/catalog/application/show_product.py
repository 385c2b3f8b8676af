"""Application service: Show Product use case (query)."""

from __future__ import annotations

from catalog.application.dto import ProductDTO
from catalog.domain.repository.catalog_store import CatalogStore


class ShowProductHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(self, product_id: str) -> ProductDTO | None:
        product = self._store.get_product(product_id)
        if product is None:
            return None
        return ProductDTO.from_product(product)
