"""Abstract store for products and their discounts.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.

The store is the only shared mutable resource.  Uniqueness of
(product_id, discount_id) is its responsibility, and ``insert_discount``
reports how an insert attempt ended instead of leaking driver-specific
errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from catalog.domain.model.product import Discount, Product
from catalog.domain.model.value_objects import Country


class WriteOutcome(Enum):
    INSERTED = "inserted"
    DUPLICATE = "duplicate"
    MISSING_PRODUCT = "missing_product"
    FAILED = "failed"


@dataclass(frozen=True)
class DiscountWrite:
    """How a single discount insert attempt ended.

    ``product`` is the state re-read inside the inserting transaction and
    is only set for ``INSERTED``.  ``reason`` holds the driver message for
    ``FAILED``.
    """

    outcome: WriteOutcome
    product: Product | None = None
    reason: str = ""


class CatalogStore(ABC):

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return a product with its discounts, or None if not found."""

    @abstractmethod
    def list_by_country(self, country: Country) -> list[Product]:
        """Return every product of a country, ordered by product ID."""

    @abstractmethod
    def add_product(self, product: Product) -> None:
        """Persist a new product.  Raises DuplicateEntityError if the ID exists."""

    @abstractmethod
    def insert_discount(self, product_id: str, discount: Discount) -> DiscountWrite:
        """Atomically insert one discount row and re-read the product."""

    @abstractmethod
    def ping(self) -> None:
        """Raise StoreFailure if the store cannot be reached."""
