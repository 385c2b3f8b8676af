"""Outcomes of applying a discount to a product.

Every expected outcome is an explicit variant, never an exception:

- ``Success``          the discount was inserted by this call
- ``AlreadyApplied``   the discount id was already attached (idempotent success)
- ``ProductNotFound``  the referenced product does not exist
- ``ValidationFailed`` the request broke a rule and never reached the store
- ``StoreError``       the store could not complete the write (transient)

Each variant carries a ``kind`` tag so transports can dispatch on it
without isinstance chains.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union

from catalog.domain.model.product import Product


@dataclass(frozen=True)
class Success:
    product: Product
    kind: str = field(default="success", init=False)


@dataclass(frozen=True)
class AlreadyApplied:
    """The discount id is already attached; ``product`` is the stored state.

    ``requested_percent`` is what this caller asked for.  If a concurrent
    caller won with a different percent, ``percent_differs`` is True.
    """

    product: Product
    discount_id: str
    requested_percent: Decimal | None = None
    kind: str = field(default="already_applied", init=False)

    @property
    def persisted_percent(self) -> Decimal | None:
        discount = self.product.get_discount(self.discount_id)
        return discount.percent if discount is not None else None

    @property
    def percent_differs(self) -> bool:
        persisted = self.persisted_percent
        if persisted is None or self.requested_percent is None:
            return False
        return persisted != self.requested_percent


@dataclass(frozen=True)
class ProductNotFound:
    product_id: str
    kind: str = field(default="product_not_found", init=False)

    @property
    def reason(self) -> str:
        return f"Product with ID '{self.product_id}' does not exist"


@dataclass(frozen=True)
class ValidationFailed:
    reason: str
    kind: str = field(default="validation_error", init=False)


@dataclass(frozen=True)
class StoreError:
    reason: str
    kind: str = field(default="store_error", init=False)


DiscountResult = Union[Success, AlreadyApplied, ProductNotFound, ValidationFailed, StoreError]
