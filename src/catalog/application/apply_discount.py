"""Application service: Apply Discount use case.

The write protocol:

1. Check the discount ID format and percent range (no store access).
2. Read the product once.  Absent -> ``ProductNotFound``.
3. Run the full validation pipeline against that snapshot.
4. Attempt a single atomic insert.  The store's (product_id, discount_id)
   constraint decides whether this call attached the discount
   (``Success``) or another call already did (``AlreadyApplied``).

No lock is taken and nothing is shared between calls, so any number of
concurrent requests may run through one handler.  The count and
cumulative-percent limits are checked against the snapshot from step 2
and are therefore advisory: two different discounts validated at the
same moment can jointly pass the 100% ceiling.
"""

from __future__ import annotations

import logging

from catalog.domain.exceptions import StoreFailure
from catalog.domain.model.discount_result import (
    AlreadyApplied,
    DiscountResult,
    ProductNotFound,
    StoreError,
    Success,
    ValidationFailed,
)
from catalog.domain.model.product import Discount
from catalog.domain.repository.catalog_store import CatalogStore, WriteOutcome
from catalog.domain.service.discount_validation import (
    validate_discount_id,
    validate_discount_percent,
    validate_new_discount,
)

logger = logging.getLogger(__name__)


class ApplyDiscountHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(self, product_id: str, discount: Discount) -> DiscountResult:
        logger.info(
            "Applying discount '%s' (%s%%) to product '%s'",
            discount.discount_id,
            discount.percent,
            product_id,
        )

        check = validate_discount_id(discount.discount_id)
        if not check.ok:
            return self._invalid(product_id, check.reason)
        check = validate_discount_percent(discount.percent)
        if not check.ok:
            return self._invalid(product_id, check.reason)

        try:
            snapshot = self._store.get_product(product_id)
        except StoreFailure as exc:
            logger.error("Store error reading product '%s': %s", product_id, exc)
            return StoreError(str(exc))

        if snapshot is None:
            logger.warning("Product not found: %s", product_id)
            return ProductNotFound(product_id)

        check = validate_new_discount(discount, snapshot.discounts)
        if not check.ok:
            if check.code == "duplicate":
                logger.info(
                    "Discount '%s' already applied to product '%s'",
                    discount.discount_id,
                    product_id,
                )
                return AlreadyApplied(snapshot, discount.discount_id, discount.percent)
            return self._invalid(product_id, check.reason)

        return self._insert(product_id, discount)

    # --- Write ----------------------------------------------------------------

    def _insert(self, product_id: str, discount: Discount) -> DiscountResult:
        try:
            write = self._store.insert_discount(product_id, discount)
        except StoreFailure as exc:
            logger.error("Store error applying discount to product '%s': %s", product_id, exc)
            return StoreError(str(exc))

        if write.outcome is WriteOutcome.INSERTED:
            logger.info(
                "Discount '%s' successfully applied to product '%s'",
                discount.discount_id,
                product_id,
            )
            return Success(write.product)

        if write.outcome is WriteOutcome.DUPLICATE:
            logger.info(
                "Discount '%s' already applied to product '%s' (store constraint)",
                discount.discount_id,
                product_id,
            )
            try:
                current = self._store.get_product(product_id)
            except StoreFailure as exc:
                logger.error("Store error re-reading product '%s': %s", product_id, exc)
                return StoreError(str(exc))
            if current is None:
                return ProductNotFound(product_id)
            return AlreadyApplied(current, discount.discount_id, discount.percent)

        if write.outcome is WriteOutcome.MISSING_PRODUCT:
            logger.warning("Product '%s' vanished before the insert", product_id)
            return ProductNotFound(product_id)

        logger.error(
            "Store error applying discount to product '%s': %s", product_id, write.reason
        )
        return StoreError(f"Database error: {write.reason}")

    @staticmethod
    def _invalid(product_id: str, reason: str) -> ValidationFailed:
        logger.warning("Rejected discount for product '%s': %s", product_id, reason)
        return ValidationFailed(reason)
