"""Domain service: Discount validation pipeline.

Each check returns ``PASSED`` or a ``ValidationFailure`` with a
human-readable reason.  Nothing here touches the store: the existing
discounts are supplied by the caller, read immediately before the
write attempt.

The duplicate-id check in ``validate_new_discount`` is a fast path
only.  The store's (product_id, discount_id) uniqueness constraint is
what actually guarantees a discount is attached at most once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union

from catalog.domain.model.product import Discount
from catalog.domain.model.value_objects import PERCENT_DECIMAL_PLACES, decimal_places

MAX_DISCOUNT_ID_LENGTH = 100
MAX_DISCOUNTS_PER_PRODUCT = 20
MAX_TOTAL_DISCOUNT_PERCENT = Decimal("100")

_DISCOUNT_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class _Passed:
    """Singleton marker for a check that passed."""

    ok = True

    def __repr__(self) -> str:
        return "PASSED"


PASSED = _Passed()


@dataclass(frozen=True)
class ValidationFailure:
    reason: str
    code: str = "invalid"
    ok = False


ValidationResult = Union[_Passed, ValidationFailure]


def _fmt(value: Decimal) -> str:
    return f"{Decimal(value).normalize():f}"


def validate_discount_id(discount_id: str | None) -> ValidationResult:
    if discount_id is None or not discount_id.strip():
        return ValidationFailure("Discount ID cannot be blank or empty", code="blank_id")
    if len(discount_id) > MAX_DISCOUNT_ID_LENGTH:
        return ValidationFailure(
            f"Discount ID must be at most {MAX_DISCOUNT_ID_LENGTH} characters "
            f"(got {len(discount_id)})",
            code="id_too_long",
        )
    if not _DISCOUNT_ID_PATTERN.fullmatch(discount_id):
        return ValidationFailure(
            "Discount ID can only contain alphanumeric characters, "
            "hyphens, and underscores",
            code="id_format",
        )
    return PASSED


def validate_discount_percent(percent: Decimal) -> ValidationResult:
    if percent <= 0:
        return ValidationFailure(
            f"Discount percentage must be greater than 0 (got {_fmt(percent)})",
            code="percent_range",
        )
    if percent > MAX_TOTAL_DISCOUNT_PERCENT:
        return ValidationFailure(
            f"Discount percentage cannot exceed {_fmt(MAX_TOTAL_DISCOUNT_PERCENT)}% "
            f"(got {_fmt(percent)})",
            code="percent_range",
        )
    if decimal_places(percent) > PERCENT_DECIMAL_PLACES:
        return ValidationFailure(
            f"Discount percentage can have at most {PERCENT_DECIMAL_PLACES} decimal places "
            f"(got {_fmt(percent)})",
            code="percent_precision",
        )
    return PASSED


def validate_max_discounts(existing: Iterable[Discount]) -> ValidationResult:
    count = len(list(existing))
    if count >= MAX_DISCOUNTS_PER_PRODUCT:
        return ValidationFailure(
            f"Maximum of {MAX_DISCOUNTS_PER_PRODUCT} discounts allowed per product. "
            f"Current count: {count}",
            code="max_discounts",
        )
    return PASSED


def validate_cumulative_discount(
    existing: Iterable[Discount], new_percent: Decimal
) -> ValidationResult:
    current = sum((d.percent for d in existing), Decimal("0"))
    if current + new_percent > MAX_TOTAL_DISCOUNT_PERCENT:
        return ValidationFailure(
            f"Total discount would exceed {_fmt(MAX_TOTAL_DISCOUNT_PERCENT)}%. "
            f"Current total: {_fmt(current)}%, Adding: {_fmt(new_percent)}%",
            code="cumulative",
        )
    return PASSED


def validate_new_discount(
    discount: Discount, existing: Iterable[Discount]
) -> ValidationResult:
    """Run every check in order, stopping at the first failure.

    Order: id format, percent range, duplicate id, max count,
    cumulative sum.
    """
    existing = list(existing)

    result = validate_discount_id(discount.discount_id)
    if not result.ok:
        return result

    result = validate_discount_percent(discount.percent)
    if not result.ok:
        return result

    if any(d.discount_id == discount.discount_id for d in existing):
        return ValidationFailure(
            f"Discount '{discount.discount_id}' already applied to this product",
            code="duplicate",
        )

    result = validate_max_discounts(existing)
    if not result.ok:
        return result

    return validate_cumulative_discount(existing, discount.percent)
