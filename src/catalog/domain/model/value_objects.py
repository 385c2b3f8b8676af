"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from catalog.domain.exceptions import ValidationError

# Scale of the stored columns; values with more places are rejected, not rounded.
MONEY_DECIMAL_PLACES = 2
PERCENT_DECIMAL_PLACES = 4


def decimal_places(value: Decimal) -> int:
    """Number of significant digits after the decimal point."""
    exponent = value.normalize().as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def _to_decimal(raw: str | float | int | Decimal, what: str) -> Decimal:
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid {what}: {raw!r}")
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {what}: {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid {what}: {raw!r}")
    return value


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if decimal_places(self.amount) > MONEY_DECIMAL_PLACES:
            raise ValidationError(
                f"Money amount can have at most {MONEY_DECIMAL_PLACES} decimal places, "
                f"got {self.amount}"
            )

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(_to_decimal(amount, "money amount"))


@dataclass(frozen=True)
class Percent:
    """A percentage as a Decimal.

    Only the number format is checked here.  Range rules (greater than
    zero, at most 100) live in the discount validation pipeline so they
    can be reported as validation results rather than raised.
    """

    value: Decimal

    def __str__(self) -> str:
        return f"{self.value.normalize():f}%"

    @staticmethod
    def of(value: str | float | int | Decimal) -> Percent:
        return Percent(_to_decimal(value, "percentage"))


class Country(Enum):
    """Supported countries.  The value is the canonical (title-case) name."""

    SWEDEN = "Sweden"
    GERMANY = "Germany"
    FRANCE = "France"

    @classmethod
    def parse(cls, raw: str | None) -> Country | None:
        """Case-insensitive lookup; None for blank or unsupported input."""
        if raw is None or not raw.strip():
            return None
        wanted = raw.strip().lower()
        for country in cls:
            if country.value.lower() == wanted:
                return country
        return None

    @classmethod
    def supported(cls) -> list[str]:
        return [country.value for country in cls]

    def __str__(self) -> str:
        return self.value
