"""Price conversion between decimal major units and integer cents.

Decimal all the way: floats never touch the arithmetic, so 0.29 stays
29 cents. Half-cent inputs round half up (0.005 → 1 cent).
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from homelist.errors import ValidationError

CENTS_PER_UNIT = Decimal(100)
_WHOLE_CENT = Decimal(1)
_TWO_PLACES = Decimal("0.01")

# Largest value a BIGINT column holds
MAX_CENTS = 2**63 - 1


def to_cents(amount: Union[Decimal, int, float, str]) -> int:
    """Normalize a major-unit price to a non-negative integer of cents."""
    try:
        value = Decimal(str(amount).strip())
        cents = (value * CENTS_PER_UNIT).quantize(_WHOLE_CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a number")
    if not cents.is_finite():
        raise ValidationError("Price must be a number")
    if cents < 0:
        raise ValidationError("Price cannot be negative")
    if cents > MAX_CENTS:
        raise ValidationError("Price is too large")
    return int(cents)


def from_cents(cents: int) -> Decimal:
    """Integer cents back to a two-place major-unit Decimal."""
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(_TWO_PLACES)
