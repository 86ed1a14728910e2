"""Price conversion tests — decimal major units ↔ integer cents."""

from decimal import Decimal

import pytest

from homelist.errors import ValidationError
from homelist.services.pricing import from_cents, to_cents


@pytest.mark.parametrize(
    "amount, cents",
    [
        ("2500.00", 250000),
        (2500, 250000),
        (Decimal("250000.5"), 25000050),
        (250000.5, 25000050),
        ("0.29", 29),
        (0.29, 29),
        ("0", 0),
        (" 12.34 ", 1234),
    ],
)
def test_to_cents(amount, cents):
    assert to_cents(amount) == cents


def test_half_cent_rounds_up():
    assert to_cents("0.005") == 1
    assert to_cents("10.125") == 1013
    assert to_cents("10.124") == 1012


@pytest.mark.parametrize("amount", ["abc", "", "NaN", "Infinity", "-Infinity"])
def test_non_numeric_rejected(amount):
    with pytest.raises(ValidationError, match="Price must be a number"):
        to_cents(amount)


def test_negative_rejected():
    with pytest.raises(ValidationError, match="cannot be negative"):
        to_cents("-1.00")


def test_from_cents_two_places():
    assert from_cents(250000) == Decimal("2500.00")
    assert str(from_cents(250000)) == "2500.00"
    assert str(from_cents(25000050)) == "250000.50"
    assert str(from_cents(0)) == "0.00"


def test_largest_bigint_accepted():
    assert to_cents("92233720368547758.07") == 2**63 - 1


@pytest.mark.parametrize("amount", ["92233720368547758.08", "100000000000000000"])
def test_beyond_bigint_rejected(amount):
    with pytest.raises(ValidationError, match="too large"):
        to_cents(amount)
