"""Structural and checksum validation of user-entered fields."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Protocol

from vendas.domain.formatters import calendar_date
from vendas.domain.model.validation import ValidationError

_NON_DIGIT = re.compile(r"[^0-9]")
_DATE_SHAPE = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")

# Two-digit years are shifted into the 1900s by the date handling the
# stored records come from, so they never round-trip.
_MIN_YEAR = 100


class ProductFields(Protocol):
    name: str
    price: Decimal
    quantity: int
    description: str


def validate_tax_id(tax_id: str) -> bool:
    """Validate a CPF (Brazilian individual taxpayer number).

    Punctuation is ignored. Requires 11 digits, not all identical, whose
    last two digits match the mod-11 weighted-sum check digits.
    """
    digits = [int(ch) for ch in _NON_DIGIT.sub("", tax_id)]
    if len(digits) != 11:
        return False
    if len(set(digits)) == 1:
        return False

    return (
        _check_digit(digits[:9], first_weight=10) == digits[9]
        and _check_digit(digits[:10], first_weight=11) == digits[10]
    )


def _check_digit(digits: list[int], first_weight: int) -> int:
    total = sum(d * (first_weight - i) for i, d in enumerate(digits))
    remainder = (total * 10) % 11
    return 0 if remainder >= 10 else remainder


def validate_phone(phone: str) -> bool:
    """True for 10-digit landlines and 11-digit mobiles (area code included)."""
    return len(_NON_DIGIT.sub("", phone)) in (10, 11)


def validate_date(text: str) -> bool:
    """Validate a ``DD/MM/AAAA`` date.

    The shape must match exactly, and the calendar date built from the
    parts must come back with the same day, month and year, which rules
    out things like 31/04 or 29/02 in a non-leap year.
    """
    match = _DATE_SHAPE.fullmatch(text)
    if not match:
        return False

    day, month, year = (int(part) for part in match.groups())
    if year < _MIN_YEAR:
        return False
    try:
        built = calendar_date(day, month, year)
    except (ValueError, OverflowError):
        return False
    return (built.day, built.month, built.year) == (day, month, year)


def validate_product(candidate: ProductFields) -> list[ValidationError]:
    """Check every product rule and report all failures at once."""
    errors: list[ValidationError] = []

    if not candidate.name.strip():
        errors.append(ValidationError("name", "Product name is required"))

    if candidate.price <= 0:
        errors.append(ValidationError("price", "Price must be greater than zero"))

    if candidate.quantity < 0:
        errors.append(ValidationError("quantity", "Quantity cannot be negative"))

    if not candidate.description.strip():
        errors.append(ValidationError("description", "Description is required"))

    return errors
