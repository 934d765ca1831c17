"""Input masks applied on every keystroke.

Each mask strips the whole input down to its digits and rebuilds the
display form from scratch, so edits in the middle of the text and
deletions never leave a broken mask behind. When the digits do not fit
the pattern (too many of them) the input is returned unchanged rather
than erased.
"""

from __future__ import annotations

import re
from decimal import Decimal

from vendas.domain.formatters import format_currency

_NON_DIGIT = re.compile(r"[^0-9]")

_TAX_ID = re.compile(r"^([0-9]{0,3})([0-9]{0,3})([0-9]{0,3})([0-9]{0,2})$")
_PHONE = re.compile(r"^([0-9]{0,2})([0-9]{0,5})([0-9]{0,4})$")
_DATE = re.compile(r"^([0-9]{0,2})([0-9]{0,2})([0-9]{0,4})$")


def _digits(value: str) -> str:
    return _NON_DIGIT.sub("", value)


def mask_tax_id(value: str) -> str:
    """CPF mask: ``999.999.999-99``."""
    match = _TAX_ID.match(_digits(value))
    if not match:
        return value

    p1, p2, p3, p4 = match.groups()
    result = p1
    if p2:
        result += f".{p2}"
    if p3:
        result += f".{p3}"
    if p4:
        result += f"-{p4}"
    return result


def mask_phone(value: str) -> str:
    """Phone mask: ``(99) 99999-9999``.

    The closing parenthesis appears only once the area code has exactly
    two digits.
    """
    match = _PHONE.match(_digits(value))
    if not match:
        return value

    area, part1, part2 = match.groups()
    result = ""
    if area:
        result += f"({area}"
    if len(area) == 2:
        result += ") "
    if part1:
        result += part1
    if part2:
        result += f"-{part2}"
    return result


def mask_date(value: str) -> str:
    """Date mask: ``DD/MM/AAAA``."""
    match = _DATE.match(_digits(value))
    if not match:
        return value

    day, month, year = match.groups()
    result = day
    if month:
        result += f"/{month}"
    if year:
        result += f"/{year}"
    return result


def mask_currency(value: str) -> str:
    """Calculator-style money entry: the digits typed so far are cents.

    ``"150"`` renders as ``R$ 1,50``; no digits at all renders as
    ``R$ 0,00``.
    """
    digits = _digits(value)
    if not digits:
        return format_currency(Decimal("0"))
    return format_currency(Decimal(int(digits)) / 100)
