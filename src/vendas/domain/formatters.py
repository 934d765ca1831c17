"""Conversion between user-entered text and canonical values.

Brazilian conventions throughout: ``R$ 1.234,56`` for money and
``DD/MM/AAAA`` for dates. Parsing here is best-effort and never blocks
typing; validation lives in ``vendas.domain.validators``.
"""

from __future__ import annotations

import random
import re
import time
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_SYMBOL = "R$"

_CENT = Decimal("0.01")
_NOT_DIGIT_OR_COMMA = re.compile(r"[^0-9,]")
_NUMERIC_PREFIX = re.compile(r"[0-9]*\.?[0-9]*")
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


# --- Currency -----------------------------------------------------------------


def format_currency(amount: Decimal | int | float) -> str:
    """Render *amount* as BRL, e.g. ``R$ 1.234,56`` or ``-R$ 5,00``.

    Rounds half away from zero to whole cents.
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    cents = abs(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    # "1,234.56" -> "1.234,56"
    digits = f"{cents:,.2f}".translate(str.maketrans({",": ".", ".": ","}))
    sign = "-" if value < 0 and cents != 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {digits}"


def parse_currency(text: str) -> Decimal:
    """Best-effort parse of a currency string into a Decimal.

    Everything except digits and commas is dropped, the first comma
    becomes the decimal point and the longest numeric prefix is read.
    Anything unparseable yields ``Decimal("0")``; this never raises,
    because forms need a number on every keystroke.
    """
    cleaned = _NOT_DIGIT_OR_COMMA.sub("", text).replace(",", ".", 1)
    prefix = _NUMERIC_PREFIX.match(cleaned).group()
    if not any(ch.isdigit() for ch in prefix):
        return Decimal("0")
    try:
        return Decimal(prefix)
    except InvalidOperation:
        return Decimal("0")


# --- Dates --------------------------------------------------------------------


def format_date(value: date | datetime | str) -> str:
    """Render a date, datetime or ISO-8601 string as ``DD/MM/AAAA``."""
    if isinstance(value, str):
        value = parse_timestamp(value)
    return value.strftime("%d/%m/%Y")


def parse_timestamp(text: str) -> datetime:
    """Read an ISO-8601 timestamp as an aware datetime.

    A trailing ``Z`` is accepted, and a timestamp without an offset is
    taken to be UTC.
    """
    moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def calendar_date(day: int, month: int, year: int) -> date:
    """Build a date, normalising out-of-range day and month values.

    Day 0 is the last day of the previous month, month 13 is January of
    the following year, and so on. Raises ``ValueError`` only when the
    result falls outside the supported year range.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def parse_date(text: str) -> str:
    """Convert ``DD/MM/AAAA`` to an ISO-8601 UTC midnight timestamp.

    The components are not validated: out-of-range values are normalised
    by ``calendar_date``. Call ``validate_date`` first.
    """
    day, month, year = text.split("/")
    result = calendar_date(int(day), int(month), int(year))
    return datetime(result.year, result.month, result.day, tzinfo=timezone.utc).isoformat()


# --- Identifiers --------------------------------------------------------------


def generate_id() -> str:
    """Return an id that is unique within the process with high probability.

    Base-36 millisecond timestamp followed by a random base-36 suffix.
    Not suitable for anything security related.
    """
    millis = int(time.time() * 1000)
    return _to_base36(millis) + _to_base36(random.getrandbits(52))


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    chars = []
    while number:
        number, rem = divmod(number, 36)
        chars.append(_BASE36_DIGITS[rem])
    return "".join(reversed(chars))
