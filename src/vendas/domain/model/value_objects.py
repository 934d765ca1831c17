"""Value Objects shared across the domain.

Every amount in the system is in reais, so ``Money`` carries no currency
code. Both types are frozen and refuse invalid values at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from vendas.domain.exceptions import RuleViolationError
from vendas.domain.formatters import format_currency


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative amount of Brazilian reais, kept as an exact Decimal.

    Amounts are not rounded on the way in: ``Money.of("10") / 3`` keeps
    every digit and only the display rounds to the cent.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise RuleViolationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise RuleViolationError(f"Money amount must be a finite number, got {self.amount}")
        if self.amount < 0:
            raise RuleViolationError(f"Money amount cannot be negative, got {self.amount}")

    @classmethod
    def of(cls, amount: str | int | Decimal) -> Money:
        """Build from text, an int or a Decimal, e.g. a stored ``"15.90"``."""
        try:
            return cls(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise RuleViolationError(f"Invalid money amount: {amount!r}") from exc

    @classmethod
    def zero(cls) -> Money:
        return cls(Decimal("0.00"))

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __radd__(self, other: int) -> Money:
        # Lets sum() start from its default 0.
        if other == 0:
            return self
        return NotImplemented

    def __mul__(self, units: int) -> Money:
        if not isinstance(units, int) or isinstance(units, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(units).__name__}")
        return Money(self.amount * units)

    def __truediv__(self, count: int) -> Money:
        if not isinstance(count, int) or count <= 0:
            raise TypeError("Can only divide Money by a positive int")
        return Money(self.amount / count)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return format_currency(self.amount)


@dataclass(frozen=True)
class Quantity:
    """Units on a sale line; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise RuleViolationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise RuleViolationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
