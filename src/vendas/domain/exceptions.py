"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Field validation failures are *not* raised one at a time: they are collected
and carried by ``InvalidProductError`` / ``SaleRejectedError`` so every
problem can be shown at once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vendas.domain.model.validation import ValidationError


class DomainException(Exception):
    """Base class for all domain errors."""


class RuleViolationError(DomainException):
    """A business invariant would be broken by the requested change."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidProductError(DomainException):
    """A product candidate failed one or more field rules."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))


class SaleRejectedError(DomainException):
    """A sale draft failed validation at commit time."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))
