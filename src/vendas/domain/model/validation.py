"""Field-level validation result."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One failed rule, tagged with the field it applies to.

    Transient: produced by the validators, consumed by whoever displays
    the form. Never persisted.
    """

    field: str
    message: str
