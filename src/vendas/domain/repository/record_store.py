"""Abstract key-value store holding whole-collection snapshots.

Each key maps to a JSON-compatible value that is always read and
written in full. Implementations must never let a storage failure
escape: reads fall back to the default, failed writes are logged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Callable


class RecordStore(ABC):

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the last value written under *key*, or *default*."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Replace the value stored under *key*."""

    def update(self, key: str, fn: Callable[[Any], Any], default: Any = None) -> Any:
        """Replace the value under *key* with ``fn(current)`` and return it."""
        value = fn(self.get(key, default))
        self.set(key, value)
        return value

    @abstractmethod
    def transaction(self) -> AbstractContextManager[RecordStore]:
        """Group several writes so they are applied together or not at all."""
