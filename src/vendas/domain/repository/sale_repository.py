"""Abstract repository for Sale aggregate. Sales are append-only."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vendas.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def get_by_id(self, sale_id: str) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        """Return every recorded sale, oldest first."""

    @abstractmethod
    def append(self, sale: Sale) -> None:
        """Record a new sale."""
