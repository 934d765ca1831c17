"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The sale draft only ever reads through it; writes come
from the application handlers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vendas.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, in insertion order."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Unknown IDs are ignored."""

    @abstractmethod
    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Replace the stock level of an existing product."""
