"""Product aggregate.

Products live independently of sales. They have their own lifecycle:
they are added to the catalog, edited, restocked, drained by sales and
eventually deleted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from vendas.domain.exceptions import RuleViolationError
from vendas.domain.model.value_objects import Money

LOW_STOCK_THRESHOLD = 5


@dataclass(frozen=True)
class ProductCandidate:
    """Raw product fields as entered, before any rule has been checked."""

    name: str
    price: Decimal
    quantity: int
    description: str


@dataclass
class Product:
    """A product in the catalog.

    Aggregate root for everything that touches a product. ``created_at``
    is set once and never changes; every other field may be edited.
    """

    id: str
    name: str
    price: Money
    quantity: int
    description: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def set_quantity(self, quantity: int) -> None:
        """Replace the stock on hand. Stock can never go negative."""
        if quantity < 0:
            raise RuleViolationError(
                f"Stock for {self.name} cannot be negative (got {quantity})"
            )
        self.quantity = quantity

    def update(self, candidate: ProductCandidate) -> None:
        """Apply an already validated edit.

        Does NOT affect existing sales: they captured name and price
        when they were recorded.
        """
        self.name = candidate.name.strip()
        self.price = Money(candidate.price)
        self.set_quantity(candidate.quantity)
        self.description = candidate.description.strip()

    def to_candidate(self) -> ProductCandidate:
        return ProductCandidate(
            name=self.name,
            price=self.price.amount,
            quantity=self.quantity,
            description=self.description,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def stock_value(self) -> Money:
        return self.price * self.quantity

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.quantity <= LOW_STOCK_THRESHOLD
