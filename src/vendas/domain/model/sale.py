"""Sale aggregate — an immutable record of goods sold to one customer.

A Sale owns its line items. Both are frozen once created: the product
name and unit price are copied at sale time so later catalog edits never
rewrite history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from vendas.domain.exceptions import RuleViolationError
from vendas.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Customer:
    """The buyer, embedded in each sale. There is no customer registry."""

    tax_id: str  # CPF, as displayed (999.999.999-99)
    phone: str


@dataclass(frozen=True)
class SaleItem:
    """One product line with its price snapshot."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at sale time

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value

    def with_quantity(self, quantity: int) -> SaleItem:
        return SaleItem(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=Quantity(quantity),
            unit_price=self.unit_price,
        )


@dataclass(frozen=True)
class StockDecrement:
    """New stock level for a product after a sale has been applied."""

    product_id: str
    new_quantity: int


@dataclass(frozen=True)
class Sale:
    """Aggregate root for recorded sales.

    Use ``Sale.create()`` for new sales. The plain constructor is used by
    the repository to reconstitute persisted records.
    """

    id: str
    date: str  # as entered, DD/MM/AAAA
    customer: Customer
    items: tuple[SaleItem, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(sale_id: str, date: str, customer: Customer, items: list[SaleItem]) -> Sale:
        if not items:
            raise RuleViolationError("A sale must contain at least one item")
        product_ids = [item.product_id for item in items]
        if len(set(product_ids)) != len(product_ids):
            raise RuleViolationError("A sale cannot list the same product twice")
        return Sale(id=sale_id, date=date, customer=customer, items=tuple(items))

    @property
    def total_amount(self) -> Money:
        return sum((item.total_price for item in self.items), Money.zero())

    @property
    def units(self) -> int:
        return sum(item.quantity.value for item in self.items)


@dataclass(frozen=True)
class SaleCommit:
    """Everything a caller must apply, together, to record a sale."""

    sale: Sale
    decrements: tuple[StockDecrement, ...]
