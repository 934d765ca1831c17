"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from vendas.domain.exceptions import RuleViolationError
from vendas.domain.model.product import Product
from vendas.domain.model.value_objects import Money
from vendas.domain.repository.product_repository import ProductRepository

STATUS_FILTERS = ("all", "low", "out")


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    stock_value: str
    status: str  # "ok", "low" or "out"


@dataclass(frozen=True)
class InventoryDTO:
    lines: list[InventoryLineDTO]
    total_products: int
    out_of_stock: int
    low_stock: int
    total_value: str


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, status: str = "all", search: str = "") -> InventoryDTO:
        """Stock levels, optionally narrowed by status and a search term.

        The totals always describe the whole catalog, not just the rows
        that survived the filters.
        """
        if status not in STATUS_FILTERS:
            raise RuleViolationError(
                f"Unknown stock filter '{status}', expected one of {', '.join(STATUS_FILTERS)}"
            )

        products = self._product_repo.list_all()
        term = search.strip().lower()

        lines = [
            self._to_line(p)
            for p in products
            if self._matches(p, term) and status in ("all", self._status(p))
        ]

        total_value = sum((p.stock_value for p in products), Money.zero())

        return InventoryDTO(
            lines=lines,
            total_products=len(products),
            out_of_stock=sum(1 for p in products if p.quantity == 0),
            low_stock=sum(1 for p in products if p.is_low_stock),
            total_value=str(total_value),
        )

    @staticmethod
    def _status(product: Product) -> str:
        if product.quantity == 0:
            return "out"
        if product.is_low_stock:
            return "low"
        return "ok"

    @staticmethod
    def _matches(product: Product, term: str) -> bool:
        return not term or term in product.name.lower() or term in product.description.lower()

    def _to_line(self, product: Product) -> InventoryLineDTO:
        return InventoryLineDTO(
            product_id=product.id,
            product_name=product.name,
            quantity=product.quantity,
            unit_price=str(product.price),
            stock_value=str(product.stock_value),
            status=self._status(product),
        )
