"""Domain service: stock reconciliation for a sale being put together.

A ``SaleDraft`` collects line items while the user picks products and
keeps every line inside the stock that is available for it. It only
*reads* the catalog. Committing produces the finished ``Sale`` plus the
stock decrements; writing both back is left to the caller, which must
apply them as one unit.

Stock is checked twice: when a line is added or changed (clamping) and
again when the draft is validated for commit, against whatever the
catalog holds at that moment. The second check catches stock that went
down after the line was added.
"""

from __future__ import annotations

from enum import Enum

from vendas.domain.exceptions import RuleViolationError, SaleRejectedError
from vendas.domain.formatters import generate_id
from vendas.domain.model.product import Product
from vendas.domain.model.sale import (
    Customer,
    Sale,
    SaleCommit,
    SaleItem,
    StockDecrement,
)
from vendas.domain.model.value_objects import Money, Quantity
from vendas.domain.repository.product_repository import ProductRepository
from vendas.domain.validators import validate_date, validate_phone, validate_tax_id


class DraftState(Enum):
    EMPTY = "EMPTY"
    BUILDING = "BUILDING"
    VALIDATED = "VALIDATED"
    COMMITTED = "COMMITTED"


class SaleDraft:

    def __init__(self, catalog: ProductRepository) -> None:
        self._catalog = catalog
        self._items: list[SaleItem] = []
        self._date = ""
        self._tax_id = ""
        self._phone = ""
        self._validated = False
        self._committed = False

    # --- Read access ----------------------------------------------------------

    @property
    def state(self) -> DraftState:
        if self._committed:
            return DraftState.COMMITTED
        if self._validated:
            return DraftState.VALIDATED
        if self._items:
            return DraftState.BUILDING
        return DraftState.EMPTY

    @property
    def items(self) -> list[SaleItem]:
        return list(self._items)

    @property
    def total(self) -> Money:
        return sum((item.total_price for item in self._items), Money.zero())

    def quantity_of(self, product_id: str) -> int:
        line = self._find_line(product_id)
        return line.quantity.value if line else 0

    def available_products(self) -> list[Product]:
        """Products that can be freshly added (stock above zero)."""
        return [p for p in self._catalog.list_all() if p.quantity > 0]

    # --- Editing --------------------------------------------------------------

    def set_customer(
        self,
        date: str | None = None,
        tax_id: str | None = None,
        phone: str | None = None,
    ) -> None:
        self._assert_editable()
        if date is not None:
            self._date = date
        if tax_id is not None:
            self._tax_id = tax_id
        if phone is not None:
            self._phone = phone
        self._validated = False

    def add_product(self, product_id: str) -> None:
        """Add one unit of a product.

        A product that is unknown or out of stock is ignored. A product
        already in the draft gets one more unit, unless that would exceed
        its stock, in which case nothing happens.
        """
        self._assert_editable()
        product = self._catalog.get_by_id(product_id)
        if product is None or product.quantity <= 0:
            return

        line = self._find_line(product_id)
        if line is None:
            self._items.append(
                SaleItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(1),
                    unit_price=product.price,  # <-- price snapshot
                )
            )
        elif line.quantity.value < product.quantity:
            self._replace_line(line.with_quantity(line.quantity.value + 1))
        self._validated = False

    def change_quantity(self, product_id: str, delta: int) -> None:
        """Move a line's quantity by *delta*, clamped to ``[0, stock]``.

        A line that ends up at zero is dropped from the draft.
        """
        self._assert_editable()
        product = self._catalog.get_by_id(product_id)
        line = self._find_line(product_id)
        if product is None or line is None:
            return

        new_quantity = max(0, min(product.quantity, line.quantity.value + delta))
        if new_quantity == 0:
            self._items.remove(line)
        else:
            self._replace_line(line.with_quantity(new_quantity))
        self._validated = False

    def remove_item(self, product_id: str) -> None:
        self._assert_editable()
        self._items = [i for i in self._items if i.product_id != product_id]
        self._validated = False

    # --- Validation and commit ------------------------------------------------

    def validate(self) -> list[str]:
        """Return every reason the draft cannot be committed right now."""
        if self._committed:
            return ["Sale has already been recorded"]

        errors: list[str] = []

        if not validate_date(self._date):
            errors.append("Invalid date. Use the DD/MM/AAAA format")
        if not validate_tax_id(self._tax_id):
            errors.append("Invalid CPF")
        if not validate_phone(self._phone):
            errors.append("Invalid phone number")
        if not self._items:
            errors.append("Add at least one product to the sale")

        for line in self._items:
            product = self._catalog.get_by_id(line.product_id)
            if product is None or product.quantity < line.quantity.value:
                errors.append(f"Insufficient stock for {line.product_name}")

        self._validated = not errors
        return errors

    def commit(self) -> SaleCommit:
        """Finalize the draft.

        Raises SaleRejectedError with every validation message if the
        draft is not valid against the current catalog; the draft stays
        editable in that case.
        """
        errors = self.validate()
        if errors:
            raise SaleRejectedError(errors)

        decrements = tuple(
            StockDecrement(
                product_id=line.product_id,
                new_quantity=self._catalog.get_by_id(line.product_id).quantity
                - line.quantity.value,
            )
            for line in self._items
        )
        sale = Sale.create(
            sale_id=generate_id(),
            date=self._date,
            customer=Customer(tax_id=self._tax_id, phone=self._phone),
            items=list(self._items),
        )

        self._committed = True
        return SaleCommit(sale=sale, decrements=decrements)

    # --- Internal helpers -----------------------------------------------------

    def _find_line(self, product_id: str) -> SaleItem | None:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    def _replace_line(self, new_line: SaleItem) -> None:
        self._items = [
            new_line if item.product_id == new_line.product_id else item
            for item in self._items
        ]

    def _assert_editable(self) -> None:
        if self._committed:
            raise RuleViolationError("Sale has already been recorded")
