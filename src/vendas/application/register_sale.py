"""Application service: Register Sale use case.

Builds a SaleDraft from the requested lines, commits it, then writes the
stock decrements and the sale record inside one store transaction. If
either write were skipped, catalog and sales history would disagree with
no way to notice later, so they are never applied separately.
"""

from __future__ import annotations

import logging

from vendas.application.dto import SaleDTO, SaleItemSpec, sale_to_dto
from vendas.domain.exceptions import SaleRejectedError
from vendas.domain.masks import mask_date, mask_phone, mask_tax_id
from vendas.domain.repository.product_repository import ProductRepository
from vendas.domain.repository.record_store import RecordStore
from vendas.domain.repository.sale_repository import SaleRepository
from vendas.domain.service.sale_draft import SaleDraft

logger = logging.getLogger(__name__)


class RegisterSaleHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        store: RecordStore,
    ) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo
        self._store = store

    def handle(
        self,
        date: str,
        tax_id: str,
        phone: str,
        item_specs: list[SaleItemSpec],
    ) -> SaleDTO:
        """Record a sale and take its units out of stock.

        Customer fields may be typed with or without punctuation; they are
        masked before validation and stored in display form. Every problem
        found is reported together in a SaleRejectedError.
        """
        draft = SaleDraft(self._product_repo)
        draft.set_customer(
            date=mask_date(date),
            tax_id=mask_tax_id(tax_id),
            phone=mask_phone(phone),
        )

        problems = self._fill_draft(draft, item_specs)
        problems += draft.validate()
        if problems:
            raise SaleRejectedError(problems)

        commit = draft.commit()
        with self._store.transaction():
            for decrement in commit.decrements:
                self._product_repo.set_quantity(decrement.product_id, decrement.new_quantity)
            self._sale_repo.append(commit.sale)

        logger.info(
            "Recorded sale %s: %d line(s), total %s",
            commit.sale.id,
            len(commit.sale.items),
            commit.sale.total_amount,
        )
        return sale_to_dto(commit.sale)

    def _fill_draft(self, draft: SaleDraft, item_specs: list[SaleItemSpec]) -> list[str]:
        """Add each requested line; return what could not be satisfied."""
        requested: dict[str, int] = {}
        for spec in item_specs:
            requested[spec.product_id] = requested.get(spec.product_id, 0) + spec.quantity

        problems: list[str] = []
        for product_id, quantity in requested.items():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                problems.append(f"Product with ID '{product_id}' not found")
                continue
            if quantity <= 0:
                problems.append(f"Quantity for {product.name} must be positive")
                continue

            draft.add_product(product_id)
            draft.change_quantity(product_id, quantity - draft.quantity_of(product_id))
            available = draft.quantity_of(product_id)
            if available < quantity:
                problems.append(
                    f"Insufficient stock for {product.name} "
                    f"(requested {quantity}, have {available})"
                )
        return problems
