"""RecordStore-backed implementation of SaleRepository."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from vendas.domain.exceptions import RuleViolationError
from vendas.domain.formatters import parse_timestamp
from vendas.domain.model.sale import Customer, Sale, SaleItem
from vendas.domain.model.value_objects import Money, Quantity
from vendas.domain.repository.record_store import RecordStore
from vendas.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)

SALES_KEY = "sales-records"


class StoreSaleRepository(SaleRepository):

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    # --- SaleRepository interface ---------------------------------------------

    def get_by_id(self, sale_id: str) -> Sale | None:
        for sale in self.list_all():
            if sale.id == sale_id:
                return sale
        return None

    def list_all(self) -> list[Sale]:
        sales: list[Sale] = []
        for raw in self._as_list(self._store.get(SALES_KEY, [])):
            try:
                sales.append(self._to_domain(raw))
            except (
                KeyError, TypeError, ValueError, AttributeError,
                InvalidOperation, RuleViolationError,
            ) as exc:
                logger.warning("Skipping malformed sale record %r: %s", raw, exc)
        return sales

    def append(self, sale: Sale) -> None:
        self._store.update(
            SALES_KEY,
            lambda records: self._as_list(records) + [self._to_raw(sale)],
            [],
        )

    # --- Store helpers --------------------------------------------------------

    @staticmethod
    def _as_list(records: Any) -> list:
        if isinstance(records, list):
            return records
        logger.error(
            "Stored %s holds %s instead of a list, reading it as empty",
            SALES_KEY,
            type(records).__name__,
        )
        return []

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "date": sale.date,
            "customer": {"cpf": sale.customer.tax_id, "phone": sale.customer.phone},
            "items": [
                {
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "quantity": item.quantity.value,
                    "unitPrice": str(item.unit_price.amount),
                    "totalPrice": str(item.total_price.amount),
                }
                for item in sale.items
            ],
            "totalAmount": str(sale.total_amount.amount),
            "createdAt": sale.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        items = tuple(
            SaleItem(
                product_id=i["productId"],
                product_name=i["productName"],
                quantity=Quantity(int(i["quantity"])),
                unit_price=Money(Decimal(str(i["unitPrice"]))),
            )
            for i in raw["items"]
        )
        sale = Sale(
            id=raw["id"],
            date=raw["date"],
            customer=Customer(tax_id=raw["customer"]["cpf"], phone=raw["customer"]["phone"]),
            items=items,
            created_at=parse_timestamp(raw["createdAt"]),
        )
        stored_total = raw.get("totalAmount")
        if stored_total is not None and Decimal(str(stored_total)) != sale.total_amount.amount:
            logger.warning(
                "Sale %s stored total %s differs from its items (%s)",
                sale.id,
                stored_total,
                sale.total_amount.amount,
            )
        return sale
