"""RecordStore-backed implementation of ProductRepository.

The whole catalog is one list stored under ``sales-products``; every
change rewrites the list.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from vendas.domain.exceptions import EntityNotFoundError, RuleViolationError
from vendas.domain.formatters import parse_timestamp
from vendas.domain.model.product import Product
from vendas.domain.model.value_objects import Money
from vendas.domain.repository.product_repository import ProductRepository
from vendas.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "sales-products"


class StoreProductRepository(ProductRepository):

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    def delete(self, product_id: str) -> None:
        products = self._load()
        if products.pop(product_id, None) is not None:
            self._persist(products)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        products = self._load()
        product = products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        product.set_quantity(quantity)
        self._persist(products)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "quantity": product.quantity,
            "description": product.description,
            "createdAt": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(str(raw["price"]))),
            quantity=int(raw["quantity"]),
            description=raw.get("description", ""),
            created_at=parse_timestamp(raw["createdAt"]),
        )

    # --- Store helpers --------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        products: dict[str, Product] = {}
        records = self._store.get(PRODUCTS_KEY, [])
        if not isinstance(records, list):
            logger.error(
                "Stored %s holds %s instead of a list, reading it as empty",
                PRODUCTS_KEY,
                type(records).__name__,
            )
            records = []

        for raw in records:
            try:
                product = self._to_domain(raw)
            except (
                KeyError, TypeError, ValueError, AttributeError,
                InvalidOperation, RuleViolationError,
            ) as exc:
                logger.warning("Skipping malformed product record %r: %s", raw, exc)
                continue
            products[product.id] = product
        return products

    def _persist(self, products: dict[str, Product]) -> None:
        self._store.set(PRODUCTS_KEY, [self._to_raw(p) for p in products.values()])
