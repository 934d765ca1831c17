"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

One JsonRecordStore is shared by both repositories so that a sale and
its stock decrements can be written in the same transaction.
"""

from __future__ import annotations

from pathlib import Path

from vendas.infrastructure.persistence.json_record_store import JsonRecordStore
from vendas.infrastructure.persistence.store_product_repository import (
    StoreProductRepository,
)
from vendas.infrastructure.persistence.store_sale_repository import (
    StoreSaleRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_FILE = Path(__file__).resolve().parents[3] / "data" / "vendas.json"

_store: JsonRecordStore | None = None


def configure(data_file: Path | None = None) -> None:
    """Open the store backing every repository handed out afterwards."""
    global _store
    _store = JsonRecordStore(data_file or DEFAULT_DATA_FILE)


def record_store() -> JsonRecordStore:
    if _store is None:
        configure()
    return _store


def product_repository() -> StoreProductRepository:
    return StoreProductRepository(record_store())


def sale_repository() -> StoreSaleRepository:
    return StoreSaleRepository(record_store())
