"""Application service: Update Product use case."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal

from vendas.domain.exceptions import EntityNotFoundError, InvalidProductError
from vendas.domain.formatters import parse_currency
from vendas.domain.model.product import Product
from vendas.domain.repository.product_repository import ProductRepository
from vendas.domain.validators import validate_product

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | Decimal | None = None,
        quantity: int | None = None,
        description: str | None = None,
    ) -> Product:
        """Edit any subset of a product's fields.

        The merged record is validated as a whole. ``id`` and
        ``created_at`` never change, and existing sales keep the name and
        price they were recorded with.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        changes: dict = {}
        if name is not None:
            changes["name"] = name
        if price is not None:
            changes["price"] = price if isinstance(price, Decimal) else parse_currency(price)
        if quantity is not None:
            changes["quantity"] = quantity
        if description is not None:
            changes["description"] = description

        candidate = replace(product.to_candidate(), **changes)
        errors = validate_product(candidate)
        if errors:
            raise InvalidProductError(errors)

        product.update(candidate)
        self._product_repo.save(product)
        logger.info("Updated product %s (%s)", product.id, ", ".join(changes) or "no changes")
        return product
