"""Application service: Delete Product use case.

Recorded sales keep their own copy of the product name and price, so
deleting a product never alters sales history.
"""

from __future__ import annotations

import logging

from vendas.domain.exceptions import EntityNotFoundError
from vendas.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._product_repo.delete(product_id)
        logger.info("Deleted product %s '%s'", product.id, product.name)
