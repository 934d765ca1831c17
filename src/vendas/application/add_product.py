"""Application service: Add Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal

from vendas.domain.exceptions import InvalidProductError
from vendas.domain.formatters import generate_id, parse_currency
from vendas.domain.model.product import Product, ProductCandidate
from vendas.domain.model.value_objects import Money
from vendas.domain.repository.product_repository import ProductRepository
from vendas.domain.validators import validate_product

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str | Decimal,
        quantity: int,
        description: str,
    ) -> Product:
        """Add a new product to the catalog.

        *price* may be typed text such as ``"R$ 12,50"``; it goes through
        ``parse_currency`` so anything unreadable becomes zero and is then
        rejected by validation.
        """
        candidate = ProductCandidate(
            name=name,
            price=price if isinstance(price, Decimal) else parse_currency(price),
            quantity=quantity,
            description=description,
        )
        errors = validate_product(candidate)
        if errors:
            raise InvalidProductError(errors)

        product = Product(
            id=generate_id(),
            name=candidate.name.strip(),
            price=Money(candidate.price),
            quantity=candidate.quantity,
            description=candidate.description.strip(),
        )
        self._product_repo.save(product)
        logger.info("Added product %s '%s'", product.id, product.name)
        return product
