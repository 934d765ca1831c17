"""Application service: List Sales use case (query)."""

from __future__ import annotations

from vendas.application.dto import SaleDTO, sale_to_dto
from vendas.domain.repository.sale_repository import SaleRepository


class ListSalesHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self) -> list[SaleDTO]:
        """Every recorded sale, newest first."""
        sales = sorted(self._sale_repo.list_all(), key=lambda s: s.created_at, reverse=True)
        return [sale_to_dto(sale) for sale in sales]
