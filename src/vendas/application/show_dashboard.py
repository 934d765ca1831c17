"""Application service: Show Dashboard use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from vendas.application.dto import ProductSalesDTO
from vendas.application.sales_summary import top_products, total_revenue
from vendas.domain.model.product import LOW_STOCK_THRESHOLD
from vendas.domain.repository.product_repository import ProductRepository
from vendas.domain.repository.sale_repository import SaleRepository

TOP_PRODUCTS_LIMIT = 5
LOW_STOCK_LIMIT = 5


@dataclass(frozen=True)
class LowStockDTO:
    product_name: str
    quantity: int


@dataclass(frozen=True)
class DashboardDTO:
    total_products: int
    total_sales: int
    revenue: str
    low_stock_count: int
    top_products: list[ProductSalesDTO]
    low_stock: list[LowStockDTO]


class ShowDashboardHandler:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo

    def handle(self) -> DashboardDTO:
        products = self._product_repo.list_all()
        sales = self._sale_repo.list_all()

        # Out-of-stock products count as low stock here.
        low = [p for p in products if p.quantity <= LOW_STOCK_THRESHOLD]

        return DashboardDTO(
            total_products=len(products),
            total_sales=len(sales),
            revenue=str(total_revenue(sales)),
            low_stock_count=len(low),
            top_products=top_products(sales, TOP_PRODUCTS_LIMIT),
            low_stock=[LowStockDTO(p.name, p.quantity) for p in low[:LOW_STOCK_LIMIT]],
        )
