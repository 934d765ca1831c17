"""Aggregations over recorded sales shared by the dashboard and reports."""

from __future__ import annotations

from collections.abc import Iterable

from vendas.application.dto import ProductSalesDTO
from vendas.domain.model.sale import Sale
from vendas.domain.model.value_objects import Money


def total_revenue(sales: Iterable[Sale]) -> Money:
    return sum((sale.total_amount for sale in sales), Money.zero())


def top_products(sales: Iterable[Sale], limit: int) -> list[ProductSalesDTO]:
    """Products ranked by units sold, best first.

    Lines are grouped by product id; the name shown is the one recorded
    on the first sale seen for that product.
    """
    names: dict[str, str] = {}
    units: dict[str, int] = {}
    revenue: dict[str, Money] = {}
    for sale in sales:
        for item in sale.items:
            names.setdefault(item.product_id, item.product_name)
            units[item.product_id] = units.get(item.product_id, 0) + item.quantity.value
            revenue[item.product_id] = revenue.get(item.product_id, Money.zero()) + item.total_price

    ranked = sorted(units, key=lambda pid: units[pid], reverse=True)[:limit]
    return [
        ProductSalesDTO(
            product_id=pid,
            product_name=names[pid],
            units=units[pid],
            revenue=str(revenue[pid]),
        )
        for pid in ranked
    ]
