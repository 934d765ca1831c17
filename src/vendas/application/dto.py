"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money and dates are
pre-formatted for display.
"""

from __future__ import annotations

from dataclasses import dataclass

from vendas.domain.formatters import format_date
from vendas.domain.model.sale import Sale


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: which product and how many units."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class SaleLineDTO:
    """Output: a single sale line as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "R$ 15,00"
    line_total: str


@dataclass(frozen=True)
class SaleDTO:
    """Output: a complete sale as displayed to the user."""

    id: str
    date: str
    tax_id: str
    phone: str
    items: list[SaleLineDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class ProductSalesDTO:
    """Output: units and revenue sold for one product."""

    product_id: str
    product_name: str
    units: int
    revenue: str


def sale_to_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        date=sale.date,
        tax_id=sale.customer.tax_id,
        phone=sale.customer.phone,
        items=[
            SaleLineDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.total_price),
            )
            for item in sale.items
        ],
        total=str(sale.total_amount),
        created_at=format_date(sale.created_at),
    )
