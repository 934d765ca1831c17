"""CLI commands for the Sale aggregate."""

from __future__ import annotations

from datetime import date

import click

from vendas.application.dto import SaleDTO, SaleItemSpec
from vendas.application.list_sales import ListSalesHandler
from vendas.application.register_sale import RegisterSaleHandler
from vendas.domain.exceptions import DomainException, SaleRejectedError
from vendas.domain.formatters import format_date
from vendas.infrastructure.bootstrap import (
    product_repository,
    record_store,
    sale_repository,
)


def _parse_items(raw: str) -> list[SaleItemSpec]:
    """Parse 'ID:3,ID:5' into SaleItemSpec list."""
    specs: list[SaleItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(SaleItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a sale."""
    click.echo(f"Sale {dto.id}  (date {dto.date}, recorded {dto.created_at})")
    click.echo(f"Customer: CPF {dto.tax_id}  phone {dto.phone}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Sale Total':<30} {dto.total:>29}")


@click.command("create")
@click.option(
    "--date",
    "sale_date",
    default=None,
    help="Sale date as DD/MM/AAAA (default: today).",
)
@click.option("--cpf", required=True, help="Customer CPF, with or without punctuation.")
@click.option("--phone", required=True, help="Customer phone with area code.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def sale_create(sale_date: str | None, cpf: str, phone: str, items: str) -> None:
    """Record a sale and take the units out of stock."""
    specs = _parse_items(items)

    handler = RegisterSaleHandler(
        product_repo=product_repository(),
        sale_repo=sale_repository(),
        store=record_store(),
    )

    try:
        dto = handler.handle(
            date=sale_date or format_date(date.today()),
            tax_id=cpf,
            phone=phone,
            item_specs=specs,
        )
    except SaleRejectedError as exc:
        lines = "\n".join(f"  - {message}" for message in exc.messages)
        raise click.ClickException(f"Sale rejected:\n{lines}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("list")
def sale_list() -> None:
    """List recorded sales, newest first."""
    sales = ListSalesHandler(sale_repo=sale_repository()).handle()

    if not sales:
        click.echo("No sales recorded.")
        return

    for index, dto in enumerate(sales):
        if index:
            click.echo()
        _display_sale(dto)
