"""CLI commands for the dashboard and sales reports."""

from __future__ import annotations

import click

from vendas.application.sales_report import PERIODS, SalesReportHandler
from vendas.application.show_dashboard import ShowDashboardHandler
from vendas.domain.exceptions import DomainException
from vendas.infrastructure.bootstrap import product_repository, sale_repository


@click.command("dashboard")
def dashboard() -> None:
    """Headline numbers, best sellers and low-stock alerts."""
    handler = ShowDashboardHandler(
        product_repo=product_repository(),
        sale_repo=sale_repository(),
    )
    dto = handler.handle()

    click.echo(f"Products:        {dto.total_products}")
    click.echo(f"Sales:           {dto.total_sales}")
    click.echo(f"Revenue:         {dto.revenue}")
    click.echo(f"Low stock:       {dto.low_stock_count}")
    click.echo()

    click.echo("Best sellers")
    if not dto.top_products:
        click.echo("  No sales recorded.")
    for rank, product in enumerate(dto.top_products, start=1):
        click.echo(f"  {rank}. {product.product_name:<24} {product.units:>5} units {product.revenue:>14}")
    click.echo()

    click.echo("Low stock")
    if not dto.low_stock:
        click.echo("  All products are well stocked.")
    for item in dto.low_stock:
        label = "OUT" if item.quantity == 0 else f"{item.quantity} left"
        click.echo(f"  {item.product_name:<24} {label:>9}")


@click.command("report")
@click.option(
    "--period",
    type=click.Choice(PERIODS),
    default="all",
    show_default=True,
    help="Which recorded sales to include.",
)
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="First day for --period custom (YYYY-MM-DD).")
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Last day for --period custom (YYYY-MM-DD).")
def report(period: str, start, end) -> None:
    """Revenue, average ticket and best sellers for a period."""
    handler = SalesReportHandler(sale_repo=sale_repository())

    try:
        dto = handler.handle(
            period=period,
            start=start.date() if start else None,
            end=end.date() if end else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Period:          {dto.period}")
    click.echo(f"Sales:           {dto.sales_count}")
    click.echo(f"Revenue:         {dto.revenue}")
    click.echo(f"Average ticket:  {dto.average_ticket}")
    click.echo()

    click.echo("Best sellers")
    if not dto.top_products:
        click.echo("  No sales in this period.")
    for rank, product in enumerate(dto.top_products, start=1):
        click.echo(f"  {rank:>2}. {product.product_name:<24} {product.units:>5} units {product.revenue:>14}")
    click.echo()

    click.echo("Last 7 days")
    for day in dto.daily:
        click.echo(f"  {day.weekday:<4} {day.day}  {day.sales_count:>3} sale(s) {day.revenue:>14}")
