"""CLI commands for inventory management."""

from __future__ import annotations

import click

from vendas.application.show_inventory import STATUS_FILTERS, ShowInventoryHandler
from vendas.infrastructure.bootstrap import product_repository


@click.command("show")
@click.option(
    "--status",
    type=click.Choice(STATUS_FILTERS),
    default="all",
    show_default=True,
    help="Only products that are low on stock or out of stock.",
)
@click.option("--search", default="", help="Match against name or description.")
def inventory_show(status: str, search: str) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    inventory = handler.handle(status=status, search=search)

    click.echo(
        f"Products: {inventory.total_products}  "
        f"Out of stock: {inventory.out_of_stock}  "
        f"Low stock: {inventory.low_stock}  "
        f"Stock value: {inventory.total_value}"
    )
    click.echo()

    if not inventory.lines:
        click.echo("No products match.")
        return

    click.echo(f"{'Product':<24} {'Qty':>6} {'Price':>14} {'Value':>14} {'Status':>7}")
    click.echo("-" * 69)
    for line in inventory.lines:
        click.echo(
            f"{line.product_name:<24} {line.quantity:>6} {line.unit_price:>14} "
            f"{line.stock_value:>14} {line.status:>7}"
        )
