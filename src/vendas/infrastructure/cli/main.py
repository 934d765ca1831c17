from pathlib import Path

import click

from vendas.infrastructure import bootstrap
from vendas.infrastructure.cli.inventory_commands import inventory_show
from vendas.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from vendas.infrastructure.cli.report_commands import dashboard, report
from vendas.infrastructure.cli.sale_commands import sale_create, sale_list
from vendas.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="VENDAS_DATA_FILE",
    default=None,
    help="JSON file holding products and sales (env: VENDAS_DATA_FILE).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(data_file: Path | None, verbose: bool) -> None:
    """Vendas — sales control for small businesses"""
    configure_logging(verbose)
    bootstrap.configure(data_file)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def sale() -> None:
    """Record and list sales."""


@cli.group()
def inventory() -> None:
    """Inspect stock levels."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
sale.add_command(sale_create)
sale.add_command(sale_list)
inventory.add_command(inventory_show)
cli.add_command(dashboard)
cli.add_command(report)
