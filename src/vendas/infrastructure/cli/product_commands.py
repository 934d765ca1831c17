"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from vendas.application.add_product import AddProductHandler
from vendas.application.delete_product import DeleteProductHandler
from vendas.application.update_product import UpdateProductHandler
from vendas.domain.exceptions import DomainException, InvalidProductError
from vendas.domain.formatters import format_date
from vendas.infrastructure.bootstrap import product_repository


def _fail(exc: DomainException) -> click.ClickException:
    if isinstance(exc, InvalidProductError):
        lines = [f"  - {e.field}: {e.message}" for e in exc.errors]
        return click.ClickException("Invalid product:\n" + "\n".join(lines))
    return click.ClickException(str(exc))


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price, e.g. '15,90' or 'R$ 1.299,00'.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.option("--description", required=True, help="Short description.")
def product_add(name: str, price: str, quantity: int, description: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, price=price, quantity=quantity, description=description
        )
    except DomainException as exc:
        raise _fail(exc)

    click.echo(
        f"Product {product.id} '{product.name}' added at {product.price} "
        f"({product.quantity} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<20} {'Name':<24} {'Price':>14} {'Qty':>6} {'Created':>11}")
    click.echo("-" * 79)
    for p in products:
        click.echo(
            f"{p.id:<20} {p.name:<24} {str(p.price):>14} {p.quantity:>6} "
            f"{format_date(p.created_at):>11}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price, e.g. '29,99'.")
@click.option("--quantity", default=None, type=int, help="New stock level.")
@click.option("--description", default=None, help="New description.")
def product_update(
    product_id: str,
    name: str | None,
    price: str | None,
    quantity: int | None,
    description: str | None,
) -> None:
    """Edit one or more fields of a product."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            price=price,
            quantity=quantity,
            description=description,
        )
    except DomainException as exc:
        raise _fail(exc)

    click.echo(
        f"Product {product.id} updated: '{product.name}' at {product.price}, "
        f"{product.quantity} in stock"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
def product_delete(product_id: str, yes: bool) -> None:
    """Remove a product from the catalog. Past sales are kept."""
    if not yes:
        click.confirm(f"Delete product {product_id}?", abort=True)

    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Product {product_id} deleted.")
