"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.application.adjust_stock import AdjustStockHandler
from catalog.application.commands import (
    AdjustStockCommand,
    CreateProductCommand,
    DeleteProductCommand,
    GetProductQuery,
    GetProductsQuery,
    UpdateProductCommand,
)
from catalog.application.create_product import CreateProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.get_products import GetProductsHandler
from catalog.application.result import Result
from catalog.application.update_product import UpdateProductHandler
from catalog.infrastructure.bootstrap import product_repository
from catalog.infrastructure.config import get_settings


def _unwrap(result: Result):
    if result.is_failure:
        raise click.ClickException(result.error)
    return result.value


def _format_timestamp(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC") if value is not None else "-"


@click.command("create")
@click.option("--code", required=True, help="Product code (max 20 characters).")
@click.option("--name", required=True, help="Product name (max 50 characters).")
@click.option("--description", default="", help="Optional description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
def product_create(code: str, name: str, description: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    command = CreateProductCommand(
        code=code, name=name, description=description, price=price, stock=stock
    )
    with product_repository() as repo:
        product_id = _unwrap(CreateProductHandler(repo).handle(command))

    click.echo(f"Product {product_id} created (code={code})")


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True, help="Page number.")
@click.option("--page-size", default=None, type=int, help="Products per page.")
def product_list(page: int, page_size: int | None) -> None:
    """List live products ordered by code."""
    if page_size is None:
        page_size = get_settings().DEFAULT_PAGE_SIZE

    with product_repository() as repo:
        result = _unwrap(
            GetProductsHandler(repo).handle(GetProductsQuery(page=page, page_size=page_size))
        )

    if result.total_items == 0:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<22} {'Name':<50}")
    click.echo("-" * 73)
    for item in result.items:
        click.echo(f"{item.code:<22} {item.name:<50}")
    click.echo(
        f"Page {result.page}/{result.total_pages}  ({result.total_items} products)"
    )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    with product_repository() as repo:
        dto = _unwrap(GetProductHandler(repo).handle(GetProductQuery(product_id)))

    click.echo(f"Product {dto.id}")
    click.echo(f"Code:        {dto.code}")
    click.echo(f"Name:        {dto.name}")
    click.echo(f"Description: {dto.description or '-'}")
    click.echo(f"Price:       {dto.price:.2f}")
    click.echo(f"Stock:       {dto.stock}")
    click.echo(f"Created:     {_format_timestamp(dto.created_at)}")
    click.echo(f"Updated:     {_format_timestamp(dto.updated_at)}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--description", default="", help="New description.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--stock", required=True, type=int, help="New stock level.")
def product_update(
    product_id: str, name: str, description: str, price: str, stock: int
) -> None:
    """Replace a product's name, description, price and stock."""
    command = UpdateProductCommand(
        product_id=product_id,
        name=name,
        description=description,
        price=price,
        stock=stock,
    )
    with product_repository() as repo:
        _unwrap(UpdateProductHandler(repo).handle(command))

    click.echo(f"Product {product_id} updated.")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog (soft delete)."""
    with product_repository() as repo:
        _unwrap(DeleteProductHandler(repo).handle(DeleteProductCommand(product_id)))

    click.echo(f"Product {product_id} deleted.")


@click.command("adjust-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
def product_adjust_stock(product_id: str, delta: int) -> None:
    """Add or remove units from a product's stock."""
    command = AdjustStockCommand(product_id=product_id, delta=delta)
    with product_repository() as repo:
        stock = _unwrap(AdjustStockHandler(repo).handle(command))

    click.echo(f"Product {product_id} stock is now {stock}.")
