import click
import uvicorn

from catalog.infrastructure.cli.product_commands import (
    product_adjust_stock,
    product_create,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from catalog.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Catalog — Product catalog service"""
    configure_logging()


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, type=int, show_default=True, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run(
        "catalog.infrastructure.api.app:create_app",
        factory=True,
        host=host,
        port=port,
    )


# Register subcommands
product.add_command(product_adjust_stock)
product.add_command(product_create)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
