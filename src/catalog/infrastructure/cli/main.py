import logging

import click

from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_edit,
    product_list,
    product_show,
)
from catalog.infrastructure.config import CatalogConfig


@click.group()
def cli() -> None:
    """Catalog: a product catalog editor."""
    logging.basicConfig(
        level=CatalogConfig.from_env().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_edit)
product.add_command(product_list)
product.add_command(product_show)
