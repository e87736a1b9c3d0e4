"""CLI commands for the product catalog.

Each command opens a session, replays the form interaction a user would
perform (open form, fill fields, save) and prints the result.
"""

from __future__ import annotations

import warnings

import click

from catalog.application.dto import ProductDTO
from catalog.application.product_session import ProductSession
from catalog.domain.exceptions import CorruptStateWarning, DomainException
from catalog.infrastructure.bootstrap import product_session


def _open_session() -> ProductSession:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", CorruptStateWarning)
        session = product_session()
    for warning in caught:
        if issubclass(warning.category, CorruptStateWarning):
            click.echo(f"Warning: {warning.message}", err=True)
    return session


def _fill(session: ProductSession, **fields: str | None) -> None:
    for name, value in fields.items():
        if value is not None:
            session.update_draft_field(name, value)


def _echo_product(product: ProductDTO) -> None:
    click.echo(f"Product #{product.id}")
    click.echo(f"  Name:        {product.name}")
    click.echo(f"  Price:       {product.display_price}")
    click.echo(f"  Stock:       {product.stock}")
    if product.description:
        click.echo(f"  Description: {product.description}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 9.99).")
@click.option("--stock", required=True, help="Units in stock.")
@click.option("--description", default="", help="Optional description.")
def product_add(name: str, price: str, stock: str, description: str) -> None:
    """Add a new product to the catalog."""
    session = _open_session()

    try:
        session.begin_create()
        _fill(session, name=name, price=price, stock=stock, description=description)
        snapshot = session.commit()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    product = snapshot.products[-1]
    click.echo(f"Product #{product.id} '{product.name}' added at {product.display_price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = _open_session().products

    if not products:
        click.echo("No products yet. Create your first product to get started!")
        return

    click.echo(f"{'ID':<15} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 55)
    for p in products:
        click.echo(f"{p.id:<15} {p.name:<20} {p.display_price:>10} {p.stock:>7}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product in full."""
    product = _open_session().snapshot().find(product_id)
    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    _echo_product(product)


@click.command("edit")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, help="New stock count.")
@click.option("--description", default=None, help="New description.")
def product_edit(
    product_id: str,
    name: str | None,
    price: str | None,
    stock: str | None,
    description: str | None,
) -> None:
    """Update a product. Fields that are not given keep their current value."""
    session = _open_session()

    try:
        session.begin_edit(product_id)
        _fill(session, name=name, price=price, stock=stock, description=description)
        snapshot = session.commit()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Product updated.")
    _echo_product(snapshot.find(product_id))


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product. Deleting an unknown ID does nothing."""
    session = _open_session()
    existed = session.snapshot().find(product_id) is not None

    try:
        session.delete(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if existed:
        click.echo(f"Product #{product_id} deleted")
    else:
        click.echo(f"No product #{product_id}; nothing to delete")
