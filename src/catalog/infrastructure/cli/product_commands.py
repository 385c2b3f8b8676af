"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.application.add_product import AddProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.application.show_product import ShowProductHandler
from catalog.domain.exceptions import DomainException
from catalog.infrastructure.cli.formatting import display_product, echo_json


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Base price before VAT (e.g. 100.00).")
@click.option("--country", required=True, help="Sweden, Germany or France.")
@click.pass_obj
def product_add(store, product_id: str, name: str, price: str, country: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(store)

    try:
        dto = handler.handle(product_id, name, price, country)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.base_price:.2f} ({dto.country})")


@click.command("list")
@click.option("--country", default=None, help="Country to list (case-insensitive).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def product_list(store, country: str | None, as_json: bool) -> None:
    """List the products of a country with their final prices."""
    handler = ListProductsHandler(store)

    try:
        products = handler.handle(country)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        echo_json([p.to_dict() for p in products])
        return

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Base':>10} {'Discount':>9} {'Final':>10}")
    click.echo("-" * 65)
    for p in products:
        total = sum(d.percent for d in p.discounts)
        click.echo(
            f"{p.id:<12} {p.name:<20} {p.base_price:>10.2f} "
            f"{float(total):>8.2f}% {p.final_price:>10.2f}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def product_show(store, product_id: str, as_json: bool) -> None:
    """Show a product, its discounts and its final price."""
    handler = ShowProductHandler(store)

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        raise click.ClickException(f"Product with ID '{product_id}' does not exist")

    if as_json:
        echo_json(dto.to_dict())
    else:
        display_product(dto)
