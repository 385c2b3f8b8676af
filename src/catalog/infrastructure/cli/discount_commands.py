"""CLI commands for attaching discounts to products."""

from __future__ import annotations

import click

from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.dto import HTTP_STATUS, ProductDTO
from catalog.domain.exceptions import DomainException
from catalog.domain.model.discount_result import AlreadyApplied, Success
from catalog.domain.model.product import Discount
from catalog.domain.model.value_objects import Percent
from catalog.infrastructure.cli.formatting import display_product, echo_json


def _result_payload(result) -> dict:
    payload = {"result": result.kind, "status": HTTP_STATUS[result.kind]}
    if isinstance(result, (Success, AlreadyApplied)):
        payload["product"] = ProductDTO.from_product(result.product).to_dict()
    else:
        payload["error"] = result.reason
    return payload


@click.command("apply")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--discount-id", required=True, help="Discount ID (A-Z, 0-9, '_', '-').")
@click.option("--percent", required=True, help="Discount percentage (0 < p <= 100).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def discount_apply(store, product_id: str, discount_id: str, percent: str, as_json: bool) -> None:
    """Attach a discount to a product.

    Exits 0 only when this call attached the discount.
    """
    try:
        discount = Discount(discount_id=discount_id, percent=Percent.of(percent).value)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    result = ApplyDiscountHandler(store).handle(product_id, discount)

    if as_json:
        echo_json(_result_payload(result))
    elif isinstance(result, Success):
        click.echo(f"Discount '{discount_id}' applied.")
        display_product(ProductDTO.from_product(result.product))
    elif isinstance(result, AlreadyApplied):
        click.echo(f"Discount '{discount_id}' is already applied to product '{product_id}'.")
        if result.percent_differs:
            click.echo(
                f"Note: it was stored with {result.persisted_percent.normalize():f}%, "
                f"not {discount.percent.normalize():f}%."
            )
        display_product(ProductDTO.from_product(result.product))

    if not isinstance(result, Success):
        if isinstance(result, AlreadyApplied) or as_json:
            raise click.exceptions.Exit(1)
        raise click.ClickException(result.reason)
