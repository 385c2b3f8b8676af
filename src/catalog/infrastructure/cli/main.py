import click

from catalog.domain.exceptions import StoreFailure
from catalog.infrastructure.bootstrap import catalog_store, configure_logging
from catalog.infrastructure.cli.discount_commands import discount_apply
from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
)
from catalog.infrastructure.config import Settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Product catalog with per-country VAT and discounts."""
    settings = Settings.from_env()
    configure_logging(settings, verbose=verbose)
    ctx.obj = catalog_store(settings)


@cli.command("init-db")
@click.pass_obj
def init_db(store) -> None:
    """Create the database tables."""
    try:
        store.create_schema()
    except StoreFailure as exc:
        raise click.ClickException(str(exc))
    click.echo("Database schema ready.")


@cli.command("health")
@click.pass_obj
def health(store) -> None:
    """Check that the database is reachable."""
    try:
        store.ping()
    except StoreFailure as exc:
        raise click.ClickException(str(exc))
    click.echo("OK")


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def discount() -> None:
    """Manage discounts."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
discount.add_command(discount_apply)
