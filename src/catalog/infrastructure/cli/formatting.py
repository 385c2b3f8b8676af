"""Shared output helpers for the CLI commands."""

from __future__ import annotations

import json

import click

from catalog.application.dto import ProductDTO


def echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


def display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  '{dto.name}'  ({dto.country})")
    click.echo(f"Base price:  {dto.base_price:.2f}")
    if dto.discounts:
        click.echo()
        click.echo(f"  {'Discount':<24} {'Percent':>8}")
        click.echo(f"  {'-'*33}")
        for d in dto.discounts:
            click.echo(f"  {d.discount_id:<24} {d.percent.normalize():>7f}%")
        click.echo(f"  {'-'*33}")
    click.echo(f"Final price: {dto.final_price:.2f}")
