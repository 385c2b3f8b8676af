"""Table definitions for the SQL catalog store."""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Table,
)

from catalog.domain.model.value_objects import MONEY_DECIMAL_PLACES, PERCENT_DECIMAL_PLACES

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("base_price", Numeric(12, MONEY_DECIMAL_PLACES), nullable=False),
    Column("country", String(100), nullable=False),
)

discounts = Table(
    "discounts",
    metadata,
    Column(
        "product_id",
        String(255),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("discount_id", String(255), nullable=False),
    Column("percent", Numeric(9, PERCENT_DECIMAL_PLACES), nullable=False),
    PrimaryKeyConstraint("product_id", "discount_id", name="pk_discounts"),
)
