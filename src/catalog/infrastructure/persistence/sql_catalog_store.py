"""SQLAlchemy-backed implementation of CatalogStore.

Works against PostgreSQL in production and SQLite files in development
and tests.  Constraint violations are classified here so the
application layer never inspects driver error codes.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from sqlalchemy import create_engine, event, func, select, text
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog.domain.exceptions import DuplicateEntityError, StoreFailure
from catalog.domain.model.product import Discount, Product
from catalog.domain.model.value_objects import Country, Money
from catalog.domain.repository.catalog_store import (
    CatalogStore,
    DiscountWrite,
    WriteOutcome,
)
from catalog.infrastructure.persistence.schema import discounts, metadata, products

logger = logging.getLogger(__name__)

# SQLSTATE codes (PostgreSQL and other standard-conforming servers)
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"

_SQLITE_UNIQUE_NAMES = {"SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"}
_SQLITE_FOREIGN_KEY_NAME = "SQLITE_CONSTRAINT_FOREIGNKEY"


def create_catalog_engine(url: str, timeout: float = 30.0) -> Engine:
    """Build an engine for ``url``.

    SQLite connections get foreign keys switched on and a busy timeout,
    so concurrent writers wait for each other instead of failing.
    """
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": timeout},
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    connect_args = {"connect_timeout": int(timeout)} if backend == "postgresql" else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args=connect_args,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def classify_integrity_error(exc: IntegrityError) -> WriteOutcome:
    """Map a driver integrity error onto a WriteOutcome."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == _UNIQUE_VIOLATION:
        return WriteOutcome.DUPLICATE
    if sqlstate == _FOREIGN_KEY_VIOLATION:
        return WriteOutcome.MISSING_PRODUCT

    error_name = getattr(orig, "sqlite_errorname", "")
    if error_name in _SQLITE_UNIQUE_NAMES:
        return WriteOutcome.DUPLICATE
    if error_name == _SQLITE_FOREIGN_KEY_NAME:
        return WriteOutcome.MISSING_PRODUCT

    message = str(orig).lower()
    if "unique" in message or "duplicate" in message:
        return WriteOutcome.DUPLICATE
    if "foreign key" in message:
        return WriteOutcome.MISSING_PRODUCT
    return WriteOutcome.FAILED


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class SqlCatalogStore(CatalogStore):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create_schema(self) -> None:
        """Create the tables if they do not exist yet."""
        try:
            metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Could not create schema: {_driver_message(exc)}") from exc

    # --- CatalogStore interface -----------------------------------------------

    def get_product(self, product_id: str) -> Product | None:
        logger.debug("Fetching product %s", product_id)
        try:
            with self._engine.connect() as conn:
                return self._fetch_product(conn, product_id)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Database error: {_driver_message(exc)}") from exc

    def list_by_country(self, country: Country) -> list[Product]:
        logger.debug("Fetching products for country %s", country.value)
        query = (
            self._joined_select()
            .where(func.lower(products.c.country) == country.value.lower())
            .order_by(products.c.id, discounts.c.discount_id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Database error: {_driver_message(exc)}") from exc
        return self._to_products(rows)

    def add_product(self, product: Product) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    products.insert().values(
                        id=product.id,
                        name=product.name,
                        base_price=product.base_price.amount,
                        country=product.country.value,
                    )
                )
        except IntegrityError as exc:
            if classify_integrity_error(exc) is WriteOutcome.DUPLICATE:
                raise DuplicateEntityError(
                    f"Product with ID '{product.id}' already exists"
                ) from exc
            raise StoreFailure(f"Database error: {_driver_message(exc)}") from exc
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Database error: {_driver_message(exc)}") from exc

    def insert_discount(self, product_id: str, discount: Discount) -> DiscountWrite:
        # The INSERT must be the first statement of the transaction: the
        # uniqueness constraint decides, not a preceding read.
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    discounts.insert().values(
                        product_id=product_id,
                        discount_id=discount.discount_id,
                        percent=discount.percent,
                    )
                )
                product = self._fetch_product(conn, product_id)
        except IntegrityError as exc:
            outcome = classify_integrity_error(exc)
            return DiscountWrite(outcome, reason=_driver_message(exc))
        except SQLAlchemyError as exc:
            return DiscountWrite(WriteOutcome.FAILED, reason=_driver_message(exc))
        except StoreFailure as exc:
            # The re-read could not be mapped to a product; the insert rolled back.
            return DiscountWrite(WriteOutcome.FAILED, reason=str(exc))

        if product is None:
            return DiscountWrite(
                WriteOutcome.FAILED,
                reason="Product disappeared after discount insertion",
            )
        return DiscountWrite(WriteOutcome.INSERTED, product=product)

    def ping(self) -> None:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Database unreachable: {_driver_message(exc)}") from exc

    # --- Query helpers --------------------------------------------------------

    @staticmethod
    def _joined_select():
        return select(
            products.c.id,
            products.c.name,
            products.c.base_price,
            products.c.country,
            discounts.c.discount_id,
            discounts.c.percent,
        ).select_from(
            products.outerjoin(discounts, products.c.id == discounts.c.product_id)
        )

    def _fetch_product(self, conn: Connection, product_id: str) -> Product | None:
        query = (
            self._joined_select()
            .where(products.c.id == product_id)
            .order_by(discounts.c.discount_id)
        )
        found = self._to_products(conn.execute(query).all())
        return found[0] if found else None

    @staticmethod
    def _to_products(rows: Iterable) -> list[Product]:
        """Group joined rows by product, dropping repeated discount IDs."""
        grouped: dict[str, tuple] = {}
        for row in rows:
            head, seen = grouped.setdefault(row.id, (row, {}))
            if row.discount_id is not None and row.discount_id not in seen:
                seen[row.discount_id] = Discount(
                    discount_id=row.discount_id,
                    percent=Decimal(str(row.percent)),
                )

        result: list[Product] = []
        for head, seen in grouped.values():
            country = Country.parse(head.country)
            if country is None:
                raise StoreFailure(
                    f"Product '{head.id}' has unsupported country {head.country!r}"
                )
            result.append(
                Product(
                    id=head.id,
                    name=head.name,
                    base_price=Money(Decimal(str(head.base_price))),
                    country=country,
                    discounts=tuple(seen.values()),
                )
            )
        return result
