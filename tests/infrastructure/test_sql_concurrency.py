"""Concurrency tests: many request threads against one SQL store.

No lock exists in the application code; the at-most-once guarantee
comes from the (product_id, discount_id) primary key alone.
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
import threading

from sqlalchemy import text

from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.show_product import ShowProductHandler
from catalog.domain.model.discount_result import AlreadyApplied, Success
from catalog.domain.model.product import Discount, Product
from catalog.domain.model.value_objects import Country, Money
from catalog.infrastructure.persistence.sql_catalog_store import create_catalog_engine

WORKERS = 12


def _run_concurrently(fn, args: list) -> list:
    barrier = threading.Barrier(len(args))

    def call(arg):
        barrier.wait()
        return fn(arg)

    with ThreadPoolExecutor(max_workers=len(args)) as pool:
        return list(pool.map(call, args))


def _seed(store) -> None:
    store.add_product(
        Product(id="p1", name="Widget", base_price=Money.of("100.00"), country=Country.SWEDEN)
    )


class TestConcurrentApplyDiscount:

    def test_identical_requests_apply_exactly_once(self, sql_store, database_url):
        _seed(sql_store)
        handler = ApplyDiscountHandler(sql_store)

        results = _run_concurrently(
            lambda _: handler.handle("p1", Discount("FLASH", Decimal("10"))),
            list(range(WORKERS)),
        )

        assert sum(isinstance(r, Success) for r in results) == 1
        assert sum(isinstance(r, AlreadyApplied) for r in results) == WORKERS - 1
        for r in results:
            assert [d.discount_id for d in r.product.discounts] == ["FLASH"]

        engine = create_catalog_engine(database_url)
        with engine.connect() as conn:
            count = conn.execute(
                text("SELECT COUNT(*) FROM discounts WHERE product_id = 'p1'")
            ).scalar_one()
        engine.dispose()
        assert count == 1

    def test_success_is_visible_to_following_read(self, sql_store):
        _seed(sql_store)
        result = ApplyDiscountHandler(sql_store).handle("p1", Discount("SUMMER", Decimal("10")))

        assert isinstance(result, Success)
        dto = ShowProductHandler(sql_store).handle("p1")
        assert [d.discount_id for d in dto.discounts] == ["SUMMER"]
        assert abs(dto.final_price - Decimal("112.5")) <= Decimal("0.01")

    def test_same_id_different_percents_one_wins(self, sql_store):
        _seed(sql_store)
        handler = ApplyDiscountHandler(sql_store)
        percents = [Decimal(p) for p in ("5", "10", "15", "20")]

        results = _run_concurrently(
            lambda p: handler.handle("p1", Discount("PROMO", p)), percents
        )

        winners = [r for r in results if isinstance(r, Success)]
        losers = [r for r in results if isinstance(r, AlreadyApplied)]
        assert len(winners) == 1
        assert len(losers) == len(percents) - 1
        stored = winners[0].product.get_discount("PROMO").percent
        assert all(loser.persisted_percent == stored for loser in losers)
        assert all(loser.percent_differs for loser in losers)

    def test_different_ids_are_independent(self, sql_store):
        _seed(sql_store)
        handler = ApplyDiscountHandler(sql_store)

        results = _run_concurrently(
            lambda i: handler.handle("p1", Discount(f"D{i}", Decimal("5"))),
            list(range(8)),
        )

        assert all(isinstance(r, Success) for r in results)
        assert len(sql_store.get_product("p1").discounts) == 8
