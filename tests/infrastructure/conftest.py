import pytest

from catalog.infrastructure.persistence.sql_catalog_store import (
    SqlCatalogStore,
    create_catalog_engine,
)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
def sql_store(database_url):
    engine = create_catalog_engine(database_url, timeout=30)
    store = SqlCatalogStore(engine)
    store.create_schema()
    yield store
    engine.dispose()
