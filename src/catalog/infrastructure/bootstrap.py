"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
The store is built once per process and handed to each handler.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import make_url

from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.sql_catalog_store import (
    SqlCatalogStore,
    create_catalog_engine,
)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def catalog_store(settings: Settings) -> SqlCatalogStore:
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    engine = create_catalog_engine(settings.database_url, timeout=settings.db_timeout)
    return SqlCatalogStore(engine)
