"""Settings read from the environment.

Only the composition root reads these; everything else receives the
objects built from them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'catalog.db'}"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "WARNING"
    db_timeout: float = 30.0

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return Settings(
            database_url=env.get("CATALOG_DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=env.get("CATALOG_LOG_LEVEL", "WARNING").upper(),
            db_timeout=float(env.get("CATALOG_DB_TIMEOUT", "30")),
        )
