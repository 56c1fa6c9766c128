"""Database introspection backed by SQLAlchemy."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

_ENGINES: dict[str, Engine] = {}


def _dsn(url: str | None = None) -> str:
    url = url or os.getenv("DATABASE_URL")
    if url:
        return url
    data_dir = Path("data")
    data_dir.mkdir(exist_ok=True)
    return "sqlite:///" + str((data_dir / "dashboard.db").resolve())


def _engine(url: str | None = None) -> Engine:
    dsn = _dsn(url)
    if dsn not in _ENGINES:
        _ENGINES[dsn] = create_engine(dsn, future=True)
    return _ENGINES[dsn]


def platform(url: str | None = None) -> dict[str, str]:
    """Return the driver name and server version of the configured database."""
    try:
        engine = _engine(url)
        with engine.connect() as connection:
            dialect = connection.dialect
            info = dialect.server_version_info or ()
    except (SQLAlchemyError, ImportError) as exc:
        logger.warning("Could not inspect database platform: %s", exc)
        return {"driver_name": "unknown", "server_version": "unknown"}
    return {
        "driver_name": dialect.name,
        "server_version": ".".join(str(part) for part in info) or "unknown",
    }
