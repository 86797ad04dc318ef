"""Engines and read-only sessions for the method/tag store.

The editor never writes methods or tags; it only lists them. Sessions handed
out here are therefore plain read sessions with no commit step. Engines are
cached per URL so a ``--database-url`` override and ``DATABASE_URL`` can be
used side by side in one process.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

_ENGINES: dict[str, Engine] = {}


def resolve_database_url(override: str | None = None) -> str:
    """``override`` if given, else ``DATABASE_URL``; raises ``RuntimeError`` when neither is set."""

    url = override or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set and no --database-url was given")
    return url


def engine_for(database_url: str | None = None) -> Engine:
    url = resolve_database_url(database_url)
    engine = _ENGINES.get(url)
    if engine is None:
        engine = _ENGINES[url] = create_engine(url, pool_pre_ping=True)
    return engine


@contextmanager
def read_session(database_url: str | None = None) -> Iterator[Session]:
    """Yield a session for lookups; it is closed (never committed) on exit."""

    with Session(engine_for(database_url)) as session:
        yield session


def dispose_engines() -> None:
    """Close every cached engine's pool and forget it."""

    while _ENGINES:
        _, engine = _ENGINES.popitem()
        engine.dispose()


__all__ = ["resolve_database_url", "engine_for", "read_session", "dispose_engines"]
