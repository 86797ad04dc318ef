"""DB helpers for tests: create a SQLite method/tag store and fill it."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from sqlalchemy.orm import Session

from txedit.db import Base
from txedit.db.client import engine_for
from txedit.db.models import Tag, TxMethod


def bootstrap_sqlite_db(db_file: Path) -> str:
    """Create the ``tx_methods``/``tags`` tables in a SQLite file and return its URL."""

    url = f"sqlite+pysqlite:///{db_file}"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine_for(url))
    return url


def seed_store(
    *,
    database_url: str,
    methods: Iterable[str] = (),
    tags: Iterable[str] = (),
) -> None:
    """Insert methods and tags in the given order (ids follow insertion)."""

    with Session(engine_for(database_url)) as session, session.begin():
        for name in methods:
            session.add(TxMethod(name=name))
            session.flush()
        for name in tags:
            session.add(Tag(name=name))
            session.flush()
