"""Read-only views of the known transaction methods and tags.

The validators only ever ask two questions of a store: which methods exist and
which tags exist, each in creation order. ``StaticFieldStore`` answers from an
in-memory snapshot (tests, the CLI's ``--method``/``--tag`` options);
``SqlFieldStore`` answers from the ``tx_methods``/``tags`` tables.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .db.client import read_session, resolve_database_url
from .db.models import Tag, TxMethod
from .logging_setup import get_logger

_logger = get_logger("store")


class StoreError(RuntimeError):
    """The backing store could not be read."""


class FieldStore(Protocol):
    def list_known_methods(self) -> list[str]: ...

    def list_known_tags(self) -> list[str]: ...


class StaticFieldStore:
    """A fixed snapshot of method and tag names."""

    __slots__ = ("_methods", "_tags")

    def __init__(self, methods: Iterable[str] = (), tags: Iterable[str] = ()) -> None:
        self._methods = tuple(methods)
        self._tags = tuple(tags)

    def list_known_methods(self) -> list[str]:
        return list(self._methods)

    def list_known_tags(self) -> list[str]:
        return list(self._tags)

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"StaticFieldStore(methods={self._methods!r}, tags={self._tags!r})"


class SqlFieldStore:
    """Store backed by the shared SQLAlchemy engine.

    Each lookup opens its own short session; nothing is cached, so two calls
    may observe different snapshots if another process writes in between.
    """

    def __init__(self, *, database_url: str | None = None) -> None:
        self._database_url = database_url

    def _names(self, model: type[TxMethod] | type[Tag]) -> list[str]:
        try:
            url = resolve_database_url(self._database_url)
        except RuntimeError as e:
            raise StoreError(str(e)) from e
        try:
            with read_session(url) as session:
                names = list(session.execute(select(model.name).order_by(model.id)).scalars())
        except SQLAlchemyError as e:
            raise StoreError(f"failed to read {model.__tablename__}: {e}") from e
        _logger.debug("loaded %d row(s) from %s", len(names), model.__tablename__)
        return names

    def list_known_methods(self) -> list[str]:
        return self._names(TxMethod)

    def list_known_tags(self) -> list[str]:
        return self._names(Tag)


__all__ = ["FieldStore", "StaticFieldStore", "SqlFieldStore", "StoreError"]
