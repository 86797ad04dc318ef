"""Pytest configuration for test isolation.

The store client caches one SQLAlchemy engine per URL, and a developer's
``DATABASE_URL`` or ``TXEDIT_LOG_LEVEL`` would otherwise reach every test.
The autouse fixture clears the environment and the engine cache, and strips
any console handler the CLI installed on the ``txedit`` logger.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from txedit.db.client import dispose_engines
from txedit.logging_setup import ROOT_LOGGER


def _reset_logger() -> None:
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture(autouse=True)
def _isolate_store(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("TXEDIT_LOG_LEVEL", raising=False)
    dispose_engines()
    yield
    dispose_engines()
    _reset_logger()
