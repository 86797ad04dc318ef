from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.db import bootstrap_sqlite_db, seed_store
from txedit import (
    FieldBuffer,
    SqlFieldStore,
    StepDirection,
    StoreError,
    step_tx_method,
    verify_tags_forced,
)
from txedit.db.client import engine_for


@pytest.fixture()
def sqlite_url(tmp_path: Path) -> str:
    url = bootstrap_sqlite_db(tmp_path / "store.sqlite3")
    seed_store(
        database_url=url,
        methods=["Bank", "Cash", "Card"],
        tags=["food", "travel"],
    )
    return url


def test_sql_store_lists_names_in_creation_order(sqlite_url: str):
    store = SqlFieldStore(database_url=sqlite_url)
    assert store.list_known_methods() == ["Bank", "Cash", "Card"]
    assert store.list_known_tags() == ["food", "travel"]


def test_sql_store_reads_database_url_from_env(sqlite_url: str, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", sqlite_url)
    assert SqlFieldStore().list_known_methods() == ["Bank", "Cash", "Card"]


def test_sql_store_without_url_raises_store_error():
    with pytest.raises(StoreError, match="DATABASE_URL"):
        SqlFieldStore().list_known_tags()


def test_sql_store_missing_schema_raises_store_error(tmp_path: Path):
    url = f"sqlite+pysqlite:///{tmp_path / 'empty.sqlite3'}"
    with pytest.raises(StoreError, match="tx_methods"):
        SqlFieldStore(database_url=url).list_known_methods()


def test_validators_and_steppers_run_against_sql_store(sqlite_url: str):
    store = SqlFieldStore(database_url=sqlite_url)

    buf = FieldBuffer("card")
    assert step_tx_method(buf, StepDirection.INCREASE, store) is None
    assert buf.text == "Bank"

    buf = FieldBuffer("travel, lodging")
    assert verify_tags_forced(buf, store).is_rejected
    assert buf.text == "travel"


def test_engines_are_cached_per_url(tmp_path: Path):
    a = bootstrap_sqlite_db(tmp_path / "a.sqlite3")
    b = bootstrap_sqlite_db(tmp_path / "b.sqlite3")
    seed_store(database_url=a, methods=["Bank"])
    seed_store(database_url=b, methods=["Cash"])

    assert engine_for(a) is engine_for(a)
    assert engine_for(a) is not engine_for(b)
    assert SqlFieldStore(database_url=a).list_known_methods() == ["Bank"]
    assert SqlFieldStore(database_url=b).list_known_methods() == ["Cash"]
