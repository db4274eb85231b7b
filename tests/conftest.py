from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from pipeline_db.config import DatabaseSettings, package_data_path
from pipeline_db.store import DictionaryStore

DDL_PATH = package_data_path("sql", "pipeline.sql")
DEFAULT_INI_PATH = package_data_path("etc")


@pytest.fixture()
def db_settings(tmp_path: Path) -> DatabaseSettings:
    """Settings for a fresh database file under this test's tmp_path."""
    return DatabaseSettings(
        name="pipeline",
        dbfile=tmp_path / "pipeline.db",
        sqlpath=DDL_PATH,
        inipath=DEFAULT_INI_PATH,
    )


@pytest.fixture()
def store(db_settings: DatabaseSettings) -> Iterator[DictionaryStore]:
    """A created and connected store, disconnected on teardown."""
    dictionary_store = DictionaryStore(db_settings).initialize().connect()
    try:
        yield dictionary_store
    finally:
        dictionary_store.disconnect()
