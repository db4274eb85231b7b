"""
pipeline_db/store.py

Connection, transaction and collection access for the pipeline dictionary
database.

Transaction safety:
- run_in_transaction commits all writes of its work function or none.
- A failure inside the work is re-raised as RollbackSucceededError when the
  rollback completed, or RollbackFailedError when it did not (the database
  may then be inconsistent).
- Outside run_in_transaction every collection write commits on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pipeline_db.config import DatabaseSettings
from pipeline_db.errors import (
    ConfigError,
    DatabaseExistsError,
    NestedTransactionError,
    NotConnectedError,
    PipelineDatabaseError,
    RollbackFailedError,
    RollbackSucceededError,
)
from pipeline_db.logging_utils import log_event
from pipeline_db.repositories.dictionary_repository import DictionaryCollection
from pipeline_db.resolver import CapabilityResolver
from pipeline_db.session import create_db_engine, create_session

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


def split_sql_statements(script: str) -> Iterator[str]:
    """
    Yield the statements of a DDL script, skipping `--` comment lines.
    """

    lines = [line for line in script.splitlines() if not line.strip().startswith("--")]
    for statement in "\n".join(lines).split(";"):
        if statement.strip():
            yield statement.strip()


class DictionaryStore:
    """
    Owns one connection to a dictionary database and its transaction state.

    Not safe for concurrent use; give each thread or process its own store.
    """

    def __init__(self, settings: DatabaseSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._connection: Connection | None = None
        self._session: Session | None = None
        self._in_transaction = False
        self._resolver = CapabilityResolver(self)

    @property
    def settings(self) -> DatabaseSettings:
        return self._settings

    @property
    def dbfile(self) -> Path:
        return self._settings.dbfile

    # ------------------------------------------------------------------
    # Schema creation
    # ------------------------------------------------------------------

    def initialize(self, *, overwrite: bool = False) -> "DictionaryStore":
        """
        Create the database file when missing, or re-create it when
        `overwrite` is set; otherwise reuse the existing file.
        """

        if self.dbfile.exists():
            if overwrite:
                self.create(overwrite=True)
        else:
            self.create()
        return self

    def create(self, *, overwrite: bool = False) -> "DictionaryStore":
        """
        Write the database file by running the configured DDL script.

        Raises DatabaseExistsError if the file exists and `overwrite` is not
        set. With `overwrite` the existing file is removed first.
        """

        sqlpath = self._settings.sqlpath
        if not sqlpath.is_file():
            raise ConfigError(f"Failed to create database: DDL file '{sqlpath}' is missing")

        dbfile = self.dbfile
        if dbfile.exists():
            if not overwrite:
                raise DatabaseExistsError(f"Failed to create database: database '{dbfile}' already exists")
            self.disconnect()
            dbfile.unlink()

        dbfile.parent.mkdir(parents=True, exist_ok=True)
        ddl = sqlpath.read_text(encoding="utf-8")
        engine = create_db_engine(self._settings.url)
        try:
            with engine.begin() as connection:
                for statement in split_sql_statements(ddl):
                    connection.exec_driver_sql(statement)
        except SQLAlchemyError as exc:
            engine.dispose()
            dbfile.unlink(missing_ok=True)
            raise PipelineDatabaseError(f"Failed to create SQLite database '{dbfile}': {exc}") from exc
        engine.dispose()

        log_event(
            logger,
            logging.INFO,
            "database_created",
            dbfile=dbfile,
            sqlpath=sqlpath,
            overwrite=overwrite,
        )
        return self

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> "DictionaryStore":
        if self.is_connected():
            return self

        self._reset()
        engine = create_db_engine(self._settings.url)
        try:
            connection = engine.connect()
        except SQLAlchemyError as exc:
            engine.dispose()
            raise PipelineDatabaseError(f"Failed to connect to database '{self.dbfile}': {exc}") from exc

        self._engine = engine
        self._connection = connection
        self._session = create_session(connection)
        logger.debug("Connected to dictionary database %s", self.dbfile)
        return self

    def is_connected(self) -> bool:
        connection = self._connection
        return connection is not None and not connection.closed and not connection.invalidated

    def disconnect(self) -> "DictionaryStore":
        if self._engine is None and self._connection is None and self._session is None:
            return self

        self._reset()
        logger.debug("Disconnected from dictionary database %s", self.dbfile)
        return self

    def _reset(self) -> None:
        if self._session is not None:
            self._session.close()
        if self._connection is not None:
            self._connection.close()
        if self._engine is not None:
            self._engine.dispose()
        self._session = None
        self._connection = None
        self._engine = None
        self._in_transaction = False

    def __enter__(self) -> "DictionaryStore":
        return self.connect()

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    @property
    def session(self) -> Session:
        if self._session is None or not self.is_connected():
            raise NotConnectedError(f"Database '{self.dbfile}' is not connected")
        return self._session

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    def run_in_transaction(
        self,
        work: Callable[..., ResultT],
        *args: Any,
        **kwargs: Any,
    ) -> ResultT:
        """
        Execute `work(*args, **kwargs)` in one transaction and return its
        result. Every write made by `work` is committed, or none is.
        """

        session = self.session
        if self.in_transaction:
            raise NestedTransactionError(
                "A transaction is already in progress; nested transactions are not supported"
            )

        # Reads made outside a transaction leave an implicit one open.
        if session.in_transaction():
            session.commit()

        self._in_transaction = True
        try:
            session.begin()
            result = work(*args, **kwargs)
            session.commit()
        except Exception as exc:
            try:
                session.rollback()
            except Exception as rollback_exc:
                log_event(
                    logger,
                    logging.CRITICAL,
                    "transaction_rollback_failed",
                    dbfile=self.dbfile,
                    error=exc,
                    rollback_error=rollback_exc,
                )
                raise RollbackFailedError(
                    f"{exc}. Rollback failed! WARNING: data may be inconsistent.",
                    original=exc,
                    rollback_error=rollback_exc,
                ) from rollback_exc

            log_event(
                logger,
                logging.WARNING,
                "transaction_rolled_back",
                dbfile=self.dbfile,
                error=exc,
            )
            raise RollbackSucceededError(f"{exc}. Rollback successful.", original=exc) from exc
        except BaseException:
            session.rollback()
            raise
        finally:
            self._in_transaction = False

        return result

    def autocommit(self) -> None:
        """
        Commit a single write unless run_in_transaction is in progress.
        """

        if not self.in_transaction:
            self.session.commit()

    def autorollback(self) -> None:
        if not self.in_transaction:
            self.session.rollback()

    # ------------------------------------------------------------------
    # Dictionaries
    # ------------------------------------------------------------------

    def dictionary_names(self) -> tuple[str, ...]:
        return self._resolver.names()

    def collection(self, name: str) -> DictionaryCollection:
        """
        Return the row collection of the named dictionary.
        """

        return self._resolver.resolve(name)

    def __repr__(self) -> str:
        return f"<DictionaryStore dbfile={str(self.dbfile)!r} connected={self.is_connected()}>"
