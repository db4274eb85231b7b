"""
pipeline_db/session.py

SQLAlchemy engine and session factory for one dictionary database.

Engines are created per store instance and passed around explicitly; no
engine is shared at module level.
"""

from __future__ import annotations

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def create_db_engine(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        raise RuntimeError("Only SQLite URLs are supported.")

    return create_engine(
        database_url,
        echo=_get_bool_env("SQL_ECHO", default=False),
    )


def create_session(connection: Connection) -> Session:
    """
    Bind a session to an already open connection.

    The session owns the transactions it begins on that connection.
    """

    return Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
    )
