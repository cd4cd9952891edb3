"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` (a local SQLite file `todos.db` next to the
package by default) and provides small helpers used by the application,
the demo driver and tests.
"""

from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from .config import settings, is_in_memory_sqlite


def make_engine(url: str, echo: bool = False) -> Engine:
    """Build an engine for `url`.

    SQLite connections may be used from FastAPI's worker threads, so
    `check_same_thread` is disabled. In-memory SQLite databases only
    live as long as their connection, so they are pinned to a single
    shared connection with `StaticPool`.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)
    connect_args = {"check_same_thread": False}
    if is_in_memory_sqlite(url):
        return create_engine(url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)


def create_db_and_tables(bind: Optional[Engine] = None):
    """Create the `todos` table using SQLModel metadata.

    Intended for local development and the demo driver; the table layout
    is fixed so no migration step is involved.
    """
    from . import models  # noqa: F401  registers the table on the metadata
    SQLModel.metadata.create_all(bind or engine)
