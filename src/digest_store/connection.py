"""Database connection owned by the caller.

A Database is constructed explicitly and passed to whoever needs it. The
engine is created on first use, reused for the lifetime of the object and
released by close().
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from digest_store.models import Base

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database: str | None) -> bool:
    return not database or database == ":memory:"


def _sqlite_pragmas(wal: bool):
    def set_pragmas(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        if wal:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return set_pragmas


class Database:
    """Lazily connected database handle."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._connect()
        return self._engine

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    def _connect(self) -> None:
        self._engine = self._create_engine()
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def _create_engine(self) -> Engine:
        url = make_url(self.url)
        kwargs: dict[str, Any] = {"echo": self.echo}

        if not self.is_sqlite:
            logger.info("Connecting to %s database", url.get_backend_name())
            return create_engine(self.url, **kwargs)

        # SQLite connections are shared with the API's worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
        memory = _is_memory_sqlite(url.database)
        if memory:
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        logger.info("Database path: %s", url.database or ":memory:")

        engine = create_engine(self.url, **kwargs)
        event.listen(engine, "connect", _sqlite_pragmas(wal=not memory))
        return engine

    def create_tables(self) -> None:
        """Create tables if they don't exist."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database initialized successfully")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Context manager for a session with rollback on error."""
        if self._session_factory is None:
            self._connect()
        session = self._session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def version(self) -> str:
        """Return the database server version string."""
        with self.engine.connect() as conn:
            if self.is_sqlite:
                return conn.execute(text("SELECT sqlite_version()")).scalar_one()
            return conn.execute(text("SELECT version()")).scalar_one()

    def close(self) -> None:
        """Dispose the engine; the next use reconnects."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database connection closed")
        self._engine = None
        self._session_factory = None
