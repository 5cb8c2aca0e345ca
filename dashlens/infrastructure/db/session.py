# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database engine and session helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from dashlens.shared.config import DatabaseConfig
from dashlens.shared.logging import logger


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    # pysqlite would otherwise commit DDL implicitly; transactions are
    # opened by _begin_sqlite_transaction instead.
    dbapi_conn.isolation_level = None
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    except Exception:
        logger.exception("Failed to apply SQLite PRAGMAs")
    finally:
        cur.close()


def _begin_sqlite_transaction(conn) -> None:
    conn.exec_driver_sql("BEGIN")


class Database:
    def __init__(self, config: DatabaseConfig) -> None:
        self.url = config.url
        engine_kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
        if config.is_sqlite():
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            }
        else:
            engine_kwargs["pool_timeout"] = config.pool_timeout

        self.engine: Engine = create_engine(config.url, **engine_kwargs)
        if config.is_sqlite():
            event.listen(self.engine, "connect", _set_sqlite_pragmas)
            event.listen(self.engine, "begin", _begin_sqlite_transaction)

        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope for imperative consumers."""

        session = self._session_factory()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except Exception:
            logger.exception("db.session: error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.debug(f"db.engine: disposed {self.engine.url.render_as_string(hide_password=True)}")
