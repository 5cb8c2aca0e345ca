# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Forward-only, versioned schema migrations.

Each migration runs once, in ascending version order, and its SQL body is
frozen once released: the runner records a SHA-256 of every applied body and
refuses to continue if the code no longer matches what the database saw.
Schema changes always go into a new, higher-numbered migration.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, insert, select
from sqlalchemy.engine import Connection, Engine

from dashlens.shared.errors.base import InfrastructureError
from dashlens.shared.logging import logger


class MigrationError(InfrastructureError):
    def __init__(self, message: str, *, version: int | None = None) -> None:
        super().__init__(
            code="migration_failed",
            message=message,
            context={"version": version} if version is not None else None,
        )


@dataclass(frozen=True, slots=True)
class Migration:
    version: int
    description: str
    sql: str

    @property
    def checksum(self) -> str:
        return hashlib.sha256(self.sql.encode("utf-8")).hexdigest()

    def statements(self) -> list[str]:
        out: list[str] = []
        for chunk in self.sql.split(";"):
            code = [
                line for line in chunk.splitlines() if line.strip() and not line.strip().startswith("--")
            ]
            if code:
                out.append(chunk.strip())
        return out


@dataclass(frozen=True, slots=True)
class AppliedMigration:
    version: int
    description: str
    checksum: str
    applied_at: datetime | None


# Durations are INTEGER minutes, money is REAL dollars,
# time of day is TEXT "HH:MM" (24h) and dates are TEXT "YYYY-MM-DD".
MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="create_users_table",
        sql="""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        """,
    ),
    Migration(
        version=2,
        description="create_earnings_tables",
        sql="""
            CREATE TABLE IF NOT EXISTS sessions (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                date           TEXT    NOT NULL,
                total_earnings REAL,
                base_pay       REAL,                -- only on expanded earnings screenshots
                tips           REAL,                -- only on expanded earnings screenshots
                start_time     TEXT,
                end_time       TEXT,
                active_time    INTEGER,
                total_time     INTEGER,
                offers_count   INTEGER,             -- raw offer count from the screenshot header
                deliveries     INTEGER,
                created_at     DATETIME DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS offers (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id     INTEGER NOT NULL REFERENCES sessions(id) ON DELETE CASCADE,
                store          TEXT,
                total_earnings REAL,
                created_at     DATETIME DEFAULT CURRENT_TIMESTAMP
            );

            CREATE INDEX IF NOT EXISTS idx_sessions_date     ON sessions(date);
            CREATE INDEX IF NOT EXISTS idx_offers_session_id ON offers(session_id);
        """,
    ),
    Migration(
        version=3,
        description="create_week_day_tables",
        sql="""
            CREATE TABLE IF NOT EXISTS weeks (
                id                   INTEGER PRIMARY KEY AUTOINCREMENT,
                date_start           TEXT,
                date_end             TEXT,
                active_time          INTEGER,
                total_time           INTEGER,
                completed_deliveries INTEGER,
                total_earnings       REAL,
                created_at           DATETIME DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS days (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                week_id        INTEGER REFERENCES weeks(id) ON DELETE SET NULL,
                date           TEXT    NOT NULL,
                total_earnings REAL,
                start_time     TEXT,
                end_time       TEXT,
                active_time    INTEGER,
                total_time     INTEGER,
                deliveries     INTEGER,
                created_at     DATETIME DEFAULT CURRENT_TIMESTAMP
            );

            -- offers saved before v3 keep a NULL day_id
            ALTER TABLE offers ADD COLUMN day_id INTEGER REFERENCES days(id) ON DELETE CASCADE;

            CREATE INDEX IF NOT EXISTS idx_weeks_date_start ON weeks(date_start);
            CREATE INDEX IF NOT EXISTS idx_days_date        ON days(date);
            CREATE INDEX IF NOT EXISTS idx_days_week_id     ON days(week_id);
            CREATE INDEX IF NOT EXISTS idx_offers_day_id    ON offers(day_id);
        """,
    ),
)


_metadata = MetaData()

schema_migrations = Table(
    "_migrations",
    _metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("description", String(128), nullable=False),
    Column("checksum", String(64), nullable=False),
    Column("applied_at", DateTime(timezone=True), nullable=False),
)


def _check_order(migrations: Sequence[Migration]) -> None:
    previous = 0
    for migration in migrations:
        if migration.version <= previous:
            raise MigrationError(
                f"Migration versions must be positive and strictly ascending; "
                f"got {migration.version} after {previous}",
                version=migration.version,
            )
        previous = migration.version


class MigrationRunner:
    def __init__(self, migrations: Sequence[Migration] = MIGRATIONS) -> None:
        _check_order(migrations)
        self._migrations = tuple(migrations)

    @property
    def migrations(self) -> tuple[Migration, ...]:
        return self._migrations

    def _ensure_table(self, connection: Connection) -> None:
        _metadata.create_all(connection, tables=[schema_migrations], checkfirst=True)

    def applied(self, engine: Engine) -> dict[int, AppliedMigration]:
        with engine.begin() as connection:
            self._ensure_table(connection)
            rows = connection.execute(
                select(schema_migrations).order_by(schema_migrations.c.version)
            ).all()
        return {
            row.version: AppliedMigration(
                version=row.version,
                description=row.description,
                checksum=row.checksum,
                applied_at=row.applied_at,
            )
            for row in rows
        }

    def pending(self, engine: Engine) -> list[Migration]:
        applied = self.applied(engine)
        self._verify_checksums(applied)
        return [m for m in self._migrations if m.version not in applied]

    def _verify_checksums(self, applied: dict[int, AppliedMigration]) -> None:
        for migration in self._migrations:
            record = applied.get(migration.version)
            if record is not None and record.checksum != migration.checksum:
                raise MigrationError(
                    f"Migration {migration.version} ({migration.description}) was changed "
                    "after it was applied; add a new migration instead",
                    version=migration.version,
                )

        known = {m.version for m in self._migrations}
        unknown = sorted(set(applied) - known)
        if unknown:
            logger.warning(f"db.migrations: database has unknown versions {unknown}")

    def apply(self, engine: Engine) -> list[int]:
        """Apply every pending migration and return the versions applied."""

        done: list[int] = []
        for migration in self.pending(engine):
            logger.info(
                f"db.migrations: applying v{migration.version} {migration.description}"
            )
            try:
                with engine.begin() as connection:
                    for statement in migration.statements():
                        connection.exec_driver_sql(statement)
                    connection.execute(
                        insert(schema_migrations).values(
                            version=migration.version,
                            description=migration.description,
                            checksum=migration.checksum,
                            applied_at=datetime.now(UTC),
                        )
                    )
            except Exception as exc:
                raise MigrationError(
                    f"Migration {migration.version} ({migration.description}) failed: {exc}",
                    version=migration.version,
                ) from exc
            done.append(migration.version)

        if done:
            logger.info(f"db.migrations: applied {done}")
        else:
            logger.debug("db.migrations: schema up to date")
        return done


__all__ = [
    "AppliedMigration",
    "MIGRATIONS",
    "Migration",
    "MigrationError",
    "MigrationRunner",
    "schema_migrations",
]
