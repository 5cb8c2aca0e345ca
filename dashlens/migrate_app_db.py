# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Convenience entrypoint for applying schema migrations with backup."""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path

from dashlens.infrastructure.db import Database, MigrationRunner
from dashlens.shared.config import DatabaseConfig
from dashlens.shared.logging import setup_logging


def backup_database(path: Path) -> Path:
    backup_path = path.with_suffix(path.suffix + ".bak")
    shutil.copy2(path, backup_path)
    return backup_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Apply all pending migrations to the app database")
    parser.add_argument(
        "database",
        type=Path,
        nargs="?",
        default=Path("dashlens.db"),
        help="Path to SQLite database file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List pending migrations without applying them",
    )
    args = parser.parse_args(argv)
    db_path: Path = args.database

    setup_logging()
    if not args.dry_run and db_path.exists() and db_path.stat().st_size > 0:
        backup_path = backup_database(db_path)
        print(f"Backup created at {backup_path}")

    database = Database(DatabaseConfig(url=f"sqlite:///{db_path}"))
    runner = MigrationRunner()
    try:
        pending = runner.pending(database.engine)
        if not pending:
            print("Schema is up to date")
            return
        if args.dry_run:
            for migration in pending:
                print(f"Pending v{migration.version} {migration.description}")
            return

        for version in runner.apply(database.engine):
            print(f"Applied v{version}")
        print("Migrations applied successfully")
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
