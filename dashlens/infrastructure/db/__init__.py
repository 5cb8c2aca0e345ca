# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .migrations import MIGRATIONS, Migration, MigrationError, MigrationRunner
from .session import Base, Database

__all__ = ["Base", "Database", "MIGRATIONS", "Migration", "MigrationError", "MigrationRunner"]
