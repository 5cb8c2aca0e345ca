from __future__ import annotations

from pathlib import Path

import pytest

from dashlens.infrastructure.db import Database
from dashlens.shared.config import DatabaseConfig


@pytest.fixture()
def database(tmp_path: Path):
    db = Database(DatabaseConfig(url=f"sqlite:///{tmp_path / 'dashlens.db'}"))
    yield db
    db.dispose()
