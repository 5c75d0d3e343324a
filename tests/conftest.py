"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from engine_installer.core.config import Config
from engine_installer.core.types import SequenceMode

FIXED_NOW = datetime(2024, 1, 31, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ENGINE_INSTALLER_* variables from leaking into tests."""
    for name in [
        "ENGINE_INSTALLER_CONFIG",
        "ENGINE_INSTALLER_APP_ROOT",
        "ENGINE_INSTALLER_MIGRATIONS_DIR",
        "ENGINE_INSTALLER_SEQUENCE_MODE",
        "ENGINE_INSTALLER_ON_CONFLICT",
        "ENGINE_INSTALLER_OVERWRITE_SEEDS",
        "ENGINE_INSTALLER_MIGRATE_COMMAND",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixed_now() -> datetime:
    """Provide a fixed UTC instant."""
    return FIXED_NOW


@pytest.fixture
def engine_root(tmp_path: Path) -> Path:
    """Create a sample engine: one templated and one plain migration, two seeds."""
    root = tmp_path / "blog"
    migrate = root / "db" / "migrate"
    migrate.mkdir(parents=True)
    (migrate / "create_pages.py.j2").write_text(
        "# {{ engine_name }} migration {{ migration_number }}\n"
        "def up(conn):\n"
        "    conn.execute('CREATE TABLE pages (id INTEGER PRIMARY KEY)')\n",
        encoding="utf-8",
    )
    (migrate / "add_slug.py").write_text(
        "def up(conn):\n"
        "    conn.execute('ALTER TABLE pages ADD COLUMN slug TEXT')\n",
        encoding="utf-8",
    )
    (root / "db" / "seeds.py").write_text(
        "from .seeds import pages\n", encoding="utf-8"
    )
    seeds = root / "db" / "seeds"
    seeds.mkdir()
    (seeds / "pages.py").write_text('PAGES = [{"title": "Home"}]\n', encoding="utf-8")
    return root


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Provide an empty host application root."""
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def config(app_root: Path) -> Config:
    """Provide a counter-mode config pointed at the host app."""
    return Config(app_root=app_root, sequence_mode=SequenceMode.COUNTER)
