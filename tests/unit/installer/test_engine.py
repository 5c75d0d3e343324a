"""Tests for EngineInstaller."""

from dataclasses import replace
from pathlib import Path

import pytest

from engine_installer.core.config import Config
from engine_installer.core.exceptions import (
    EngineNotFoundError,
    MaterializeError,
    MigrationExistsError,
)
from engine_installer.core.types import ConflictMode, SequenceMode
from engine_installer.installer import EngineInstaller
from engine_installer.migrations.paths import list_migration_names


def _installer(config: Config, engine_root: Path, fixed_now, **kwargs) -> EngineInstaller:
    return EngineInstaller(config, engine_root, clock=lambda: fixed_now, **kwargs)


class TestMigrations:
    """Tests for installing migrations."""

    def test_counter_mode_fresh_app(self, config, engine_root, app_root, fixed_now):
        """Migrations are numbered from 001 in path order."""
        result = _installer(config, engine_root, fixed_now).install()

        assert [m.sequence for m in result.migrations] == ["001", "002"]
        assert list_migration_names(app_root / "db" / "migrate") == [
            "001_add_slug.py",
            "002_create_pages.py",
        ]

    def test_counter_mode_continues_existing(self, config, engine_root, app_root, fixed_now):
        """Existing wide prefixes are continued with the same width."""
        migrate = app_root / "db" / "migrate"
        migrate.mkdir(parents=True)
        (migrate / "00042_init.py").write_text("")

        _installer(config, engine_root, fixed_now).install()

        assert list_migration_names(migrate) == [
            "00042_init.py",
            "00043_add_slug.py",
            "00044_create_pages.py",
        ]

    def test_timestamped_mode_same_second(self, config, engine_root, app_root, fixed_now):
        """A fixed clock still yields distinct increasing timestamps."""
        config = replace(config, sequence_mode=SequenceMode.TIMESTAMPED)

        result = _installer(config, engine_root, fixed_now).install()

        assert [m.sequence for m in result.migrations] == [
            "20240131120000",
            "20240131120001",
        ]

    def test_template_context(self, config, engine_root, app_root, fixed_now):
        """Engine name and migration number reach the template."""
        _installer(config, engine_root, fixed_now, engine_name="cms").install()

        content = (app_root / "db" / "migrate" / "002_create_pages.py").read_text(
            encoding="utf-8"
        )
        assert content.startswith("# cms migration 002\n")

    def test_engine_name_defaults_to_directory(self, config, engine_root, fixed_now):
        """Without an explicit name the directory name is used."""
        installer = _installer(config, engine_root, fixed_now)
        assert installer.engine_name == "blog"

    def test_rerun_skips_installed(self, config, engine_root, app_root, fixed_now):
        """Installing twice does not duplicate migrations."""
        _installer(config, engine_root, fixed_now).install()
        second = _installer(config, engine_root, fixed_now).install()

        assert second.migrations == []
        assert len(list_migration_names(app_root / "db" / "migrate")) == 2
        reasons = {s.destination.name: s.reason for s in second.skipped}
        assert reasons["001_add_slug.py"] == "already installed"
        assert reasons["002_create_pages.py"] == "already installed"

    def test_conflict_error_mode_raises(self, config, engine_root, app_root, fixed_now):
        """on_conflict=error refuses to install over an existing name."""
        migrate = app_root / "db" / "migrate"
        migrate.mkdir(parents=True)
        (migrate / "005_add_slug.py").write_text("")
        config = replace(config, on_conflict=ConflictMode.ERROR)

        with pytest.raises(MigrationExistsError) as exc_info:
            _installer(config, engine_root, fixed_now).install()

        assert exc_info.value.existing == "005_add_slug.py"

    def test_dry_run_writes_nothing(self, config, engine_root, app_root, fixed_now):
        """Dry run plans distinct names without touching the disk."""
        result = _installer(config, engine_root, fixed_now).install(dry_run=True)

        assert result.dry_run
        assert [m.destination.name for m in result.migrations] == [
            "001_add_slug.py",
            "002_create_pages.py",
        ]
        assert not (app_root / "db").exists()

    def test_plain_migration_with_braces(self, config, engine_root, app_root, fixed_now):
        """Brace-heavy Python migrations install unchanged."""
        text = 'TEMPLATE = "{{}}".format()\n'
        (engine_root / "db" / "migrate" / "fmt.py").write_text(text, encoding="utf-8")

        _installer(config, engine_root, fixed_now).install()

        installed = app_root / "db" / "migrate" / "003_fmt.py"
        assert installed.read_text(encoding="utf-8") == text

    def test_render_failure_keeps_partial_result(
        self, config, engine_root, app_root, fixed_now
    ):
        """A failing template reports what was written before it."""
        (engine_root / "db" / "migrate" / "zap_cache.py.j2").write_text(
            "# {{ undefined_value }}\n", encoding="utf-8"
        )

        with pytest.raises(MaterializeError) as exc_info:
            _installer(config, engine_root, fixed_now).install()

        partial = exc_info.value.result
        assert [m.destination.name for m in partial.migrations] == [
            "001_add_slug.py",
            "002_create_pages.py",
        ]
        assert partial.seeds == []
        assert list_migration_names(app_root / "db" / "migrate") == [
            "001_add_slug.py",
            "002_create_pages.py",
        ]

    def test_missing_engine_raises(self, config, tmp_path, fixed_now):
        """A missing engine is reported before anything is written."""
        with pytest.raises(EngineNotFoundError):
            _installer(config, tmp_path / "missing", fixed_now).install()


class TestSeeds:
    """Tests for installing seed files."""

    def test_seeds_copied_to_host_db(self, config, engine_root, app_root, fixed_now):
        """Seeds keep their relative location under db/."""
        result = _installer(config, engine_root, fixed_now).install()

        assert len(result.seeds) == 2
        assert (app_root / "db" / "seeds.py").is_file()
        assert (app_root / "db" / "seeds" / "pages.py").read_text(
            encoding="utf-8"
        ) == 'PAGES = [{"title": "Home"}]\n'

    def test_existing_seed_skipped(self, config, engine_root, app_root, fixed_now):
        """Existing seed files are left alone by default."""
        (app_root / "db").mkdir()
        (app_root / "db" / "seeds.py").write_text("# local\n")

        result = _installer(config, engine_root, fixed_now).install()

        assert (app_root / "db" / "seeds.py").read_text() == "# local\n"
        assert [s.reason for s in result.skipped] == ["file exists"]

    def test_overwrite_seeds(self, config, engine_root, app_root, fixed_now):
        """overwrite_seeds replaces existing seed files."""
        (app_root / "db").mkdir()
        (app_root / "db" / "seeds.py").write_text("# local\n")
        config = replace(config, overwrite_seeds=True)

        _installer(config, engine_root, fixed_now).install()

        assert (app_root / "db" / "seeds.py").read_text() == "from .seeds import pages\n"


class TestPostInstallMessage:
    """Tests for the post-install banner."""

    def test_contains_migrate_command(self, config, engine_root, fixed_now):
        """Banner tells the user which command to run."""
        config = replace(config, migrate_command="make migrate")

        message = _installer(config, engine_root, fixed_now).post_install_message()

        assert "Now run:" in message
        assert "make migrate" in message
