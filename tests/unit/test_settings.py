"""Tests for AiskSettings and path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from aisk.audit.config import DEFAULT_MAX_BACKUPS, DEFAULT_MAX_SIZE_MB
from aisk.config import AiskSettings, LoggingConfig, find_project_root


class TestAiskSettingsDefaults:
    """Tests for default values."""

    def test_paths_under_home(self, tmp_path: Path) -> None:
        """The app directory, manifest and audit log live under ~/.aisk."""
        settings = AiskSettings(_env_file=None, home_dir=tmp_path)
        paths = settings.resolve_paths(cwd=tmp_path / "work")

        assert paths.app_dir == tmp_path / ".aisk"
        assert paths.manifest_path == tmp_path / ".aisk" / "manifest.json"
        assert paths.cache_dir == tmp_path / ".aisk" / "cache"
        assert paths.audit_log_path == tmp_path / ".aisk" / "audit.log"
        assert paths.skills_repo == tmp_path / "work"

    def test_audit_config_defaults(self, tmp_path: Path) -> None:
        """Auditing is on with 5 MiB files and three backups."""
        config = AiskSettings(_env_file=None, home_dir=tmp_path).audit_config()
        assert config.enabled
        assert config.max_bytes == DEFAULT_MAX_SIZE_MB * 1024 * 1024
        assert config.max_backups == DEFAULT_MAX_BACKUPS
        assert config.log_path == tmp_path / ".aisk" / "audit.log"


class TestAiskSettingsEnvironment:
    """Tests for environment overrides."""

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """AISK_ variables override defaults."""
        monkeypatch.setenv("AISK_HOME_DIR", str(tmp_path))
        monkeypatch.setenv("AISK_SKILLS_PATH", str(tmp_path / "skills"))
        monkeypatch.setenv("AISK_AUDIT_LOG_PATH", str(tmp_path / "custom.log"))
        monkeypatch.setenv("AISK_AUDIT_MAX_SIZE_MB", "2")
        monkeypatch.setenv("AISK_AUDIT_MAX_BACKUPS", "0")
        monkeypatch.setenv("AISK_LOGGING__LEVEL", "debug")

        settings = AiskSettings(_env_file=None)
        config = settings.audit_config()

        assert settings.resolve_paths().skills_repo == tmp_path / "skills"
        assert config.log_path == tmp_path / "custom.log"
        assert config.max_bytes == 2 * 1024 * 1024
        assert config.max_backups == 0
        assert settings.logging.level == "DEBUG"

    @pytest.mark.parametrize("value", ["", "1", "true", "YES", "on"])
    def test_audit_enabled_values(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        """Empty and truthy spellings keep auditing on."""
        monkeypatch.setenv("AISK_AUDIT_ENABLED", value)
        assert AiskSettings(_env_file=None).audit_enabled is True

    @pytest.mark.parametrize("value", ["0", "false", "off", "nope"])
    def test_audit_disabled_values(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        """Anything else turns auditing off."""
        monkeypatch.setenv("AISK_AUDIT_ENABLED", value)
        assert AiskSettings(_env_file=None).audit_enabled is False

    @pytest.mark.parametrize("value", ["0", "-3", "abc"])
    def test_invalid_size_falls_back(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        """Non-positive or unparseable sizes use the default."""
        monkeypatch.setenv("AISK_AUDIT_MAX_SIZE_MB", value)
        assert AiskSettings(_env_file=None).audit_max_size_mb == DEFAULT_MAX_SIZE_MB

    @pytest.mark.parametrize("value", ["-1", "many"])
    def test_invalid_backups_fall_back(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        """Negative or unparseable backup counts use the default."""
        monkeypatch.setenv("AISK_AUDIT_MAX_BACKUPS", value)
        assert AiskSettings(_env_file=None).audit_max_backups == DEFAULT_MAX_BACKUPS

    def test_dotenv_file(self, tmp_path: Path) -> None:
        """Values are read from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("AISK_LOCK_TIMEOUT_SECONDS=1.5\n", encoding="utf-8")
        assert AiskSettings(_env_file=env_file).lock_timeout_seconds == 1.5


class TestLoggingConfig:
    """Tests for logging settings."""

    def test_level_normalized(self) -> None:
        """Level names are upper-cased."""
        assert LoggingConfig(level="info").level == "INFO"

    def test_invalid_level(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")


class TestFindProjectRoot:
    """Tests for project root discovery."""

    def test_finds_marker_in_ancestor(self, tmp_path: Path) -> None:
        """The nearest directory holding a marker is returned."""
        (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == tmp_path

    def test_git_directory_marker(self, project_dir: Path) -> None:
        """A .git directory marks the root."""
        assert find_project_root(project_dir) == project_dir
