"""Root settings for aisk.

Values come from (highest priority first) constructor arguments,
``AISK_``-prefixed environment variables, a ``.env`` file, then defaults.
Nested models use ``__`` as delimiter, e.g. ``AISK_LOGGING__LEVEL=DEBUG``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aisk.audit.config import (
    DEFAULT_AUDIT_FILENAME,
    DEFAULT_MAX_BACKUPS,
    DEFAULT_MAX_SIZE_MB,
    AuditConfig,
)
from aisk.config.logging_config import LoggingConfig
from aisk.config.paths import CACHE_DIRNAME, MANIFEST_FILENAME, AppPaths

APP_DIRNAME = ".aisk"

_TRUTHY = frozenset({"", "1", "true", "yes", "on"})


class AiskSettings(BaseSettings):
    """Process-wide configuration, built once and passed to collaborators.

    Example::

        settings = AiskSettings()
        paths = settings.resolve_paths()
        audit = AuditLogger(settings.audit_config(), command="install")

    Attributes:
        home_dir: User home directory.
        app_dir: Application state directory; ``<home>/.aisk`` when unset.
        skills_path: Local skills repository; current directory when unset.
        lock_timeout_seconds: How long to wait for the manifest lock.
        audit_enabled: Whether the audit log is written.
        audit_log_path: Audit log file; ``<app_dir>/audit.log`` when unset.
        audit_max_size_mb: Rotation threshold in megabytes.
        audit_max_backups: Rotated audit files to keep.
        logging: Diagnostic logging settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="AISK_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    home_dir: Path = Field(default_factory=Path.home, description="User home directory")
    app_dir: Path | None = Field(default=None, description="Application state directory")
    skills_path: Path | None = Field(default=None, description="Local skills repository")
    lock_timeout_seconds: float = Field(default=5.0, ge=0, description="Manifest lock timeout")

    audit_enabled: bool = Field(default=True, description="Write the audit log")
    audit_log_path: Path | None = Field(default=None, description="Audit log file")
    audit_max_size_mb: int = Field(default=DEFAULT_MAX_SIZE_MB, description="Rotation size (MB)")
    audit_max_backups: int = Field(default=DEFAULT_MAX_BACKUPS, description="Backups to keep")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("audit_enabled", mode="before")
    @classmethod
    def _parse_enabled(cls, value: object) -> object:
        # Only explicit truthy spellings keep auditing on.
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return value

    @field_validator("audit_max_size_mb", mode="before")
    @classmethod
    def _parse_max_size(cls, value: object) -> int:
        parsed = _as_int(value)
        return parsed if parsed is not None and parsed > 0 else DEFAULT_MAX_SIZE_MB

    @field_validator("audit_max_backups", mode="before")
    @classmethod
    def _parse_max_backups(cls, value: object) -> int:
        parsed = _as_int(value)
        return parsed if parsed is not None and parsed >= 0 else DEFAULT_MAX_BACKUPS

    @property
    def resolved_app_dir(self) -> Path:
        """Application directory with the default applied."""
        return self.app_dir or self.home_dir / APP_DIRNAME

    def resolve_paths(self, cwd: Path | None = None) -> AppPaths:
        """Resolve every application path.

        Args:
            cwd: Directory used as the default skills repository.
        """
        app_dir = self.resolved_app_dir
        return AppPaths(
            home=self.home_dir,
            app_dir=app_dir,
            cache_dir=app_dir / CACHE_DIRNAME,
            manifest_path=app_dir / MANIFEST_FILENAME,
            skills_repo=self.skills_path or cwd or Path.cwd(),
            audit_log_path=self.audit_log_path or app_dir / DEFAULT_AUDIT_FILENAME,
        )

    def audit_config(self) -> AuditConfig:
        """Audit settings for ``AuditLogger``."""
        return AuditConfig.from_megabytes(
            enabled=self.audit_enabled,
            log_path=self.audit_log_path or self.resolved_app_dir / DEFAULT_AUDIT_FILENAME,
            max_size_mb=self.audit_max_size_mb,
            max_backups=self.audit_max_backups,
        )


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
