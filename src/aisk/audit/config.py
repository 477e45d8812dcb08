"""Configuration model for the audit log."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_AUDIT_FILENAME = "audit.log"
DEFAULT_MAX_SIZE_MB = 5
DEFAULT_MAX_BACKUPS = 3

_BYTES_PER_MB = 1024 * 1024


class AuditConfig(BaseModel):
    """Settings consumed by ``AuditLogger``.

    Built from ``AiskSettings.audit_config()`` rather than read from the
    environment directly, so tests and embedders can pass an explicit object.

    Attributes:
        enabled: Whether audit events are written at all.
        log_path: Primary audit log file.
        max_bytes: Rotate when the primary file reaches this size.
        max_backups: Number of rotated files to keep. ``0`` discards the
            primary file instead of rotating it.
    """

    enabled: bool = Field(
        default=True,
        description="Whether audit events are written",
    )
    log_path: Path = Field(
        default=Path.home() / ".aisk" / DEFAULT_AUDIT_FILENAME,
        description="Primary audit log file",
    )
    max_bytes: int = Field(
        default=DEFAULT_MAX_SIZE_MB * _BYTES_PER_MB,
        gt=0,
        description="Rotation threshold in bytes",
    )
    max_backups: int = Field(
        default=DEFAULT_MAX_BACKUPS,
        ge=0,
        description="Number of rotated backups to keep",
    )

    @classmethod
    def from_megabytes(
        cls,
        *,
        enabled: bool,
        log_path: Path,
        max_size_mb: int,
        max_backups: int,
    ) -> AuditConfig:
        """Build a config from a size expressed in megabytes."""
        return cls(
            enabled=enabled,
            log_path=log_path,
            max_bytes=max_size_mb * _BYTES_PER_MB,
            max_backups=max_backups,
        )
