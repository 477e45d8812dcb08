"""Append-only JSON-lines audit log with size-based rotation.

Every command invocation gets its own ``AuditLogger`` with a random run
identifier; each step of an installation flow emits one event. Events are
redacted before they are written.

Rotation happens before each write: when the primary file has reached
``max_bytes`` the oldest backup is deleted, ``<path>.i`` is shifted to
``<path>.i+1`` and the primary becomes ``<path>.1``.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from aisk.audit.config import AuditConfig
from aisk.audit.models import AuditEvent
from aisk.audit.redaction import redact_mapping, redact_text
from aisk.types import Scope

logger = logging.getLogger(__name__)


def new_run_id() -> str:
    """Generate a run identifier (16 hex characters)."""
    return secrets.token_hex(8)


def utc_timestamp(now_ns: int | None = None) -> str:
    """Format a UTC timestamp with nanosecond precision.

    Args:
        now_ns: Nanoseconds since the epoch. Uses the current time if ``None``.

    Returns:
        A string such as ``2025-01-02T03:04:05.123456789Z``.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    seconds, nanos = divmod(now_ns, 1_000_000_000)
    stamp = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{stamp.strftime('%Y-%m-%dT%H:%M:%S')}.{nanos:09d}Z"


def _scope_text(scope: Scope | str | None) -> str | None:
    if not scope:
        return None
    return scope.value if isinstance(scope, Scope) else str(scope)


def rotate_if_needed(path: Path, max_bytes: int, max_backups: int) -> bool:
    """Rotate ``path`` if it has reached ``max_bytes``.

    Args:
        path: Primary log file.
        max_bytes: Size threshold that triggers rotation.
        max_backups: Number of backups to keep. With ``0`` the primary file is
            deleted instead of renamed.

    Returns:
        True if a rotation (or deletion) happened.

    Raises:
        OSError: If a rename or delete fails.
    """
    try:
        size = path.stat().st_size
    except FileNotFoundError:
        return False
    if size < max_bytes:
        return False

    if max_backups <= 0:
        path.unlink(missing_ok=True)
        return True

    Path(f"{path}.{max_backups}").unlink(missing_ok=True)
    for index in range(max_backups - 1, 0, -1):
        source = Path(f"{path}.{index}")
        if source.exists():
            source.replace(Path(f"{path}.{index + 1}"))
    path.replace(Path(f"{path}.1"))
    return True


class AuditLogger:
    """Writes audit events for one command invocation.

    A disabled logger accepts every call and writes nothing, so callers never
    need to branch on configuration.

    Example::

        audit = AuditLogger(settings.audit_config(), command="install")
        audit.log("command.install", "started", {"skill": "demo"})

    Args:
        config: Audit configuration.
        command: Name of the command being audited.
    """

    def __init__(self, config: AuditConfig, command: str) -> None:
        """Initialize the logger.

        Args:
            config: Audit configuration.
            command: Name of the command being audited.
        """
        self._config = config
        self._command = command
        self._run_id = new_run_id()
        self._lock = threading.Lock()

    @classmethod
    def disabled(cls, command: str = "") -> AuditLogger:
        """Create a logger that records nothing."""
        return cls(AuditConfig(enabled=False), command)

    @property
    def enabled(self) -> bool:
        """Whether events are written."""
        return self._config.enabled

    @property
    def path(self) -> Path:
        """Primary audit log path."""
        return self._config.log_path

    @property
    def command(self) -> str:
        """Command name stamped on every event."""
        return self._command

    @property
    def run_id(self) -> str:
        """Run identifier, or an empty string when disabled."""
        return self._run_id if self.enabled else ""

    def log(
        self,
        action: str,
        status: str,
        details: Mapping[str, Any] | None = None,
        error: BaseException | str | None = None,
        *,
        skill: str | None = None,
        client_id: str | None = None,
        scope: Scope | str | None = None,
        target: str | Path | None = None,
    ) -> None:
        """Record one event.

        Args:
            action: Dotted action name.
            status: Step status.
            details: Structured context; sensitive keys are masked.
            error: Exception or message for a failed step.
            skill: Skill name.
            client_id: Client identifier.
            scope: Installation scope.
            target: Target path.
        """
        if not self.enabled:
            return
        self.log_event(
            AuditEvent(
                action=action,
                status=status,
                skill=skill,
                client_id=client_id,
                scope=_scope_text(scope),
                target=str(target) if target else None,
                details=dict(details) if details else None,
                error=str(error) if error else None,
            )
        )

    def log_event(self, event: AuditEvent) -> None:
        """Stamp, redact and append an event.

        Write failures are logged and never raised to the caller.

        Args:
            event: Event to record. The instance is not modified.
        """
        if not self.enabled:
            return

        error = event.error.strip() if event.error else None
        stamped = event.model_copy(
            update={
                "timestamp": utc_timestamp(),
                "run_id": self._run_id,
                "command": self._command,
                "details": redact_mapping(event.details),
                "error": redact_text(error) if error else None,
                "target": redact_text(event.target) if event.target else None,
            }
        )
        line = stamped.to_json_line() + "\n"

        with self._lock:
            try:
                self._append(line)
            except OSError as exc:
                logger.warning("Failed to write audit event to %s: %s", self.path, exc)

    def _append(self, line: str) -> None:
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        rotate_if_needed(path, self._config.max_bytes, self._config.max_backups)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line)
