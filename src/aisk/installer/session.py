"""Critical-section plumbing shared by the installation flows.

Every mutating command follows the same protocol:

1. try to take the manifest lock (failure is a warning, not an error);
2. load the ledger fresh from disk inside the critical section;
3. apply per-target changes and record them in memory;
4. save the ledger exactly once;
5. release the lock.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from aisk.audit.logger import AuditLogger
from aisk.manifest.errors import LockTimeoutError, ManifestError
from aisk.manifest.ledger import Manifest
from aisk.manifest.lock import DEFAULT_TIMEOUT, FileLock

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class ManifestSession:
    """Ledger loaded inside the critical section.

    Attributes:
        manifest: Ledger to mutate.
        locked: Whether the lock is held (``False`` after contention).
        audit: Logger for save events.
    """

    manifest: Manifest
    locked: bool
    audit: AuditLogger

    def save(self, **details: Any) -> None:
        """Persist the ledger and audit the outcome.

        Raises:
            OSError: If the write fails.
        """
        try:
            self.manifest.save()
        except OSError as exc:
            self.audit.log("manifest.save", "error", None, exc)
            raise
        self.audit.log(
            "manifest.save",
            "success",
            {"installations": len(self.manifest), **details},
        )


def _acquire(lock: FileLock, timeout: float, audit: AuditLogger) -> bool:
    audit.log("manifest.lock", "started", {"path": str(lock.path)})
    try:
        lock.acquire(timeout)
    except (LockTimeoutError, OSError) as exc:
        logger.warning("Proceeding without manifest lock: %s", exc)
        audit.log("manifest.lock", "error", None, exc)
        return False
    audit.log("manifest.lock", "success")
    return True


def _load(manifest_path: Path, audit: AuditLogger) -> Manifest:
    try:
        manifest = Manifest.load(manifest_path)
    except (ManifestError, OSError) as exc:
        audit.log("manifest.load", "error", None, exc)
        raise
    audit.log("manifest.load", "success", {"installations": len(manifest)})
    return manifest


@contextmanager
def manifest_session(
    manifest_path: Path,
    audit: AuditLogger,
    timeout: float = DEFAULT_TIMEOUT,
) -> Iterator[ManifestSession]:
    """Lock the manifest (best effort) and load it.

    The lock is released on exit whether or not the body raised. Saving is
    left to the caller so dry runs can skip it.

    Args:
        manifest_path: Ledger file.
        audit: Logger for lock and load events.
        timeout: Lock timeout in seconds.

    Yields:
        The session holding the freshly loaded ledger.

    Raises:
        ManifestParseError: If the ledger is corrupt.
    """
    lock = FileLock.for_manifest(manifest_path)
    locked = _acquire(lock, timeout, audit)
    try:
        yield ManifestSession(_load(manifest_path, audit), locked, audit)
    finally:
        if locked:
            lock.release()
            audit.log("manifest.lock", "released")


@contextmanager
def audited_command(audit: AuditLogger, details: Mapping[str, Any] | None = None) -> Iterator[None]:
    """Bracket a whole command with ``command.<name>`` events.

    Exceptions are recorded and re-raised.
    """
    action = f"command.{audit.command}"
    audit.log(action, "started", details)
    try:
        yield
    except Exception as exc:
        audit.log(action, "error", None, exc)
        raise
    audit.log(action, "success")
