"""Advisory cross-process lock guarding the manifest.

The lock is a zero-byte marker file created with ``O_CREAT | O_EXCL``, which
is atomic on local filesystems. A marker older than ``stale_after`` seconds
is assumed to belong to a crashed process and is reclaimed.

Not reentrant and not meant to be shared between threads. Filesystems that
do not implement exclusive create atomically (some network filesystems) get
no mutual-exclusion guarantee.
"""

from __future__ import annotations

import contextlib
import logging
import os
import time
from pathlib import Path
from types import TracebackType

from aisk.manifest.errors import LockTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
STALE_AFTER = 30.0
POLL_INTERVAL = 0.1


class FileLock:
    """Exclusive marker-file lock.

    Example::

        lock = FileLock.for_manifest(manifest_path)
        lock.acquire(timeout=5.0)
        try:
            ...
        finally:
            lock.release()

    Args:
        path: Marker file path.
        stale_after: Age in seconds after which a marker is reclaimed.
        poll_interval: Delay between attempts while contended.
    """

    def __init__(
        self,
        path: Path,
        *,
        stale_after: float = STALE_AFTER,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        """Initialize the lock without acquiring it.

        Args:
            path: Marker file path.
            stale_after: Age in seconds after which a marker is reclaimed.
            poll_interval: Delay between attempts while contended.
        """
        self.path = Path(path)
        self.stale_after = stale_after
        self.poll_interval = poll_interval
        self._held = False

    @classmethod
    def for_manifest(cls, manifest_path: Path, **kwargs: float) -> FileLock:
        """Lock guarding ``manifest_path`` (marker ``<manifest>.lock``)."""
        manifest_path = Path(manifest_path)
        return cls(manifest_path.with_name(manifest_path.name + ".lock"), **kwargs)

    @property
    def held(self) -> bool:
        """Whether this instance currently owns the marker."""
        return self._held

    def acquire(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Create the marker, waiting up to ``timeout`` seconds.

        Args:
            timeout: Soft deadline in seconds.

        Raises:
            LockTimeoutError: If the marker is still held by someone else
                when the deadline passes.
            OSError: If the marker directory cannot be created or the marker
                cannot be written for reasons other than contention.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        deadline = time.monotonic() + timeout

        while True:
            try:
                fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                pass
            else:
                os.close(fd)
                self._held = True
                logger.debug("Acquired lock %s", self.path)
                return

            if self._reclaim_if_stale():
                continue
            if time.monotonic() >= deadline:
                raise LockTimeoutError(self.path, timeout)
            time.sleep(self.poll_interval)

    def release(self) -> None:
        """Remove the marker. Errors are ignored."""
        with contextlib.suppress(OSError):
            self.path.unlink(missing_ok=True)
        self._held = False
        logger.debug("Released lock %s", self.path)

    def _reclaim_if_stale(self) -> bool:
        try:
            age = time.time() - self.path.stat().st_mtime
        except FileNotFoundError:
            # Released between our create attempt and the stat.
            return True
        if age <= self.stale_after:
            return False

        logger.warning("Removing stale lock %s (age %.1fs)", self.path, age)
        with contextlib.suppress(FileNotFoundError):
            self.path.unlink()
        return True

    def __enter__(self) -> FileLock:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
