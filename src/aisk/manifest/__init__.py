"""Installation ledger and the lock that serializes access to it.

Classes:
    Manifest: In-memory ledger with load/save and query helpers.
    Installation: One installed skill on one client in one scope.
    FileLock: Exclusive marker-file lock at ``<manifest>.lock``.

Exceptions:
    ManifestError: Base exception for ledger and lock errors.
    ManifestParseError: The manifest file is corrupt.
    LockTimeoutError: The lock was not acquired before the deadline.
"""

from __future__ import annotations

from aisk.manifest.errors import LockTimeoutError, ManifestError, ManifestParseError
from aisk.manifest.ledger import Manifest
from aisk.manifest.lock import FileLock
from aisk.manifest.models import Installation

__all__ = [
    "FileLock",
    "Installation",
    "LockTimeoutError",
    "Manifest",
    "ManifestError",
    "ManifestParseError",
]
