"""Filesystem locations used by aisk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MANIFEST_FILENAME = "manifest.json"
CACHE_DIRNAME = "cache"

PROJECT_MARKERS = (".git", "package.json", "go.mod", "Cargo.toml", "pyproject.toml")


@dataclass(frozen=True)
class AppPaths:
    """Resolved application paths.

    Attributes:
        home: User home directory.
        app_dir: Application state directory (``~/.aisk``).
        cache_dir: Cache for fetched skills.
        manifest_path: Installation ledger.
        skills_repo: Local skills repository.
        audit_log_path: Primary audit log.
    """

    home: Path
    app_dir: Path
    cache_dir: Path
    manifest_path: Path
    skills_repo: Path
    audit_log_path: Path


def find_project_root(start: Path) -> Path | None:
    """Walk up from ``start`` to the nearest directory with a project marker.

    Returns:
        The project root, or ``None`` if the filesystem root is reached.
    """
    current = Path(start).absolute()
    for directory in (current, *current.parents):
        if any((directory / marker).exists() for marker in PROJECT_MARKERS):
            return directory
    return None
