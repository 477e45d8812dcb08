"""Persistent ledger of installed skills.

The manifest is a single JSON document listing every ``Installation``. A
``Manifest`` instance is an in-memory copy owned by one command invocation:
it is loaded once inside the lock, mutated, and saved once.

Saving writes a temporary sibling file and renames it over the target, so
readers only ever observe the previous or the new complete document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from aisk.manifest.errors import ManifestParseError
from aisk.manifest.models import Installation, ManifestDocument
from aisk.types import Scope

logger = logging.getLogger(__name__)

# Mode of the saved ledger; mkstemp creates files as 0600.
MANIFEST_MODE = 0o644


class Manifest:
    """In-memory ledger bound to a file path.

    Example::

        manifest = Manifest.load(paths.manifest_path)
        manifest.add(installation)
        manifest.save()

    Args:
        path: File the ledger is loaded from and saved to.
        installations: Initial records, in insertion order.
    """

    def __init__(self, path: Path, installations: list[Installation] | None = None) -> None:
        """Initialize the manifest.

        Args:
            path: File the ledger is loaded from and saved to.
            installations: Initial records, in insertion order.
        """
        self.path = Path(path)
        self._installations: list[Installation] = list(installations or [])

    @classmethod
    def load(cls, path: Path) -> Manifest:
        """Read the ledger from disk.

        Args:
            path: Manifest file path.

        Returns:
            The loaded ledger, or an empty one if the file does not exist.

        Raises:
            ManifestParseError: If the file is not a valid manifest document.
            OSError: For any other read failure.
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No manifest at %s, starting empty", path)
            return cls(path)
        except UnicodeDecodeError as exc:
            raise ManifestParseError(path, str(exc)) from exc

        try:
            document = ManifestDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise ManifestParseError(path, str(exc)) from exc
        return cls(path, document.installations)

    def save(self) -> None:
        """Atomically write the full ledger to ``path``.

        Raises:
            OSError: If the directory cannot be created or the write fails.
                The previous file is left intact in that case.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = ManifestDocument(installations=self._installations)
        payload = json.dumps(document.model_dump(mode="json"), indent=2) + "\n"

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=self.path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.chmod(tmp_name, MANIFEST_MODE)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @property
    def installations(self) -> list[Installation]:
        """Copy of all records in insertion order."""
        return list(self._installations)

    def __len__(self) -> int:
        return len(self._installations)

    def add(self, installation: Installation) -> None:
        """Upsert a record.

        Any record with the same ``(skill_name, client_id, scope)`` is
        replaced; the new record goes to the end.
        """
        self.remove(installation.skill_name, installation.client_id, installation.scope)
        self._installations.append(installation)

    def remove(self, skill_name: str, client_id: str, scope: Scope | str) -> None:
        """Delete the record with the given identity, if present."""
        key = (skill_name, client_id, Scope(scope))
        self._installations = [inst for inst in self._installations if inst.key != key]

    def remove_all(self, skill_name: str) -> None:
        """Delete every record of one skill."""
        self._installations = [
            inst for inst in self._installations if inst.skill_name != skill_name
        ]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find(self, skill_name: str, client_id: str | None = None) -> list[Installation]:
        """Records of one skill, optionally limited to one client."""
        return [
            inst
            for inst in self._installations
            if inst.skill_name == skill_name and (not client_id or inst.client_id == client_id)
        ]

    def find_by_client(self, client_id: str) -> list[Installation]:
        """Records installed on one client."""
        return [inst for inst in self._installations if inst.client_id == client_id]

    def find_by_scope(self, scope: Scope | str) -> list[Installation]:
        """Records installed in one scope."""
        scope = Scope(scope)
        return [inst for inst in self._installations if inst.scope == scope]

    def all_skill_names(self) -> list[str]:
        """Distinct skill names in first-seen order."""
        return list(dict.fromkeys(inst.skill_name for inst in self._installations))
