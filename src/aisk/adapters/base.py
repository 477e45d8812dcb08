"""Adapter contract shared by every client representation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, Field

from aisk.skills.models import Skill
from aisk.types import Scope


class InstallOptions(BaseModel):
    """Options for one adapter invocation.

    Attributes:
        scope: Global or project installation.
        include_refs: Inline reference files into generated content.
        dry_run: Describe the change without applying it.
    """

    scope: Scope = Field(default=Scope.GLOBAL, description="Installation scope")
    include_refs: bool = Field(default=False, description="Inline reference files")
    dry_run: bool = Field(default=False, description="Describe without applying")


class Adapter(ABC):
    """Maps one skill onto a client's on-disk representation.

    Implementations must be idempotent: installing twice leaves the same
    state as installing once, and uninstalling something absent succeeds.
    Filesystem errors propagate as ``OSError``.
    """

    @abstractmethod
    def install(self, skill: Skill, target_path: Path, options: InstallOptions) -> None:
        """Materialize ``skill`` at ``target_path``."""

    @abstractmethod
    def uninstall(self, skill: Skill, target_path: Path) -> None:
        """Remove whatever ``install`` created for ``skill``."""

    @abstractmethod
    def describe(self, skill: Skill, target_path: Path, options: InstallOptions) -> str:
        """Return a one-line description of what ``install`` would do.

        Never touches the filesystem.
        """
