"""Skill data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

UNVERSIONED = "unversioned"


class SkillSource(str, Enum):
    """Where a skill's files come from.

    Attributes:
        LOCAL: A directory in the local skills repository (linked in place).
        REMOTE: A fetched copy (always copied, never linked).
    """

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class Skill:
    """Immutable snapshot of one skill, read fresh on every invocation.

    Attributes:
        name: Kebab-case skill name from the front matter.
        description: Human-readable description (may span lines).
        version: Version string; empty when unversioned.
        dir_name: Name of the skill directory in the repository.
        path: Absolute path to the skill directory.
        source: Whether the skill is local or remote.
        body: Markdown content after the front matter.
        allowed_tools: Tool names the skill may use.
        reference_files: Reference documents, relative to ``path``.
        example_files: Example files, relative to ``path``.
        asset_files: Asset files, relative to ``path``.
    """

    name: str
    description: str = ""
    version: str = ""
    dir_name: str = ""
    path: Path = field(default_factory=Path)
    source: SkillSource = SkillSource.LOCAL
    body: str = ""
    allowed_tools: tuple[str, ...] = ()
    reference_files: tuple[str, ...] = ()
    example_files: tuple[str, ...] = ()
    asset_files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.dir_name:
            object.__setattr__(self, "dir_name", self.name)

    @property
    def display_version(self) -> str:
        """Version for display, ``"unversioned"`` when empty."""
        return self.version or UNVERSIONED

    @property
    def has_references(self) -> bool:
        """Whether the skill ships reference files."""
        return bool(self.reference_files)

    @classmethod
    def stub(cls, name: str, dir_name: str = "") -> Skill:
        """Placeholder for a skill that is no longer in the repository.

        Uninstall only needs the name and directory name to locate artifacts.
        """
        return cls(name=name, dir_name=dir_name or name)
