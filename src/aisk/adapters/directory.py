"""Directory-mirror adapter: one directory per skill."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from aisk.adapters.base import Adapter, InstallOptions
from aisk.adapters.errors import AdapterError
from aisk.skills.models import Skill, SkillSource

logger = logging.getLogger(__name__)


def remove_path(path: Path) -> None:
    """Remove a symlink, file or directory tree; no-op if absent."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


class DirectoryAdapter(Adapter):
    """Mirrors the skill directory under the client's skills folder.

    Local skills are symlinked so edits in the repository take effect
    immediately; remote skills are copied recursively. Any previous
    destination is removed first, whatever its type.
    """

    @staticmethod
    def destination(skill: Skill, target_path: Path) -> Path:
        """Where the mirror of ``skill`` lives."""
        if not skill.dir_name:
            raise AdapterError(f"Skill '{skill.name}' has no directory name")
        return Path(target_path) / skill.dir_name

    def install(self, skill: Skill, target_path: Path, options: InstallOptions) -> None:
        dest = self.destination(skill, target_path)
        Path(target_path).mkdir(parents=True, exist_ok=True)
        remove_path(dest)

        source = Path(skill.path).absolute()
        if skill.source is SkillSource.LOCAL:
            dest.symlink_to(source, target_is_directory=True)
            logger.debug("Linked %s -> %s", dest, source)
        else:
            shutil.copytree(source, dest)
            logger.debug("Copied %s -> %s", source, dest)

    def uninstall(self, skill: Skill, target_path: Path) -> None:
        remove_path(self.destination(skill, target_path))

    def describe(self, skill: Skill, target_path: Path, options: InstallOptions) -> str:
        dest = self.destination(skill, target_path)
        if skill.source is SkillSource.LOCAL:
            return f"symlink {dest} -> {skill.path}"
        return f"copy {skill.path} -> {dest}"
