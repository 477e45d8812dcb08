"""Dual-mode adapter: shared-file section globally, one file per skill in projects."""

from __future__ import annotations

from pathlib import Path

from aisk.adapters.base import Adapter, InstallOptions
from aisk.adapters.sections import remove_section, upsert_section
from aisk.skills.loader import read_full_content
from aisk.skills.models import Skill
from aisk.types import Scope

PROJECT_EXTENSION = ".md"


def render_rule_markdown(skill: Skill, include_refs: bool = False) -> str:
    """Heading followed by the body."""
    return f"# {skill.name}\n\n{read_full_content(skill, include_refs)}"


class DualModeAdapter(Adapter):
    """Section-append in global scope, single rule file in project scope.

    Global scope targets a shared rules file; project scope targets a rules
    directory receiving ``<dir_name>.md``. Uninstall has no scope, so it
    removes the per-skill file when present and otherwise strips the section
    from a ``.md`` target.
    """

    def project_file(self, skill: Skill, target_path: Path) -> Path:
        """Per-skill rule file used in project scope."""
        return Path(target_path) / f"{skill.dir_name}{PROJECT_EXTENSION}"

    def install(self, skill: Skill, target_path: Path, options: InstallOptions) -> None:
        content = render_rule_markdown(skill, options.include_refs)
        if options.scope is Scope.GLOBAL:
            upsert_section(Path(target_path), skill.name, content)
            return

        Path(target_path).mkdir(parents=True, exist_ok=True)
        self.project_file(skill, target_path).write_text(content, encoding="utf-8")

    def uninstall(self, skill: Skill, target_path: Path) -> None:
        dest = self.project_file(skill, target_path)
        if dest.is_file():
            dest.unlink()
        elif Path(target_path).suffix == PROJECT_EXTENSION:
            remove_section(Path(target_path), skill.name)

    def describe(self, skill: Skill, target_path: Path, options: InstallOptions) -> str:
        if options.scope is Scope.GLOBAL:
            return f"append skill section to {target_path}"
        return f"write {self.project_file(skill, target_path)}"
