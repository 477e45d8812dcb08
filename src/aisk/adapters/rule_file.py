"""Single-file adapter: one annotated rule file per skill."""

from __future__ import annotations

from pathlib import Path

from aisk.adapters.base import Adapter, InstallOptions
from aisk.skills.loader import read_full_content
from aisk.skills.models import Skill

RULE_EXTENSION = ".mdc"
DESCRIPTION_LIMIT = 200


def summarize_description(description: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """First line of ``description``, truncated to ``limit`` characters."""
    first_line = description.split("\n", 1)[0]
    if len(first_line) > limit:
        return first_line[: limit - 3] + "..."
    return first_line


def render_rule(skill: Skill, include_refs: bool = False) -> str:
    """Build the rule file: front matter block followed by the body."""
    header = (
        "---\n"
        f"description: {summarize_description(skill.description)}\n"
        "globs:\n"
        "alwaysApply: false\n"
        "---\n\n"
    )
    return header + read_full_content(skill, include_refs)


class RuleFileAdapter(Adapter):
    """Writes ``<target>/<dir_name>.mdc`` with rule front matter.

    The file is rewritten wholesale on every install.
    """

    extension = RULE_EXTENSION

    def destination(self, skill: Skill, target_path: Path) -> Path:
        """Rule file path for ``skill``."""
        return Path(target_path) / f"{skill.dir_name}{self.extension}"

    def install(self, skill: Skill, target_path: Path, options: InstallOptions) -> None:
        content = render_rule(skill, options.include_refs)
        Path(target_path).mkdir(parents=True, exist_ok=True)
        self.destination(skill, target_path).write_text(content, encoding="utf-8")

    def uninstall(self, skill: Skill, target_path: Path) -> None:
        self.destination(skill, target_path).unlink(missing_ok=True)

    def describe(self, skill: Skill, target_path: Path, options: InstallOptions) -> str:
        return f"write {self.destination(skill, target_path)}"
