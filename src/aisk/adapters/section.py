"""Section adapter: one marker-delimited region per skill in a shared file."""

from __future__ import annotations

from pathlib import Path

from aisk.adapters.base import Adapter, InstallOptions
from aisk.adapters.sections import remove_section, upsert_section
from aisk.skills.loader import read_full_content
from aisk.skills.models import Skill


def render_section(skill: Skill, include_refs: bool = False) -> str:
    """Heading, description as a blockquote, then the body."""
    parts = [f"# {skill.name}\n\n"]
    if skill.description:
        parts.extend(f"> {line.strip()}\n" for line in skill.description.split("\n"))
        parts.append("\n")
    parts.append(read_full_content(skill, include_refs))
    return "".join(parts)


class SectionAdapter(Adapter):
    """Appends each skill as a section of one shared instructions file.

    Used by clients that read a single markdown file (``GEMINI.md``,
    ``AGENTS.md``, ``copilot-instructions.md``). ``target_path`` is the file
    itself.

    Args:
        client_name: Display name of the client, for logs.
    """

    def __init__(self, client_name: str = "") -> None:
        self.client_name = client_name

    def install(self, skill: Skill, target_path: Path, options: InstallOptions) -> None:
        upsert_section(Path(target_path), skill.name, render_section(skill, options.include_refs))

    def uninstall(self, skill: Skill, target_path: Path) -> None:
        remove_section(Path(target_path), skill.name)

    def describe(self, skill: Skill, target_path: Path, options: InstallOptions) -> str:
        return f"append skill section to {target_path}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client_name={self.client_name!r})"
