"""Compare installed skill versions with the repository."""

from __future__ import annotations

from dataclasses import dataclass, field

from aisk.manifest.models import Installation
from aisk.skills.loader import find_skill
from aisk.skills.models import UNVERSIONED, Skill


@dataclass
class UpdateInfo:
    """Version status of one installed skill.

    Attributes:
        skill_name: Skill name as recorded in the ledger.
        installed_version: Version recorded at install time.
        available_version: Version currently in the repository.
        clients: Clients the skill is installed on.
        missing: The skill is no longer present in the repository.
    """

    skill_name: str
    installed_version: str
    available_version: str = ""
    clients: list[str] = field(default_factory=list)
    missing: bool = False

    @property
    def has_update(self) -> bool:
        """Whether the repository version differs from the installed one."""
        return not self.missing and self.installed_version != self.available_version


def check_updates(installations: list[Installation], skills: list[Skill]) -> list[UpdateInfo]:
    """Report installed skills whose repository version has changed.

    Installations are grouped per skill name in ledger order; the first
    recorded version of a skill is the one compared.

    Args:
        installations: Ledger records.
        skills: Skills currently in the repository.

    Returns:
        One entry per installed skill.
    """
    results: dict[str, UpdateInfo] = {}
    for inst in installations:
        info = results.get(inst.skill_name)
        if info is None:
            skill = find_skill(skills, inst.skill_name)
            info = UpdateInfo(
                skill_name=inst.skill_name,
                installed_version=inst.skill_version or UNVERSIONED,
                available_version=skill.display_version if skill else "",
                missing=skill is None,
            )
            results[inst.skill_name] = info
        if inst.client_id not in info.clients:
            info.clients.append(inst.client_id)
    return list(results.values())
