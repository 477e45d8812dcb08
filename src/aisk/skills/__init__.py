"""Skill repository access.

Classes:
    Skill: Immutable snapshot of one skill.
    UpdateInfo: Installed versus available version of a skill.

Enums:
    SkillSource: Local checkout or fetched copy.

Exceptions:
    SkillError: Base exception for skill repository errors.
    SkillNotFoundError: Skill is not in the repository.
    SkillParseError: SKILL.md front matter is malformed.
    SkillLoadError: Skill files cannot be read.
"""

from __future__ import annotations

from aisk.skills.errors import SkillError, SkillLoadError, SkillNotFoundError, SkillParseError
from aisk.skills.loader import (
    find_skill,
    load_skill,
    parse_skill_md,
    read_full_content,
    scan_local,
)
from aisk.skills.models import UNVERSIONED, Skill, SkillSource
from aisk.skills.updates import UpdateInfo, check_updates

__all__ = [
    "UNVERSIONED",
    "Skill",
    "SkillError",
    "SkillLoadError",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillSource",
    "UpdateInfo",
    "check_updates",
    "find_skill",
    "load_skill",
    "parse_skill_md",
    "read_full_content",
    "scan_local",
]
