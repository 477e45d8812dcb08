"""SKILL.md parsing and local repository scanning.

A skills repository is a directory whose immediate subdirectories each hold
one skill: a ``SKILL.md`` file with YAML front matter, plus optional
``reference/`` (or ``references/``), ``examples/`` and ``assets/``
directories.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from aisk.skills.errors import SkillLoadError, SkillNotFoundError, SkillParseError
from aisk.skills.models import Skill, SkillSource

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"

# Checked in order; the first existing directory wins.
_REFERENCE_DIRS = ("reference", "references")
_EXAMPLE_DIR = "examples"
_ASSET_DIR = "assets"

_SKIPPED_DIRS = frozenset({"node_modules"})

# Front matter fields read as written, without YAML type resolution.
_TEXT_FIELDS = ("name", "description", "version")

# Separator placed between the body and inlined reference files.
REFERENCE_SEPARATOR = "\n\n---\n\n"


def parse_skill_md(content: str, path: Path) -> tuple[dict[str, Any], str]:
    """Split SKILL.md content into front matter and body.

    The file must start with a ``---`` line; front matter ends at the next
    line consisting of ``---``. Leading blank lines of the body are dropped.

    Args:
        content: Raw file content.
        path: File path (for error messages).

    Returns:
        Tuple of (front matter mapping, markdown body).

    Raises:
        SkillParseError: If delimiters are missing or the YAML is invalid.
    """
    content = content.replace("\r\n", "\n")
    if not content.startswith("---"):
        raise SkillParseError(path, "missing opening '---' front matter delimiter")

    lines = content.split("\n")
    closing = next(
        (index for index, line in enumerate(lines[1:], start=1) if line.strip() == "---"),
        None,
    )
    if closing is None:
        raise SkillParseError(path, "missing closing '---' front matter delimiter")

    front_matter = "\n".join(lines[1:closing])
    body = "\n".join(lines[closing + 1 :]).lstrip("\n")

    try:
        data = yaml.safe_load(front_matter)
    except yaml.YAMLError as exc:
        detail = str(exc)
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            detail = f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}"
        raise SkillParseError(path, detail) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SkillParseError(path, f"front matter must be a mapping, got {type(data).__name__}")

    # Plain scalars such as `version: 1.10` must keep their source text.
    raw = yaml.load(front_matter, Loader=yaml.BaseLoader) or {}
    for key in _TEXT_FIELDS:
        if data.get(key) is not None and isinstance(raw.get(key), str):
            data[key] = raw[key]
    return data, body


def _list_files(skill_dir: Path, subdir: str) -> tuple[str, ...]:
    root = skill_dir / subdir
    if not root.is_dir():
        return ()
    return tuple(
        sorted(
            path.relative_to(skill_dir).as_posix()
            for path in root.rglob("*")
            if path.is_file() and not path.name.startswith(".")
        )
    )


def _reference_files(skill_dir: Path) -> tuple[str, ...]:
    for subdir in _REFERENCE_DIRS:
        files = _list_files(skill_dir, subdir)
        if files:
            return files
    return ()


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _allowed_tools(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part for part in value.replace(",", " ").split() if part)
    return tuple(str(item) for item in value)


def load_skill(skill_dir: Path, source: SkillSource = SkillSource.LOCAL) -> Skill:
    """Load one skill directory.

    Args:
        skill_dir: Directory containing SKILL.md.
        source: Whether the directory is a local checkout or a fetched copy.

    Returns:
        The loaded skill.

    Raises:
        SkillNotFoundError: If the directory has no SKILL.md.
        SkillParseError: If the front matter is malformed.
        SkillLoadError: If the file cannot be read.
    """
    skill_dir = Path(skill_dir).absolute()
    skill_md = skill_dir / SKILL_FILENAME
    if not skill_md.is_file():
        raise SkillNotFoundError(skill_dir.name, skill_dir)

    try:
        content = skill_md.read_text(encoding="utf-8")
    except OSError as exc:
        raise SkillLoadError(skill_md, exc) from exc

    data, body = parse_skill_md(content, skill_md)
    name = _as_text(data.get("name")).strip() or skill_dir.name

    return Skill(
        name=name,
        description=_as_text(data.get("description")).strip(),
        version=_as_text(data.get("version")).strip(),
        dir_name=skill_dir.name,
        path=skill_dir,
        source=source,
        body=body,
        allowed_tools=_allowed_tools(data.get("allowed-tools")),
        reference_files=_reference_files(skill_dir),
        example_files=_list_files(skill_dir, _EXAMPLE_DIR),
        asset_files=_list_files(skill_dir, _ASSET_DIR),
    )


def scan_local(repo_path: Path) -> list[Skill]:
    """Load every skill in a local repository.

    Hidden directories and ``node_modules`` are ignored. Directories without
    SKILL.md are skipped silently; malformed skills are skipped with a
    warning.

    Args:
        repo_path: Repository root.

    Returns:
        Skills sorted by directory name.

    Raises:
        SkillLoadError: If the repository directory cannot be listed.
    """
    repo_path = Path(repo_path)
    try:
        entries = sorted(repo_path.iterdir())
    except OSError as exc:
        raise SkillLoadError(repo_path, exc) from exc

    skills: list[Skill] = []
    for entry in entries:
        if not entry.is_dir() or entry.name.startswith(".") or entry.name in _SKIPPED_DIRS:
            continue
        if not (entry / SKILL_FILENAME).is_file():
            continue
        try:
            skills.append(load_skill(entry))
        except (SkillParseError, SkillLoadError) as exc:
            logger.warning("Skipping %s: %s", entry.name, exc)
    return skills


def find_skill(skills: list[Skill], name: str) -> Skill | None:
    """Find a skill by name, falling back to its directory name."""
    for skill in skills:
        if skill.name == name:
            return skill
    for skill in skills:
        if skill.dir_name == name:
            return skill
    return None


def read_full_content(skill: Skill, include_refs: bool = False) -> str:
    """Return the skill body, optionally followed by its reference files.

    Each reference file is appended under a ``## Reference: <stem>`` heading
    after a horizontal-rule separator.

    Args:
        skill: Skill to render.
        include_refs: Inline reference files.

    Returns:
        Markdown content.

    Raises:
        SkillLoadError: If a reference file cannot be read.
    """
    if not include_refs or not skill.has_references:
        return skill.body

    parts = [skill.body, REFERENCE_SEPARATOR]
    for relative in skill.reference_files:
        ref_path = skill.path / relative
        try:
            data = ref_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SkillLoadError(ref_path, exc) from exc
        parts.append(f"## Reference: {Path(relative).stem}\n\n{data}\n\n")
    return "".join(parts)
