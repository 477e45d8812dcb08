"""Managed block of ``.gitignore`` entries for project-scope installs.

aisk only touches the lines between ``# aisk managed`` and
``# end aisk managed``; the rest of the file belongs to the user.
"""

from __future__ import annotations

import logging
from pathlib import Path

from aisk.clients.models import ClientID

logger = logging.getLogger(__name__)

SECTION_START = "# aisk managed"
SECTION_END = "# end aisk managed"

GITIGNORE_FILENAME = ".gitignore"

_CLIENT_PATTERNS: dict[ClientID, tuple[str, ...]] = {
    ClientID.CLAUDE: (".claude/skills/",),
    ClientID.CURSOR: (".cursor/rules/",),
    ClientID.WINDSURF: (".windsurf/rules/",),
    ClientID.COPILOT: (".github/copilot-instructions.md",),
    ClientID.GEMINI: ("GEMINI.md",),
    ClientID.CODEX: ("AGENTS.md",),
}


def patterns_for_client(client_id: str, install_path: str = "") -> list[str]:
    """Ignore patterns covering a client's project-scope artifacts.

    Unknown clients fall back to ``install_path`` when one is given.
    """
    try:
        return list(_CLIENT_PATTERNS[ClientID(client_id)])
    except ValueError:
        return [install_path] if install_path else []


def parse_managed_entries(content: str) -> list[str]:
    """Entries inside the managed block, in file order."""
    entries: list[str] = []
    in_section = False
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped == SECTION_START:
            in_section = True
        elif stripped == SECTION_END:
            in_section = False
        elif in_section and stripped and not stripped.startswith("#"):
            if stripped not in entries:
                entries.append(stripped)
    return entries


def _build_section(entries: list[str]) -> str:
    return "\n".join([SECTION_START, *entries, SECTION_END])


def _section_span(content: str) -> tuple[int, int] | None:
    start = content.find(SECTION_START)
    if start < 0:
        return None
    end = content.find(SECTION_END, start)
    if end < 0:
        return None
    return start, end + len(SECTION_END)


def _replace_section(content: str, entries: list[str]) -> str:
    section = _build_section(entries)
    span = _section_span(content)
    if span is not None:
        before = content[: span[0]]
        after = content[span[1] :].lstrip("\n")
        result = before + section + "\n"
        if after:
            result += "\n" + after
        return result

    result = content.rstrip("\n")
    if result:
        result += "\n\n"
    return result + section + "\n"


def _remove_section(content: str) -> str:
    span = _section_span(content)
    if span is None:
        return content

    before = content[: span[0]].rstrip("\n")
    after = content[span[1] :].lstrip("\n")
    if before and after:
        return f"{before}\n\n{after}"
    if after:
        return after
    if before:
        return before + "\n"
    return ""


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def ensure_entries(path: Path, entries: list[str]) -> list[str]:
    """Add entries to the managed block, creating the file if needed.

    The block is kept sorted.

    Args:
        path: ``.gitignore`` file.
        entries: Patterns that must be present.

    Returns:
        Entries that were not present before.
    """
    path = Path(path)
    content = _read(path)
    existing = parse_managed_entries(content)
    added = [entry for entry in dict.fromkeys(entries) if entry not in existing]
    if not added:
        return []

    path.write_text(_replace_section(content, sorted({*existing, *added})), encoding="utf-8")
    logger.debug("Added %s to %s", added, path)
    return added


def remove_entries(path: Path, entries: list[str]) -> list[str]:
    """Remove entries from the managed block.

    The block is deleted entirely once it is empty. A missing file is left
    alone.

    Returns:
        Entries that were actually removed.
    """
    path = Path(path)
    content = _read(path)
    existing = parse_managed_entries(content)
    if not existing:
        return []

    targets = set(entries)
    removed = [entry for entry in existing if entry in targets]
    if not removed:
        return []

    remaining = sorted(entry for entry in existing if entry not in targets)
    updated = _replace_section(content, remaining) if remaining else _remove_section(content)
    path.write_text(updated, encoding="utf-8")
    logger.debug("Removed %s from %s", removed, path)
    return removed
