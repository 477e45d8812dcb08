"""Marker-delimited sections inside shared markdown files.

Several clients read a single instructions file shared by every skill (and
by the user). Each skill owns the region between::

    <!-- aisk:start:<name> -->
    ...
    <!-- aisk:end:<name> -->

Everything outside the markers belongs to someone else and is preserved.
The text functions are pure; ``upsert_section`` and ``remove_section`` apply
them to a file.
"""

from __future__ import annotations

from pathlib import Path

from aisk.adapters.errors import SectionMarkerError

MARKER_NAMESPACE = "aisk"


def start_marker(name: str) -> str:
    """Opening marker for a skill's section."""
    return f"<!-- {MARKER_NAMESPACE}:start:{name} -->"


def end_marker(name: str) -> str:
    """Closing marker for a skill's section."""
    return f"<!-- {MARKER_NAMESPACE}:end:{name} -->"


def wrap_section(name: str, content: str) -> str:
    """Surround ``content`` with the skill's markers (no trailing newline)."""
    body = content.rstrip("\n")
    return f"{start_marker(name)}\n{body}\n{end_marker(name)}"


def _locate(text: str, name: str) -> tuple[int, int] | None:
    start = text.find(start_marker(name))
    if start < 0:
        return None
    end = text.find(end_marker(name), start + len(start_marker(name)))
    if end < 0:
        raise SectionMarkerError(name)
    return start, end + len(end_marker(name))


def apply_section(text: str, name: str, content: str) -> str:
    """Insert or replace a skill's section.

    An existing section is replaced in place. Otherwise the section is
    appended, separated from existing content by exactly one blank line.

    Raises:
        SectionMarkerError: If a start marker has no matching end marker.
    """
    wrapped = wrap_section(name, content)
    span = _locate(text, name)
    if span is not None:
        start, end = span
        return text[:start] + wrapped + text[end:]

    if not text:
        return wrapped + "\n"
    if not text.endswith("\n"):
        text += "\n"
    if not text.endswith("\n\n"):
        text += "\n"
    return text + wrapped + "\n"


def strip_section(text: str, name: str) -> str:
    """Remove a skill's section and the blank lines around it.

    Content before and after the section is rejoined with exactly one blank
    line. Text without the section is returned unchanged.

    Raises:
        SectionMarkerError: If a start marker has no matching end marker.
    """
    span = _locate(text, name)
    if span is None:
        return text

    start, end = span
    before = text[:start].rstrip("\n")
    after = text[end:].lstrip("\n")

    if before and after:
        return f"{before}\n\n{after}"
    if after:
        return after
    if before:
        return before + "\n"
    return ""


def upsert_section(path: Path, name: str, content: str) -> None:
    """Apply ``apply_section`` to a file, creating it if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        text = ""

    try:
        updated = apply_section(text, name, content)
    except SectionMarkerError as exc:
        raise SectionMarkerError(name, path) from exc
    path.write_text(updated, encoding="utf-8")


def remove_section(path: Path, name: str) -> None:
    """Apply ``strip_section`` to a file. A missing file is left alone."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return

    try:
        updated = strip_section(text, name)
    except SectionMarkerError as exc:
        raise SectionMarkerError(name, path) from exc
    if updated != text:
        path.write_text(updated, encoding="utf-8")
