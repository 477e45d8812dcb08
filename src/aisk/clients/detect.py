"""Detect installed AI clients and resolve their target paths."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from aisk.clients.models import ClientID
from aisk.clients.registry import ClientRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ClientLayout:
    config_dir: tuple[str, ...]
    binary: str
    global_target: tuple[str, ...] | None
    project_target: tuple[str, ...]


# Global targets are relative to the client's config directory, project
# targets to the project root.
_LAYOUTS: dict[ClientID, _ClientLayout] = {
    ClientID.CLAUDE: _ClientLayout((".claude",), "claude", ("skills",), (".claude", "skills")),
    ClientID.GEMINI: _ClientLayout((".gemini",), "gemini", ("GEMINI.md",), ("GEMINI.md",)),
    ClientID.CODEX: _ClientLayout((".codex",), "codex", ("instructions.md",), ("AGENTS.md",)),
    ClientID.COPILOT: _ClientLayout(
        (".vscode",), "code", None, (".github", "copilot-instructions.md")
    ),
    ClientID.CURSOR: _ClientLayout((".cursor",), "cursor", None, (".cursor", "rules")),
    ClientID.WINDSURF: _ClientLayout(
        (".codeium", "windsurf"),
        "windsurf",
        ("memories", "global_rules.md"),
        (".windsurf", "rules"),
    ),
}


def resolve_paths(registry: ClientRegistry, home: Path, project_root: Path) -> None:
    """Fill in global and project target paths without running detection."""
    for client in registry.all():
        layout = _LAYOUTS[client.id]
        config_dir = Path(home).joinpath(*layout.config_dir)
        client.global_path = (
            config_dir.joinpath(*layout.global_target) if layout.global_target else None
        )
        client.project_path = Path(project_root).joinpath(*layout.project_target)


def detect_all(registry: ClientRegistry, home: Path, project_root: Path) -> None:
    """Mark each registered client as detected or not and resolve its paths.

    A client counts as detected when its configuration directory exists under
    ``home`` or its executable is on ``PATH``.

    Args:
        registry: Registry to update in place.
        home: User home directory.
        project_root: Root used for project-scope targets.
    """
    resolve_paths(registry, home, project_root)
    for client in registry.all():
        layout = _LAYOUTS[client.id]
        config_dir = Path(home).joinpath(*layout.config_dir)
        client.detected = config_dir.is_dir() or shutil.which(layout.binary) is not None
        logger.debug("Client %s detected=%s", client.id.value, client.detected)
