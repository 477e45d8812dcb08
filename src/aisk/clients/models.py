"""AI client descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from aisk.types import Scope


class ClientID(str, Enum):
    """Supported AI coding assistants."""

    CLAUDE = "claude"
    GEMINI = "gemini"
    CODEX = "codex"
    COPILOT = "copilot"
    CURSOR = "cursor"
    WINDSURF = "windsurf"


@dataclass
class Client:
    """One AI client and where its skills live.

    Attributes:
        id: Client identifier.
        name: Display name.
        supports_global: Whether the client has a user-level target.
        supports_project: Whether the client has a project-level target.
        detected: Whether the client was found on this machine.
        global_path: Resolved user-level target, if supported.
        project_path: Resolved project-level target, if supported.
    """

    id: ClientID
    name: str
    supports_global: bool
    supports_project: bool
    detected: bool = False
    global_path: Path | None = None
    project_path: Path | None = None

    def supports(self, scope: Scope | str) -> bool:
        """Whether the client can install into ``scope``."""
        if Scope(scope) is Scope.GLOBAL:
            return self.supports_global
        return self.supports_project

    def target_path(self, scope: Scope | str) -> Path | None:
        """Target path for ``scope``, or ``None`` when unsupported."""
        if not self.supports(scope):
            return None
        return self.global_path if Scope(scope) is Scope.GLOBAL else self.project_path
