"""aisk: manage AI coding assistant skills across clients.

Installs skills from a local repository into Claude Code, Gemini CLI,
Codex CLI, VS Code Copilot, Cursor and Windsurf, records every installation
in a manifest ledger, and writes an audit trail of each command.

Quick Start:
    >>> from aisk import SkillInstaller, setup_logging
    >>> setup_logging()
    >>> installer = SkillInstaller()
    >>> installer.install("code-review", clients=["claude"], scope="project")

Subpackages:
    adapters: Per-client on-disk representations.
    audit: JSON-lines audit log with rotation and redaction.
    clients: Client registry and detection.
    config: Settings and paths.
    installer: Install/update/uninstall orchestration.
    manifest: Ledger and file lock.
    observability: Logging setup.
    skills: Skill repository scanning.
"""

from __future__ import annotations

from aisk.config.settings import AiskSettings
from aisk.installer import BatchResult, OutcomeStatus, SkillInstaller
from aisk.manifest import Installation, Manifest
from aisk.observability import setup_logging
from aisk.skills import Skill
from aisk.types import Scope

__version__ = "0.1.0"

__all__ = [
    "AiskSettings",
    "BatchResult",
    "Installation",
    "Manifest",
    "OutcomeStatus",
    "Scope",
    "Skill",
    "SkillInstaller",
    "__version__",
    "setup_logging",
]
