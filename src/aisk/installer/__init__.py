"""Installation orchestration.

Runs install, update and uninstall across client targets under the
manifest lock, recording results in the ledger and the audit log.

Quick Start:
    >>> from aisk.installer import SkillInstaller
    >>> installer = SkillInstaller()
    >>> result = installer.install("code-review", clients=["claude"])
    >>> result.succeeded
    1

Classes:
    SkillInstaller: Top-level facade.
    BatchResult: Outcomes of one multi-target command.
    TargetOutcome: Outcome on one client target.
    ManifestSession: Ledger loaded inside the critical section.

Enums:
    OutcomeStatus: done, dry-run, skipped, error.

Exceptions:
    InstallerError: Base exception for command-level failures.
    ClientResolutionError: Requested clients cannot be resolved.
    NoInstallationsError: Nothing recorded for the skill to uninstall.
"""

from __future__ import annotations

from aisk.installer.errors import ClientResolutionError, InstallerError, NoInstallationsError
from aisk.installer.install import run_install
from aisk.installer.manager import SkillInstaller
from aisk.installer.results import BatchResult, OutcomeStatus, TargetOutcome
from aisk.installer.session import ManifestSession, audited_command, manifest_session
from aisk.installer.uninstall import run_uninstall
from aisk.installer.update import run_update

__all__ = [
    "BatchResult",
    "ClientResolutionError",
    "InstallerError",
    "ManifestSession",
    "NoInstallationsError",
    "OutcomeStatus",
    "SkillInstaller",
    "TargetOutcome",
    "audited_command",
    "manifest_session",
    "run_install",
    "run_uninstall",
    "run_update",
]
