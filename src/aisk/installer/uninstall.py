"""Remove one skill from the clients it is installed on."""

from __future__ import annotations

import logging
from pathlib import Path

from aisk.adapters.errors import AdapterError, UnknownClientError
from aisk.adapters.registry import adapter_for_client
from aisk.audit.logger import AuditLogger
from aisk.gitignore import patterns_for_client, remove_entries
from aisk.installer.errors import NoInstallationsError
from aisk.installer.results import BatchResult, OutcomeStatus, TargetOutcome
from aisk.installer.session import manifest_session
from aisk.manifest.ledger import Manifest
from aisk.manifest.lock import DEFAULT_TIMEOUT
from aisk.manifest.models import Installation
from aisk.skills.loader import find_skill
from aisk.skills.models import Skill
from aisk.types import Scope

logger = logging.getLogger(__name__)

ACTION = "uninstall.adapter.apply"


def _uninstall_target(
    inst: Installation,
    skill: Skill,
    manifest: Manifest,
    audit: AuditLogger,
) -> TargetOutcome:
    outcome = TargetOutcome(
        inst.skill_name,
        inst.client_id,
        inst.scope.value,
        OutcomeStatus.DONE,
        target_path=inst.install_path,
    )
    context = {
        "skill": inst.skill_name,
        "client_id": inst.client_id,
        "scope": inst.scope,
        "target": inst.install_path,
    }

    try:
        adapter = adapter_for_client(inst.client_id)
    except UnknownClientError as exc:
        outcome.status = OutcomeStatus.ERROR
        outcome.detail = str(exc)
        audit.log(ACTION, "error", None, exc, **context)
        return outcome

    audit.log(ACTION, "started", None, **context)
    try:
        adapter.uninstall(skill, Path(inst.install_path))
    except (OSError, AdapterError) as exc:
        outcome.status = OutcomeStatus.ERROR
        outcome.detail = str(exc)
        logger.warning("Failed to uninstall %s from %s: %s", inst.skill_name, inst.client_id, exc)
        audit.log(ACTION, "error", None, exc, **context)
        return outcome

    manifest.remove(inst.skill_name, inst.client_id, inst.scope)
    audit.log(ACTION, "success", None, **context)
    return outcome


def stale_gitignore_patterns(manifest: Manifest, affected: list[Installation]) -> list[str]:
    """Ignore patterns no project-scope installation needs any more.

    A client's patterns are stale when one of ``affected`` was a
    project-scope installation for it and the ledger no longer holds any
    project-scope installation for that client.
    """
    candidates = {inst.client_id: inst for inst in affected if inst.scope is Scope.PROJECT}
    still_used = {inst.client_id for inst in manifest.find_by_scope(Scope.PROJECT)}

    patterns: list[str] = []
    for client_id in sorted(candidates):
        if client_id not in still_used:
            patterns.extend(patterns_for_client(client_id, candidates[client_id].install_path))
    return patterns


def reconcile_gitignore(
    manifest: Manifest,
    affected: list[Installation],
    gitignore_path: Path,
    audit: AuditLogger,
) -> list[str]:
    """Drop stale managed entries from ``gitignore_path``.

    Failures are logged; the ledger has already been saved at this point.

    Returns:
        Entries removed from the file.
    """
    patterns = stale_gitignore_patterns(manifest, affected)
    if not patterns:
        return []

    audit.log("gitignore.cleanup", "started", {"path": str(gitignore_path)})
    try:
        removed = remove_entries(gitignore_path, patterns)
    except OSError as exc:
        logger.warning("Could not clean up %s: %s", gitignore_path, exc)
        audit.log("gitignore.cleanup", "error", None, exc)
        return []
    audit.log("gitignore.cleanup", "success", {"removed": removed})
    return removed


def run_uninstall(
    skill_name: str,
    *,
    manifest_path: Path,
    audit: AuditLogger,
    client_id: str | None = None,
    skills: list[Skill] | None = None,
    lock_timeout: float = DEFAULT_TIMEOUT,
    gitignore_path: Path | None = None,
) -> BatchResult:
    """Uninstall ``skill_name`` from every recorded client.

    Records are matched by skill name, then by repository directory name.
    A failed target keeps its ledger record so it can be retried.

    Args:
        skill_name: Skill name or repository directory name.
        manifest_path: Ledger file.
        audit: Audit logger for this command.
        client_id: Limit to one client.
        skills: Repository scan, used to resolve directory names. A skill
            missing from the repository is uninstalled by name.
        lock_timeout: Manifest lock timeout in seconds.
        gitignore_path: When set, remove ignore entries that no remaining
            project-scope installation needs.

    Returns:
        Per-target outcomes.

    Raises:
        NoInstallationsError: If nothing is recorded for the skill.
        ManifestParseError: If the ledger is corrupt.
        OSError: If the ledger cannot be saved.
    """
    skills = skills or []
    result = BatchResult("uninstall", run_id=audit.run_id)

    with manifest_session(manifest_path, audit, lock_timeout) as session:
        result.locked = session.locked
        manifest = session.manifest

        skill = find_skill(skills, skill_name)
        targets = manifest.find(skill_name, client_id)
        if not targets and skill is not None and skill.name != skill_name:
            targets = manifest.find(skill.name, client_id)
        if not targets:
            raise NoInstallationsError(skill_name, client_id)

        recorded_name = targets[0].skill_name
        if skill is None or skill.name != recorded_name:
            skill = Skill.stub(recorded_name)

        for inst in targets:
            result.add(_uninstall_target(inst, skill, manifest, audit))
        session.save(removed=result.succeeded)

    if gitignore_path is not None:
        reconcile_gitignore(manifest, targets, gitignore_path, audit)
    return result
