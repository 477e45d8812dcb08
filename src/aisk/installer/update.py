"""Re-install recorded skills from the current repository contents."""

from __future__ import annotations

import logging
from pathlib import Path

from aisk.adapters.base import InstallOptions
from aisk.adapters.errors import AdapterError, UnknownClientError
from aisk.adapters.registry import adapter_for_client
from aisk.audit.logger import AuditLogger
from aisk.installer.results import BatchResult, OutcomeStatus, TargetOutcome
from aisk.installer.session import manifest_session, utc_now
from aisk.manifest.ledger import Manifest
from aisk.manifest.lock import DEFAULT_TIMEOUT
from aisk.manifest.models import Installation
from aisk.skills.errors import SkillError
from aisk.skills.loader import find_skill
from aisk.skills.models import UNVERSIONED, Skill

logger = logging.getLogger(__name__)

ACTION = "update.adapter.apply"


def resolve_update_targets(
    manifest: Manifest,
    skills: list[Skill],
    skill_name: str | None = None,
    client_id: str | None = None,
) -> list[Installation]:
    """Select the ledger records an update should touch.

    With a skill name, records of that skill are returned; if there are
    none, the name is tried as a repository directory name. Without a skill
    name, all records (optionally of one client) are returned.
    """
    if skill_name:
        targets = manifest.find(skill_name, client_id)
        if not targets:
            skill = find_skill(skills, skill_name)
            if skill is not None and skill.name != skill_name:
                targets = manifest.find(skill.name, client_id)
        return targets
    if client_id:
        return manifest.find_by_client(client_id)
    return manifest.installations


def _update_target(
    inst: Installation,
    skills: list[Skill],
    manifest: Manifest,
    audit: AuditLogger,
    include_refs: bool,
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

    skill = find_skill(skills, inst.skill_name)
    if skill is None:
        outcome.status = OutcomeStatus.SKIPPED
        outcome.detail = "skill not found in repository"
        logger.warning("Skill '%s' not found in repository, skipping", inst.skill_name)
        audit.log(ACTION, "skipped", {"reason": outcome.detail}, **context)
        return outcome

    try:
        adapter = adapter_for_client(inst.client_id)
    except UnknownClientError as exc:
        outcome.status = OutcomeStatus.ERROR
        outcome.detail = str(exc)
        audit.log(ACTION, "error", None, exc, **context)
        return outcome

    from_version = inst.skill_version or UNVERSIONED
    versions = {"from_version": from_version, "to_version": skill.display_version}
    options = InstallOptions(scope=inst.scope, include_refs=include_refs)
    audit.log(ACTION, "started", versions, **context)
    try:
        adapter.install(skill, Path(inst.install_path), options)
    except (OSError, AdapterError, SkillError) as exc:
        outcome.status = OutcomeStatus.ERROR
        outcome.detail = str(exc)
        logger.warning("Failed to update %s for %s: %s", inst.skill_name, inst.client_id, exc)
        audit.log(ACTION, "error", versions, exc, **context)
        return outcome

    manifest.add(
        inst.model_copy(update={"skill_version": skill.display_version, "updated_at": utc_now()})
    )
    outcome.detail = f"{from_version} -> {skill.display_version}"
    audit.log(ACTION, "success", versions, **context)
    return outcome


def run_update(
    skills: list[Skill],
    *,
    manifest_path: Path,
    audit: AuditLogger,
    skill_name: str | None = None,
    client_id: str | None = None,
    include_refs: bool = False,
    lock_timeout: float = DEFAULT_TIMEOUT,
) -> BatchResult:
    """Re-apply recorded installations using the latest skill contents.

    Records keep their original ``installed_at``; ``skill_version`` and
    ``updated_at`` are refreshed. When nothing matches, the ledger is not
    rewritten.

    Args:
        skills: Fresh scan of the skills repository.
        manifest_path: Ledger file.
        audit: Audit logger for this command.
        skill_name: Limit to one skill (name or directory name).
        client_id: Limit to one client.
        include_refs: Inline reference files into generated content.
        lock_timeout: Manifest lock timeout in seconds.

    Returns:
        Per-target outcomes.

    Raises:
        ManifestParseError: If the ledger is corrupt.
        OSError: If the ledger cannot be saved.
    """
    result = BatchResult("update", run_id=audit.run_id)

    with manifest_session(manifest_path, audit, lock_timeout) as session:
        result.locked = session.locked
        targets = resolve_update_targets(session.manifest, skills, skill_name, client_id)
        audit.log("update.targets.resolve", "success", {"count": len(targets)})
        if not targets:
            return result

        for inst in targets:
            result.add(_update_target(inst, skills, session.manifest, audit, include_refs))
        session.save(updated=result.succeeded)

    return result
