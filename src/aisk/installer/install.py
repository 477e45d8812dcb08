"""Install one skill onto several clients."""

from __future__ import annotations

import logging
from pathlib import Path

from aisk.adapters.base import InstallOptions
from aisk.adapters.errors import AdapterError, UnknownClientError
from aisk.adapters.registry import adapter_for_client
from aisk.audit.logger import AuditLogger
from aisk.clients.models import Client
from aisk.gitignore import ensure_entries, patterns_for_client
from aisk.installer.results import BatchResult, OutcomeStatus, TargetOutcome
from aisk.installer.session import manifest_session, utc_now
from aisk.manifest.ledger import Manifest
from aisk.manifest.lock import DEFAULT_TIMEOUT
from aisk.manifest.models import Installation
from aisk.skills.errors import SkillError
from aisk.skills.models import Skill
from aisk.types import Scope

logger = logging.getLogger(__name__)

ACTION = "install.adapter.apply"


def _install_target(
    skill: Skill,
    client: Client,
    options: InstallOptions,
    manifest: Manifest,
    audit: AuditLogger,
) -> TargetOutcome:
    client_id = client.id.value
    scope = options.scope
    outcome = TargetOutcome(skill.name, client_id, scope.value, OutcomeStatus.DONE)
    context = {"skill": skill.name, "client_id": client_id, "scope": scope}

    target = client.target_path(scope)
    if target is None:
        outcome.status = OutcomeStatus.SKIPPED
        outcome.detail = f"{client.name} does not support {scope.value} scope"
        logger.warning("Skipping %s: %s", client_id, outcome.detail)
        audit.log(ACTION, "skipped", {"reason": outcome.detail}, **context)
        return outcome
    outcome.target_path = str(target)

    try:
        adapter = adapter_for_client(client.id)
    except UnknownClientError as exc:
        outcome.status = OutcomeStatus.ERROR
        outcome.detail = str(exc)
        audit.log(ACTION, "error", None, exc, target=target, **context)
        return outcome

    if options.dry_run:
        outcome.status = OutcomeStatus.DRY_RUN
        outcome.detail = adapter.describe(skill, target, options)
        return outcome

    audit.log(ACTION, "started", None, target=target, **context)
    try:
        adapter.install(skill, target, options)
    except (OSError, AdapterError, SkillError) as exc:
        outcome.status = OutcomeStatus.ERROR
        outcome.detail = str(exc)
        logger.warning("Failed to install %s for %s: %s", skill.name, client_id, exc)
        audit.log(ACTION, "error", None, exc, target=target, **context)
        return outcome

    now = utc_now()
    manifest.add(
        Installation(
            skill_name=skill.name,
            skill_version=skill.display_version,
            client_id=client_id,
            scope=scope,
            installed_at=now,
            updated_at=now,
            install_path=str(target),
        )
    )
    audit.log(ACTION, "success", None, target=target, **context)
    return outcome


def _ensure_gitignore(result: BatchResult, gitignore_path: Path, audit: AuditLogger) -> None:
    patterns: list[str] = []
    for outcome in result.outcomes:
        if outcome.status is OutcomeStatus.DONE and outcome.scope == Scope.PROJECT.value:
            patterns.extend(patterns_for_client(outcome.client_id, outcome.target_path))
    if not patterns:
        return

    audit.log("gitignore.ensure", "started", {"path": str(gitignore_path)})
    try:
        added = ensure_entries(gitignore_path, patterns)
    except OSError as exc:
        logger.warning("Could not update %s: %s", gitignore_path, exc)
        audit.log("gitignore.ensure", "error", None, exc)
        return
    audit.log("gitignore.ensure", "success", {"added": added})


def run_install(
    skill: Skill,
    clients: list[Client],
    *,
    scope: Scope | str,
    manifest_path: Path,
    audit: AuditLogger,
    include_refs: bool = False,
    dry_run: bool = False,
    lock_timeout: float = DEFAULT_TIMEOUT,
    gitignore_path: Path | None = None,
) -> BatchResult:
    """Install ``skill`` on every client in ``clients``.

    Each successful target is recorded in the ledger immediately; a failed
    target is reported and the batch continues. The ledger is saved once at
    the end, unless this is a dry run.

    Args:
        skill: Skill to install.
        clients: Target clients with resolved paths.
        scope: Global or project installation.
        manifest_path: Ledger file.
        audit: Audit logger for this command.
        include_refs: Inline reference files into generated content.
        dry_run: Describe without applying; the ledger is not written.
        lock_timeout: Manifest lock timeout in seconds.
        gitignore_path: When set, add ignore patterns for successful
            project-scope targets to this file.

    Returns:
        Per-target outcomes.

    Raises:
        ManifestParseError: If the ledger is corrupt.
        OSError: If the ledger cannot be saved.
    """
    options = InstallOptions(scope=Scope(scope), include_refs=include_refs, dry_run=dry_run)
    result = BatchResult("install", run_id=audit.run_id, dry_run=dry_run)

    with manifest_session(manifest_path, audit, lock_timeout) as session:
        result.locked = session.locked
        for client in clients:
            result.add(_install_target(skill, client, options, session.manifest, audit))
        if not dry_run:
            session.save(installed=result.succeeded)

    if gitignore_path is not None and not dry_run:
        _ensure_gitignore(result, gitignore_path, audit)
    return result
