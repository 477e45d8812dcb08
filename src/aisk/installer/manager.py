"""Top-level SkillInstaller facade.

Composes settings, client detection, the skills repository, the ledger
flows and the audit log behind one API. Each public method corresponds to
one command invocation and gets its own audit run id.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from aisk.audit.logger import AuditLogger
from aisk.audit.models import AuditEvent
from aisk.audit.reader import (
    DEFAULT_KEEP_DAYS,
    DEFAULT_KEEP_EVENTS,
    PruneResult,
    filter_events,
    load_events,
    prune_log,
    tail_events,
)
from aisk.clients.detect import detect_all
from aisk.clients.models import Client
from aisk.clients.registry import ClientRegistry, parse_client_id
from aisk.config.paths import AppPaths, find_project_root
from aisk.config.settings import AiskSettings
from aisk.gitignore import GITIGNORE_FILENAME
from aisk.installer.display import (
    render_audit_events,
    render_batch_result,
    render_updates,
)
from aisk.installer.errors import ClientResolutionError
from aisk.installer.install import run_install
from aisk.installer.results import BatchResult
from aisk.installer.session import audited_command
from aisk.installer.uninstall import run_uninstall
from aisk.installer.update import run_update
from aisk.manifest.ledger import Manifest
from aisk.skills.errors import SkillLoadError, SkillNotFoundError
from aisk.skills.loader import find_skill, scan_local
from aisk.skills.models import Skill
from aisk.skills.updates import UpdateInfo, check_updates
from aisk.types import Scope

logger = logging.getLogger(__name__)


class SkillInstaller:
    """Facade for installing, updating and removing skills.

    Example::

        installer = SkillInstaller()
        installer.install("code-review", clients=["claude", "cursor"], scope="project")
        installer.update()
        installer.uninstall("code-review")

    Args:
        settings: Configuration. Loaded from the environment if ``None``.
        registry: Client registry. Uses every supported client if ``None``.
        console: Console for result tables. A stdout console if ``None``.
        cwd: Working directory for project-scope targets and the default
            skills repository.
    """

    def __init__(
        self,
        settings: AiskSettings | None = None,
        *,
        registry: ClientRegistry | None = None,
        console: Console | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            settings: Configuration. Loaded from the environment if ``None``.
            registry: Client registry. Uses every supported client if ``None``.
            console: Console for result tables. A stdout console if ``None``.
            cwd: Working directory for project-scope targets and the default
                skills repository.
        """
        self._settings = settings or AiskSettings()
        self._registry = registry or ClientRegistry.default()
        self._console = console or Console()
        self._cwd = Path(cwd) if cwd is not None else Path.cwd()
        self._paths = self._settings.resolve_paths(cwd=self._cwd)
        self._project_root = find_project_root(self._cwd) or self._cwd

    @property
    def settings(self) -> AiskSettings:
        """Active settings."""
        return self._settings

    @property
    def paths(self) -> AppPaths:
        """Resolved application paths."""
        return self._paths

    @property
    def project_root(self) -> Path:
        """Root used for project-scope targets."""
        return self._project_root

    @property
    def registry(self) -> ClientRegistry:
        """Client registry (detection state refreshed per command)."""
        return self._registry

    def _audit(self, command: str) -> AuditLogger:
        return AuditLogger(self._settings.audit_config(), command)

    @property
    def _gitignore_path(self) -> Path:
        return self._project_root / GITIGNORE_FILENAME

    # ------------------------------------------------------------------
    # Repository and clients
    # ------------------------------------------------------------------

    def scan_skills(self, audit: AuditLogger | None = None) -> list[Skill]:
        """Scan the local skills repository.

        Raises:
            SkillLoadError: If the repository cannot be listed.
        """
        repo = self._paths.skills_repo
        audit = audit or AuditLogger.disabled()
        try:
            skills = scan_local(repo)
        except SkillLoadError as exc:
            audit.log("skill.scan_local", "error", {"path": str(repo)}, exc)
            raise
        audit.log("skill.scan_local", "success", {"path": str(repo), "count": len(skills)})
        return skills

    def resolve_clients(self, names: list[str] | None = None) -> list[Client]:
        """Detect clients and select the requested ones.

        Args:
            names: Client identifiers. All detected clients if ``None`` or
                empty.

        Raises:
            ClientResolutionError: If a name is unknown, a requested client
                is not detected, or nothing is detected at all.
        """
        detect_all(self._registry, self._settings.home_dir, self._project_root)

        if not names:
            detected = self._registry.detected()
            if not detected:
                raise ClientResolutionError("No AI clients detected")
            return detected

        clients: list[Client] = []
        for name in names:
            try:
                client_id = parse_client_id(name)
            except ValueError as exc:
                raise ClientResolutionError(str(exc), names) from exc
            if client_id not in self._registry:
                raise ClientResolutionError(f"Client '{name}' is not registered", names)
            client = self._registry.get(client_id)
            if not client.detected:
                raise ClientResolutionError(f"Client '{name}' is not detected", names)
            clients.append(client)
        return clients

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def install(
        self,
        skill_name: str,
        *,
        clients: list[str] | None = None,
        scope: Scope | str = Scope.GLOBAL,
        include_refs: bool = False,
        dry_run: bool = False,
        manage_gitignore: bool = False,
    ) -> BatchResult:
        """Install a skill from the repository onto clients.

        Args:
            skill_name: Skill name or directory name.
            clients: Client identifiers; all detected clients if ``None``.
            scope: Global or project installation.
            include_refs: Inline reference files into generated content.
            dry_run: Describe without applying.
            manage_gitignore: Add project-scope targets to ``.gitignore``.

        Returns:
            Per-target outcomes.

        Raises:
            SkillNotFoundError: If the skill is not in the repository.
            ClientResolutionError: If the clients cannot be resolved.
        """
        scope = Scope(scope)
        audit = self._audit("install")
        details = {"skill": skill_name, "scope": scope.value, "dry_run": dry_run}
        with audited_command(audit, details):
            skills = self.scan_skills(audit)
            skill = find_skill(skills, skill_name)
            if skill is None:
                raise SkillNotFoundError(skill_name, self._paths.skills_repo)

            result = run_install(
                skill,
                self.resolve_clients(clients),
                scope=scope,
                manifest_path=self._paths.manifest_path,
                audit=audit,
                include_refs=include_refs,
                dry_run=dry_run,
                lock_timeout=self._settings.lock_timeout_seconds,
                gitignore_path=self._gitignore_path if manage_gitignore else None,
            )
        render_batch_result(result, self._console)
        return result

    def update(
        self,
        skill_name: str | None = None,
        *,
        client: str | None = None,
        include_refs: bool = False,
    ) -> BatchResult:
        """Re-install recorded skills from the current repository.

        Args:
            skill_name: Limit to one skill; all installed skills if ``None``.
            client: Limit to one client.
            include_refs: Inline reference files into generated content.

        Returns:
            Per-target outcomes.
        """
        client_id = parse_client_id(client).value if client else None
        audit = self._audit("update")
        with audited_command(audit, {"skill": skill_name or "", "client": client_id or ""}):
            result = run_update(
                self.scan_skills(audit),
                manifest_path=self._paths.manifest_path,
                audit=audit,
                skill_name=skill_name,
                client_id=client_id,
                include_refs=include_refs,
                lock_timeout=self._settings.lock_timeout_seconds,
            )
        render_batch_result(result, self._console)
        return result

    def uninstall(self, skill_name: str, *, client: str | None = None) -> BatchResult:
        """Remove a skill from every client it is recorded on.

        Args:
            skill_name: Skill name or directory name.
            client: Limit to one client.

        Returns:
            Per-target outcomes.

        Raises:
            NoInstallationsError: If nothing is recorded for the skill.
        """
        client_id = parse_client_id(client).value if client else None
        audit = self._audit("uninstall")
        with audited_command(audit, {"skill": skill_name, "client": client_id or ""}):
            try:
                skills = self.scan_skills(audit)
            except SkillLoadError as exc:
                logger.warning("Cannot scan skills repository: %s", exc)
                skills = []

            result = run_uninstall(
                skill_name,
                manifest_path=self._paths.manifest_path,
                audit=audit,
                client_id=client_id,
                skills=skills,
                lock_timeout=self._settings.lock_timeout_seconds,
                gitignore_path=self._gitignore_path,
            )
        render_batch_result(result, self._console)
        return result

    def check_updates(self) -> list[UpdateInfo]:
        """Compare installed versions with the repository (read-only)."""
        manifest = Manifest.load(self._paths.manifest_path)
        updates = check_updates(manifest.installations, self.scan_skills())
        render_updates(updates, self._console)
        return updates

    # ------------------------------------------------------------------
    # Audit log
    # ------------------------------------------------------------------

    def audit_events(
        self,
        *,
        run_id: str | None = None,
        action: str | None = None,
        status: str | None = None,
        limit: int = 50,
    ) -> list[AuditEvent]:
        """Read back recent audit events across rotated files."""
        primary = self._settings.audit_config().log_path
        events = filter_events(load_events(primary), run_id=run_id, action=action, status=status)
        events = tail_events(events, limit)
        render_audit_events(events, self._console)
        return events

    def prune_audit(
        self,
        *,
        keep_days: int = DEFAULT_KEEP_DAYS,
        keep: int = DEFAULT_KEEP_EVENTS,
        dry_run: bool = False,
    ) -> PruneResult:
        """Compact the audit log by age and count."""
        primary = self._settings.audit_config().log_path
        result = prune_log(primary, keep_days=keep_days, keep=keep, dry_run=dry_run)
        verb = "Would remove" if dry_run else "Removed"
        self._console.print(f"{verb} {result.removed} event(s), kept {result.kept}.")
        return result
