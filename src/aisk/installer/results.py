"""Per-target outcomes of batch commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutcomeStatus(str, Enum):
    """Result of one adapter call."""

    DONE = "done"
    DRY_RUN = "dry-run"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class TargetOutcome:
    """What happened on one client target.

    Attributes:
        skill_name: Skill the outcome belongs to.
        client_id: Client identifier.
        scope: Installation scope value.
        status: Outcome status.
        target_path: Target handed to the adapter, if resolved.
        detail: Description (dry run), reason (skip) or error message.
    """

    skill_name: str
    client_id: str
    scope: str
    status: OutcomeStatus
    target_path: str = ""
    detail: str = ""

    @property
    def ok(self) -> bool:
        """Whether the target counts toward the success total."""
        return self.status in (OutcomeStatus.DONE, OutcomeStatus.DRY_RUN)


@dataclass
class BatchResult:
    """Outcomes of one multi-target command.

    Attributes:
        command: Command name (``install``, ``update``, ``uninstall``).
        run_id: Audit run identifier (empty when auditing is off).
        dry_run: Whether nothing was applied.
        locked: Whether the manifest lock was held.
        outcomes: Per-target outcomes in processing order.
    """

    command: str
    run_id: str = ""
    dry_run: bool = False
    locked: bool = True
    outcomes: list[TargetOutcome] = field(default_factory=list)

    def add(self, outcome: TargetOutcome) -> TargetOutcome:
        """Record an outcome and return it."""
        self.outcomes.append(outcome)
        return outcome

    def count(self, status: OutcomeStatus) -> int:
        """Number of outcomes with ``status``."""
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def succeeded(self) -> int:
        """Targets applied (or described, in a dry run)."""
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        """Targets whose adapter call failed."""
        return self.count(OutcomeStatus.ERROR)

    @property
    def skipped(self) -> int:
        """Targets that were not attempted."""
        return self.count(OutcomeStatus.SKIPPED)
