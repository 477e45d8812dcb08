"""Reading, filtering and pruning the audit log.

The log is replayed across rotated backups in chronological order. Lines
that cannot be decoded are skipped so one corrupt write never hides the rest
of the history.
"""

from __future__ import annotations

import glob
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import ValidationError

from aisk.audit.models import AuditEvent

logger = logging.getLogger(__name__)

DEFAULT_KEEP_DAYS = 30
DEFAULT_KEEP_EVENTS = 2000

_TIMESTAMP_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})$"
)


@dataclass
class PruneResult:
    """Outcome of ``prune_log``.

    Attributes:
        total: Events found across the primary file and backups.
        kept: Events retained.
        dry_run: Whether files were left untouched.
    """

    total: int
    kept: int
    dry_run: bool = False

    @property
    def removed(self) -> int:
        """Number of events dropped."""
        return self.total - self.kept


def _backup_index(primary: Path, candidate: Path) -> int | None:
    suffix = candidate.name[len(primary.name) + 1 :]
    return int(suffix) if suffix.isdigit() else None


def candidate_log_paths(primary: Path) -> list[Path]:
    """List existing log files oldest first.

    Backups ``<primary>.N`` are returned from the highest index down to
    ``.1``, followed by the primary file when it exists.

    Args:
        primary: Primary audit log path.

    Returns:
        Existing files in chronological order.
    """
    backups: list[tuple[int, Path]] = []
    if primary.parent.is_dir():
        for candidate in primary.parent.glob(f"{glob.escape(primary.name)}.*"):
            index = _backup_index(primary, candidate)
            if index is not None and candidate.is_file():
                backups.append((index, candidate))

    paths = [path for _, path in sorted(backups, reverse=True)]
    if primary.is_file():
        paths.append(primary)
    return paths


def read_events(path: Path) -> list[AuditEvent]:
    """Decode every valid JSON line of one log file.

    Args:
        path: Log file to read.

    Returns:
        Decoded events in file order.

    Raises:
        OSError: If the file cannot be read.
    """
    events: list[AuditEvent] = []
    with path.open(encoding="utf-8", errors="replace") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError:
                logger.debug("Skipping corrupt audit line %s:%d", path, line_number)
    return events


def load_events(primary: Path) -> list[AuditEvent]:
    """Load events from the primary log and all of its backups.

    Returns:
        Events in chronological order; empty if no log exists.
    """
    events: list[AuditEvent] = []
    for path in candidate_log_paths(primary):
        events.extend(read_events(path))
    return events


def filter_events(
    events: list[AuditEvent],
    *,
    run_id: str | None = None,
    action: str | None = None,
    status: str | None = None,
) -> list[AuditEvent]:
    """Keep events matching every given criterion (case-insensitive)."""
    run_id = (run_id or "").strip().lower()
    action = (action or "").strip().lower()
    status = (status or "").strip().lower()

    return [
        event
        for event in events
        if (not run_id or event.run_id.lower() == run_id)
        and (not action or event.action.lower() == action)
        and (not status or event.status.lower() == status)
    ]


def tail_events(events: list[AuditEvent], limit: int) -> list[AuditEvent]:
    """Return the last ``limit`` events; all of them when ``limit <= 0``."""
    if limit <= 0 or len(events) <= limit:
        return list(events)
    return events[-limit:]


def parse_timestamp(value: str) -> datetime | None:
    """Parse an audit timestamp.

    Accepts ``Z`` or numeric offsets and any number of fractional digits
    (digits beyond microseconds are truncated).

    Returns:
        Aware datetime, or ``None`` if the value is empty or malformed.
    """
    match = _TIMESTAMP_PATTERN.match(value.strip()) if value else None
    if match is None:
        return None

    fraction = (match.group("fraction") or "0")[:6].ljust(6, "0")
    offset = match.group("offset")
    if offset == "Z":
        offset = "+00:00"
    try:
        return datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")
    except ValueError:
        return None


def prune_by_age(
    events: list[AuditEvent],
    keep_days: int,
    now: datetime | None = None,
) -> list[AuditEvent]:
    """Drop events older than ``keep_days``.

    Events without a parseable timestamp are dropped. ``keep_days <= 0``
    disables age pruning.
    """
    if keep_days <= 0:
        return list(events)

    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=keep_days)
    kept: list[AuditEvent] = []
    for event in events:
        stamp = parse_timestamp(event.timestamp)
        if stamp is not None and stamp >= cutoff:
            kept.append(event)
    return kept


def write_events(primary: Path, events: list[AuditEvent]) -> None:
    """Replace the primary log with ``events``."""
    primary.parent.mkdir(parents=True, exist_ok=True)
    with primary.open("w", encoding="utf-8") as handle:
        for event in events:
            handle.write(event.to_json_line() + "\n")


def remove_backups(primary: Path) -> None:
    """Delete every rotated backup of ``primary``."""
    for path in candidate_log_paths(primary):
        if path != primary:
            path.unlink(missing_ok=True)


def prune_log(
    primary: Path,
    *,
    keep_days: int = DEFAULT_KEEP_DAYS,
    keep: int = DEFAULT_KEEP_EVENTS,
    dry_run: bool = False,
    now: datetime | None = None,
) -> PruneResult:
    """Compact the audit history into the primary file.

    Applies age pruning, then keeps at most ``keep`` of the newest events.
    Unless ``dry_run`` is set, the primary file is rewritten and all backups
    are removed.

    Args:
        primary: Primary audit log path.
        keep_days: Maximum event age in days (``<= 0`` keeps all ages).
        keep: Maximum number of events (``<= 0`` keeps all).
        dry_run: Report without touching any file.
        now: Reference time for age pruning.

    Returns:
        Counts before and after pruning.
    """
    events = load_events(primary)
    kept = tail_events(prune_by_age(events, keep_days, now=now), keep)
    result = PruneResult(total=len(events), kept=len(kept), dry_run=dry_run)
    if dry_run:
        return result

    write_events(primary, kept)
    remove_backups(primary)
    logger.info("Pruned audit log %s: kept %d of %d events", primary, result.kept, result.total)
    return result
