"""Audit trail for installation commands.

Append-only JSON-lines log with size-based rotation and secret redaction,
plus helpers to read the history back across rotated files.

Classes:
    AuditLogger: Per-invocation event writer.
    AuditConfig: Enablement, path, rotation threshold and backup count.
    AuditEvent: One audit record.
    PruneResult: Outcome of compacting the log.

Functions:
    load_events: Replay the primary file and its backups.
    filter_events: Filter by run id, action and status.
    tail_events: Keep the newest events.
    prune_log: Age/count pruning that rewrites the primary file.
    redact_text: Mask inline secrets in free text.
    redact_mapping: Mask sensitive keys in structured details.
"""

from __future__ import annotations

from aisk.audit.config import AuditConfig
from aisk.audit.logger import AuditLogger
from aisk.audit.models import AuditEvent
from aisk.audit.reader import (
    PruneResult,
    candidate_log_paths,
    filter_events,
    load_events,
    prune_log,
    tail_events,
)
from aisk.audit.redaction import REDACTED, redact_mapping, redact_text

__all__ = [
    "REDACTED",
    "AuditConfig",
    "AuditEvent",
    "AuditLogger",
    "PruneResult",
    "candidate_log_paths",
    "filter_events",
    "load_events",
    "prune_log",
    "redact_mapping",
    "redact_text",
    "tail_events",
]
