"""Audit event record."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Fields that are always written, even when empty.
_REQUIRED_KEYS = frozenset({"timestamp", "run_id", "command", "action", "status"})


class AuditEvent(BaseModel):
    """One line of the audit log.

    Callers usually fill only ``action``, ``status`` and the optional context
    fields; the logger stamps ``timestamp``, ``run_id`` and ``command``.

    Attributes:
        timestamp: UTC time with nanosecond precision.
        run_id: Identifier shared by every event of one process invocation.
        command: Top-level command that produced the event.
        action: Dotted action name, e.g. ``install.adapter.apply``.
        status: ``started``, ``success``, ``error``, ``skipped`` or ``released``.
        skill: Skill name, when the event concerns one skill.
        client_id: Client identifier, when the event concerns one client.
        scope: Installation scope, when relevant.
        target: Target path, serialized as ``target_path``.
        details: Free-form structured context.
        error: Error message for failed steps.
    """

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str = ""
    run_id: str = ""
    command: str = ""
    action: str = ""
    status: str = ""
    skill: str | None = None
    client_id: str | None = None
    scope: str | None = None
    target: str | None = Field(default=None, alias="target_path")
    details: dict[str, Any] | None = None
    error: str | None = None

    def to_json_line(self) -> str:
        """Serialize to a single compact JSON line (no trailing newline).

        Optional fields that are ``None`` or empty are omitted.
        """
        data = self.model_dump(by_alias=True, exclude_none=True)
        data = {
            key: value
            for key, value in data.items()
            if key in _REQUIRED_KEYS or value not in ("", {})
        }
        return json.dumps(data, separators=(",", ":"), default=str)
