"""Ledger record models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from aisk.types import Scope


class Installation(BaseModel):
    """One installed skill on one client in one scope.

    The triple ``(skill_name, client_id, scope)`` identifies a record; the
    ledger never holds two records with the same triple.

    Attributes:
        skill_name: Skill name from its front matter.
        skill_version: Version installed, ``"unversioned"`` when the skill declares none.
        client_id: Client identifier, e.g. ``claude``.
        scope: Installation scope.
        installed_at: First installation time.
        updated_at: Last install or update time.
        install_path: Target path handed to the adapter.
    """

    skill_name: str
    skill_version: str = ""
    client_id: str
    scope: Scope
    installed_at: datetime
    updated_at: datetime
    install_path: str

    @property
    def key(self) -> tuple[str, str, Scope]:
        """Identity triple of this record."""
        return (self.skill_name, self.client_id, self.scope)


class ManifestDocument(BaseModel):
    """On-disk shape of the manifest file."""

    installations: list[Installation] = Field(default_factory=list)

    @field_validator("installations", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value
