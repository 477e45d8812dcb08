"""Shared enumerations used across the aisk subsystems."""

from __future__ import annotations

from enum import Enum


class Scope(str, Enum):
    """Installation scope for a skill.

    Attributes:
        GLOBAL: Installed into the user's home-level client configuration.
        PROJECT: Installed into the current project tree.
    """

    GLOBAL = "global"
    PROJECT = "project"
