"""Logging configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Diagnostic logging settings.

    Attributes:
        level: Level name for the ``aisk`` logger.
        rich: Render records with rich's handler instead of a plain stream.
        show_path: Include the emitting module path (rich handler only).
    """

    level: str = Field(default="WARNING", description="Log level name")
    rich: bool = Field(default=True, description="Use rich console rendering")
    show_path: bool = Field(default=False, description="Show source location")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        if isinstance(value, str):
            level = value.strip().upper()
            if level not in _LEVELS:
                raise ValueError(f"invalid log level '{value}' (valid: {', '.join(_LEVELS)})")
            return level
        return value
