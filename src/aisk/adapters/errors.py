"""Adapter exceptions."""

from __future__ import annotations

from pathlib import Path


class AdapterError(Exception):
    """Base exception for adapter failures.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class UnknownClientError(AdapterError):
    """Raised when no adapter exists for a client identifier.

    Attributes:
        client_id: The unrecognized identifier.
    """

    def __init__(self, client_id: str) -> None:
        """Initialize the error.

        Args:
            client_id: The unrecognized identifier.
        """
        self.client_id = client_id
        super().__init__(f"No adapter for client '{client_id}'")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.client_id,))


class SectionMarkerError(AdapterError):
    """Raised when a shared file has a start marker without its end marker.

    The file is left untouched; rewriting it could destroy user content.

    Attributes:
        name: Skill name of the broken section.
        path: File containing the section, if known.
    """

    def __init__(self, name: str, path: str | Path | None = None) -> None:
        """Initialize the error.

        Args:
            name: Skill name of the broken section.
            path: File containing the section, if known.
        """
        self.name = name
        self.path = Path(path) if path is not None else None
        where = f" in {self.path}" if self.path else ""
        super().__init__(f"Unterminated section for skill '{name}'{where}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, str(self.path) if self.path else None))
