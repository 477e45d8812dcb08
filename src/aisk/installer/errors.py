"""Command-level installer exceptions.

Per-target failures are reported in ``BatchResult`` and never raised; these
exceptions mean the whole command could not proceed.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base exception for command-level failures.

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


class ClientResolutionError(InstallerError):
    """Raised when the requested clients cannot be resolved.

    Attributes:
        requested: Client names given by the caller.
    """

    def __init__(self, message: str, requested: list[str] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            requested: Client names given by the caller.
        """
        self.requested = list(requested or [])
        super().__init__(message)

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.message, self.requested))


class NoInstallationsError(InstallerError):
    """Raised when uninstall finds nothing recorded for a skill.

    Attributes:
        skill_name: Skill that was looked up.
        client_id: Client filter, if any.
    """

    def __init__(self, skill_name: str, client_id: str | None = None) -> None:
        """Initialize the error.

        Args:
            skill_name: Skill that was looked up.
            client_id: Client filter, if any.
        """
        self.skill_name = skill_name
        self.client_id = client_id
        suffix = f" for client '{client_id}'" if client_id else ""
        super().__init__(f"No installations found for skill '{skill_name}'{suffix}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.skill_name, self.client_id))
