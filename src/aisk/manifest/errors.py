"""Manifest subsystem exceptions."""

from __future__ import annotations

from pathlib import Path


class ManifestError(Exception):
    """Base exception for ledger and lock errors.

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


class ManifestParseError(ManifestError):
    """Raised when the manifest file exists but cannot be decoded.

    A corrupt ledger is fatal: no command may proceed on top of it.

    Attributes:
        path: Manifest file path.
        detail: Description of the decoding problem.
    """

    def __init__(self, path: str | Path, detail: str) -> None:
        """Initialize the error.

        Args:
            path: Manifest file path.
            detail: Description of the decoding problem.
        """
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"Failed to parse manifest {self.path}: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.detail))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, detail={self.detail!r})"


class LockTimeoutError(ManifestError):
    """Raised when the manifest lock could not be acquired in time.

    Attributes:
        path: Lock marker path.
        timeout: Seconds waited before giving up.
    """

    def __init__(self, path: str | Path, timeout: float) -> None:
        """Initialize the error.

        Args:
            path: Lock marker path.
            timeout: Seconds waited before giving up.
        """
        self.path = Path(path)
        self.timeout = timeout
        super().__init__(f"Could not acquire lock {self.path.name} within {timeout:g}s")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.timeout))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, timeout={self.timeout!r})"
