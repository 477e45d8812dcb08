"""Skill repository exceptions."""

from __future__ import annotations

from pathlib import Path


class SkillError(Exception):
    """Base exception for skill repository errors.

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


class SkillNotFoundError(SkillError):
    """Raised when a skill is not present in the repository.

    Attributes:
        name: Skill name or directory name that was looked up.
        path: Repository path that was scanned.
    """

    def __init__(self, name: str, path: str | Path) -> None:
        """Initialize the error.

        Args:
            name: Skill name or directory name that was looked up.
            path: Repository path that was scanned.
        """
        self.name = name
        self.path = Path(path)
        super().__init__(f"Skill '{name}' not found in {self.path}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, str(self.path)))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(name={self.name!r}, path={str(self.path)!r})"


class SkillParseError(SkillError):
    """Raised when a SKILL.md file has malformed front matter.

    Attributes:
        path: Path of the SKILL.md file.
        detail: Description of the parse error.
    """

    def __init__(self, path: str | Path, detail: str) -> None:
        """Initialize the error.

        Args:
            path: Path of the SKILL.md file.
            detail: Description of the parse error.
        """
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"Failed to parse {self.path}: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.detail))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, detail={self.detail!r})"


class SkillLoadError(SkillError):
    """Raised when skill files cannot be read from disk.

    Attributes:
        path: Path that could not be read.
        cause: Underlying exception.
    """

    def __init__(self, path: str | Path, cause: Exception | None = None) -> None:
        """Initialize the error.

        Args:
            path: Path that could not be read.
            cause: Underlying exception.
        """
        self.path = Path(path)
        self.cause = cause
        reason = f": {cause}" if cause else ""
        super().__init__(f"Failed to read {self.path}{reason}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.cause))
