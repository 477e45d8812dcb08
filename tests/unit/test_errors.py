"""Tests for exception messages, repr and pickling."""

from __future__ import annotations

import pickle
from pathlib import Path

import pytest

from aisk.adapters.errors import AdapterError, SectionMarkerError, UnknownClientError
from aisk.installer.errors import ClientResolutionError, InstallerError, NoInstallationsError
from aisk.manifest.errors import LockTimeoutError, ManifestError, ManifestParseError
from aisk.skills.errors import SkillError, SkillLoadError, SkillNotFoundError, SkillParseError

ERRORS = [
    SkillNotFoundError("demo", "/repo"),
    SkillParseError("/repo/demo/SKILL.md", "bad yaml"),
    SkillLoadError("/repo/demo", OSError("denied")),
    ManifestParseError("/m.json", "invalid"),
    LockTimeoutError("/m.json.lock", 5.0),
    UnknownClientError("emacs"),
    SectionMarkerError("demo", "/GEMINI.md"),
    SectionMarkerError("demo"),
    ClientResolutionError("No AI clients detected", ["claude"]),
    NoInstallationsError("demo", "cursor"),
]


class TestErrorHierarchy:
    """Tests for base classes."""

    def test_bases(self) -> None:
        """Each subsystem has its own base class."""
        assert issubclass(SkillParseError, SkillError)
        assert issubclass(LockTimeoutError, ManifestError)
        assert issubclass(SectionMarkerError, AdapterError)
        assert issubclass(NoInstallationsError, InstallerError)


class TestErrorMessages:
    """Tests for human-readable messages."""

    def test_lock_timeout(self) -> None:
        """Timeouts name the marker file and the wait."""
        assert str(LockTimeoutError(Path("/x/m.json.lock"), 5.0)) == (
            "Could not acquire lock m.json.lock within 5s"
        )

    def test_no_installations(self) -> None:
        """The client filter is mentioned when given."""
        assert str(NoInstallationsError("demo")) == "No installations found for skill 'demo'"
        assert "client 'cursor'" in str(NoInstallationsError("demo", "cursor"))

    def test_section_marker(self) -> None:
        """The file is mentioned when known."""
        assert "GEMINI.md" in str(SectionMarkerError("demo", "/GEMINI.md"))
        assert str(SectionMarkerError("demo")) == "Unterminated section for skill 'demo'"

    def test_repr(self) -> None:
        """repr shows the class and the key attributes."""
        assert repr(SkillNotFoundError("demo", "/repo")) == (
            "SkillNotFoundError(name='demo', path='/repo')"
        )
        assert repr(UnknownClientError("emacs")) == (
            "UnknownClientError(\"No adapter for client 'emacs'\")"
        )


class TestErrorPickling:
    """Tests for pickle round trips."""

    @pytest.mark.parametrize("error", ERRORS, ids=lambda e: type(e).__name__)
    def test_round_trip(self, error: Exception) -> None:
        """Unpickled errors keep their type and message."""
        restored = pickle.loads(pickle.dumps(error))
        assert type(restored) is type(error)
        assert str(restored) == str(error)
