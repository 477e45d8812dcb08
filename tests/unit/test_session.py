"""Tests for the manifest critical section and command bracketing."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from pathlib import Path

import pytest

from aisk.audit import AuditLogger, load_events
from aisk.installer.session import audited_command, manifest_session
from aisk.manifest import Installation, Manifest, ManifestParseError
from aisk.types import Scope


def _actions(audit: AuditLogger) -> list[tuple[str, str]]:
    """(action, status) pairs written so far."""
    return [(e.action, e.status) for e in load_events(audit.path)]


class TestManifestSession:
    """Tests for manifest_session."""

    def test_lock_held_and_released(self, tmp_path: Path, audit: AuditLogger) -> None:
        """The marker exists inside the session and is removed after."""
        manifest_path = tmp_path / "manifest.json"
        lock_path = tmp_path / "manifest.json.lock"

        with manifest_session(manifest_path, audit, timeout=0.5) as session:
            assert session.locked
            assert lock_path.exists()
            assert len(session.manifest) == 0

        assert not lock_path.exists()
        assert _actions(audit) == [
            ("manifest.lock", "started"),
            ("manifest.lock", "success"),
            ("manifest.load", "success"),
            ("manifest.lock", "released"),
        ]

    def test_contention_proceeds_unlocked(self, tmp_path: Path, audit: AuditLogger) -> None:
        """A held lock produces a warning, not a failure."""
        manifest_path = tmp_path / "manifest.json"
        lock_path = tmp_path / "manifest.json.lock"
        lock_path.write_text("", encoding="utf-8")

        with manifest_session(manifest_path, audit, timeout=0.2) as session:
            assert not session.locked

        assert lock_path.exists()
        assert ("manifest.lock", "error") in _actions(audit)
        assert ("manifest.lock", "released") not in _actions(audit)

    def test_corrupt_manifest_releases_lock(self, tmp_path: Path, audit: AuditLogger) -> None:
        """A parse failure propagates after the lock is released."""
        manifest_path = tmp_path / "manifest.json"
        manifest_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ManifestParseError):
            with manifest_session(manifest_path, audit, timeout=0.5):
                pytest.fail("body must not run")

        assert not (tmp_path / "manifest.json.lock").exists()
        assert ("manifest.load", "error") in _actions(audit)

    def test_undecodable_manifest_is_audited(self, tmp_path: Path, audit: AuditLogger) -> None:
        """Invalid UTF-8 fails like any other corrupt ledger."""
        manifest_path = tmp_path / "manifest.json"
        manifest_path.write_bytes(b"\xff\xfe")

        with pytest.raises(ManifestParseError):
            with manifest_session(manifest_path, audit, timeout=0.5):
                pytest.fail("body must not run")

        assert ("manifest.load", "error") in _actions(audit)
        assert not (tmp_path / "manifest.json.lock").exists()

    def test_save_writes_and_audits(self, tmp_path: Path, audit: AuditLogger) -> None:
        """save persists the ledger and records the counts."""
        manifest_path = tmp_path / "manifest.json"

        with manifest_session(manifest_path, audit, timeout=0.5) as session:
            session.save(installed=0)

        assert manifest_path.exists()
        event = next(e for e in load_events(audit.path) if e.action == "manifest.save")
        assert event.details == {"installations": 0, "installed": 0}

    def test_lock_released_when_body_raises(self, tmp_path: Path, audit: AuditLogger) -> None:
        """Errors inside the session still release the lock."""
        with pytest.raises(RuntimeError):
            with manifest_session(tmp_path / "manifest.json", audit, timeout=0.5):
                raise RuntimeError("boom")
        assert not (tmp_path / "manifest.json.lock").exists()


class TestAuditedCommand:
    """Tests for audited_command."""

    def test_success(self, audit: AuditLogger) -> None:
        """Started and success events bracket the command."""
        with audited_command(audit, {"skill": "demo"}):
            pass
        assert _actions(audit) == [("command.test", "started"), ("command.test", "success")]

    def test_error_recorded_and_raised(self, audit: AuditLogger) -> None:
        """Exceptions are logged with their message and re-raised."""
        with pytest.raises(ValueError):
            with audited_command(audit):
                raise ValueError("bad input")

        events = load_events(audit.path)
        assert events[-1].status == "error"
        assert events[-1].error == "bad input"

    def test_disabled_audit_writes_nothing(self, tmp_path: Path) -> None:
        """A disabled logger is a no-op."""
        audit = AuditLogger.disabled("install")
        with audited_command(audit):
            pass
        assert audit.run_id == ""


class TestConcurrentSessions:
    """Tests for overlapping read-modify-write cycles."""

    def test_no_lost_records(self, tmp_path: Path) -> None:
        """Every concurrent writer's record survives."""
        manifest_path = tmp_path / "manifest.json"
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        locked: list[bool] = []
        errors: list[BaseException] = []

        def writer(index: int) -> None:
            try:
                audit = AuditLogger.disabled("install")
                with manifest_session(manifest_path, audit, timeout=10.0) as session:
                    locked.append(session.locked)
                    # Widen the window between load and save.
                    time.sleep(0.01)
                    session.manifest.add(
                        Installation(
                            skill_name=f"skill-{index}",
                            client_id="claude",
                            scope=Scope.GLOBAL,
                            installed_at=now,
                            updated_at=now,
                            install_path=f"/targets/{index}",
                        )
                    )
                    session.save()
            except BaseException as exc:
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert locked == [True] * 8
        names = sorted(Manifest.load(manifest_path).all_skill_names())
        assert names == sorted(f"skill-{i}" for i in range(8))
        assert not (tmp_path / "manifest.json.lock").exists()
