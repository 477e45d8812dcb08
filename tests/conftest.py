"""Shared test fixtures and configuration for aisk tests."""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest
import yaml
from rich.console import Console

from aisk.audit.config import AuditConfig
from aisk.audit.logger import AuditLogger
from aisk.clients.models import Client, ClientID
from aisk.clients.registry import ClientRegistry
from aisk.config.settings import AiskSettings

SKILL_MD_TEMPLATE = """\
---
{front_matter}---

{body}
"""


def write_skill(
    repo: Path,
    name: str,
    *,
    description: str = "A test skill",
    version: str = "1.0.0",
    body: str = "# Instructions\n\nDo the thing.\n",
    dir_name: str | None = None,
    references: dict[str, str] | None = None,
) -> Path:
    """Create a skill directory with SKILL.md and optional reference files."""
    skill_dir = repo / (dir_name or name)
    skill_dir.mkdir(parents=True, exist_ok=True)
    front_matter = yaml.safe_dump(
        {"name": name, "description": description, "version": version},
        sort_keys=False,
    )
    (skill_dir / "SKILL.md").write_text(
        SKILL_MD_TEMPLATE.format(front_matter=front_matter, body=body),
        encoding="utf-8",
    )
    for filename, content in (references or {}).items():
        ref_dir = skill_dir / "reference"
        ref_dir.mkdir(exist_ok=True)
        (ref_dir / filename).write_text(content, encoding="utf-8")
    return skill_dir


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove AISK_* variables so settings only see what a test sets."""
    for key in list(os.environ):
        if key.startswith("AISK_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def skills_repo(tmp_path: Path) -> Path:
    """A skills repository with two skills.

    - repo/
      - demo/SKILL.md           (name: demo, version 1.0.0)
      - helper-dir/SKILL.md     (name: helper, version 0.1.0, one reference)
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    write_skill(repo, "demo", description="Demo skill\nSecond line")
    write_skill(
        repo,
        "helper",
        dir_name="helper-dir",
        version="0.1.0",
        references={"api.md": "API notes"},
    )
    return repo


@pytest.fixture
def make_skill_dir():
    """Factory fixture exposing ``write_skill`` to test modules.

    Usage:
        def test_something(tmp_path, make_skill_dir):
            skill_dir = make_skill_dir(tmp_path, "my-skill", version="2.0")
    """
    return write_skill


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Fake home directory with every client's config directory present."""
    home = tmp_path / "home"
    for parts in ((".claude",), (".gemini",), (".codex",), (".vscode",), (".cursor",)):
        home.joinpath(*parts).mkdir(parents=True)
    home.joinpath(".codeium", "windsurf").mkdir(parents=True)
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory marked by a ``.git`` folder."""
    project = tmp_path / "project"
    (project / ".git").mkdir(parents=True)
    return project


@pytest.fixture
def settings(tmp_path: Path, home_dir: Path, skills_repo: Path) -> AiskSettings:
    """Settings rooted entirely under ``tmp_path``."""
    return AiskSettings(
        _env_file=None,
        home_dir=home_dir,
        skills_path=skills_repo,
        lock_timeout_seconds=0.5,
    )


@pytest.fixture
def audit(tmp_path: Path) -> AuditLogger:
    """Enabled audit logger writing to ``tmp_path/audit/audit.log``."""
    config = AuditConfig(enabled=True, log_path=tmp_path / "audit" / "audit.log")
    return AuditLogger(config, command="test")


@pytest.fixture
def console() -> Console:
    """Console that renders into memory."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def make_client():
    """Factory for detected clients with targets under ``tmp_path``."""

    def _make(
        client_id: ClientID,
        *,
        global_path: Path | None = None,
        project_path: Path | None = None,
    ) -> Client:
        template = ClientRegistry.default().get(client_id)
        return Client(
            id=client_id,
            name=template.name,
            supports_global=template.supports_global,
            supports_project=template.supports_project,
            detected=True,
            global_path=global_path,
            project_path=project_path,
        )

    return _make
