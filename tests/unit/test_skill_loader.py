"""Tests for SKILL.md parsing and repository scanning."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from aisk.skills import Skill, SkillLoadError, SkillNotFoundError, SkillParseError
from aisk.skills.loader import (
    REFERENCE_SEPARATOR,
    find_skill,
    load_skill,
    parse_skill_md,
    read_full_content,
    scan_local,
)

_PATH = Path("SKILL.md")


class TestParseSkillMd:
    """Tests for front matter splitting."""

    def test_front_matter_and_body(self) -> None:
        """Front matter is decoded and leading blank body lines dropped."""
        data, body = parse_skill_md("---\nname: demo\nversion: 1.2.0\n---\n\n# Body\n", _PATH)
        assert data == {"name": "demo", "version": "1.2.0"}
        assert body == "# Body\n"

    def test_crlf_normalized(self) -> None:
        """Windows line endings are accepted."""
        data, body = parse_skill_md("---\r\nname: demo\r\n---\r\nBody\r\n", _PATH)
        assert data == {"name": "demo"}
        assert body == "Body\n"

    def test_empty_front_matter(self) -> None:
        """An empty block decodes to an empty mapping."""
        data, body = parse_skill_md("---\n---\nBody", _PATH)
        assert data == {}
        assert body == "Body"

    def test_version_keeps_source_text(self) -> None:
        """Numeric-looking versions are not resolved as floats."""
        data, _ = parse_skill_md("---\nname: demo\nversion: 1.10\n---\n", _PATH)
        assert data["version"] == "1.10"

    def test_null_scalar_stays_empty(self) -> None:
        """An explicit null is not turned into the text 'null'."""
        data, _ = parse_skill_md("---\nname: demo\ndescription: null\n---\n", _PATH)
        assert data["description"] is None

    def test_missing_opening_delimiter(self) -> None:
        """Content must start with ---."""
        with pytest.raises(SkillParseError, match="opening"):
            parse_skill_md("name: demo\n---\n", _PATH)

    def test_missing_closing_delimiter(self) -> None:
        """The front matter must be closed."""
        with pytest.raises(SkillParseError, match="closing"):
            parse_skill_md("---\nname: demo\nBody\n", _PATH)

    def test_invalid_yaml(self) -> None:
        """YAML errors are reported as parse errors."""
        with pytest.raises(SkillParseError) as exc_info:
            parse_skill_md("---\nname: [unclosed\n---\n", _PATH)
        assert exc_info.value.path == _PATH

    def test_non_mapping(self) -> None:
        """Front matter must be a mapping."""
        with pytest.raises(SkillParseError, match="mapping"):
            parse_skill_md("---\n- a\n- b\n---\n", _PATH)


class TestLoadSkill:
    """Tests for loading one skill directory."""

    def test_fields(self, skills_repo: Path) -> None:
        """Metadata, body and references are loaded."""
        skill = load_skill(skills_repo / "helper-dir")

        assert skill.name == "helper"
        assert skill.dir_name == "helper-dir"
        assert skill.version == "0.1.0"
        assert skill.path.is_absolute()
        assert skill.reference_files == ("reference/api.md",)
        assert skill.body.startswith("# Instructions")

    def test_multiline_description(self, skills_repo: Path) -> None:
        """Descriptions keep their internal line breaks."""
        assert load_skill(skills_repo / "demo").description == "Demo skill\nSecond line"

    def test_float_like_version(self, tmp_path: Path) -> None:
        """A version such as 1.10 is kept verbatim."""
        skill_dir = tmp_path / "versioned"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("---\nversion: 1.10\n---\nBody\n", encoding="utf-8")
        assert load_skill(skill_dir).version == "1.10"

    def test_name_falls_back_to_directory(self, tmp_path: Path) -> None:
        """A skill without a name is named after its directory."""
        skill_dir = tmp_path / "nameless"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("---\ndescription: x\n---\nBody\n", encoding="utf-8")

        skill = load_skill(skill_dir)

        assert skill.name == "nameless"
        assert skill.display_version == "unversioned"

    def test_optional_directories(self, tmp_path: Path) -> None:
        """references/, examples/ and assets/ are listed; tools are split."""
        skill_dir = tmp_path / "full"
        for sub in ("references", "examples", "assets"):
            (skill_dir / sub).mkdir(parents=True)
        (skill_dir / "SKILL.md").write_text(
            "---\nname: full\nallowed-tools: Read, Write Bash\n---\nBody\n", encoding="utf-8"
        )
        (skill_dir / "references" / "guide.md").write_text("g", encoding="utf-8")
        (skill_dir / "examples" / "one.py").write_text("", encoding="utf-8")
        (skill_dir / "assets" / ".hidden").write_text("", encoding="utf-8")

        skill = load_skill(skill_dir)

        assert skill.allowed_tools == ("Read", "Write", "Bash")
        assert skill.reference_files == ("references/guide.md",)
        assert skill.example_files == ("examples/one.py",)
        assert skill.asset_files == ()
        assert skill.has_references

    def test_missing_skill_md(self, tmp_path: Path) -> None:
        """A directory without SKILL.md is not a skill."""
        with pytest.raises(SkillNotFoundError):
            load_skill(tmp_path)


class TestScanLocal:
    """Tests for repository scanning."""

    def test_sorted_by_directory(self, skills_repo: Path) -> None:
        """Skills are returned in directory order."""
        assert [s.name for s in scan_local(skills_repo)] == ["demo", "helper"]

    def test_skips_non_skills(
        self, skills_repo: Path, make_skill_dir, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Hidden, vendored, empty and malformed directories are ignored."""
        make_skill_dir(skills_repo, "secret", dir_name=".hidden")
        make_skill_dir(skills_repo, "vendored", dir_name="node_modules")
        (skills_repo / "notes").mkdir()
        (skills_repo / "README.md").write_text("", encoding="utf-8")
        broken = skills_repo / "broken"
        broken.mkdir()
        (broken / "SKILL.md").write_text("no front matter", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="aisk.skills.loader"):
            skills = scan_local(skills_repo)

        assert [s.name for s in skills] == ["demo", "helper"]
        assert "broken" in caplog.text

    def test_missing_repository(self, tmp_path: Path) -> None:
        """An unreadable repository is an error."""
        with pytest.raises(SkillLoadError):
            scan_local(tmp_path / "missing")


class TestFindSkill:
    """Tests for name lookup."""

    def test_by_name_then_directory(self, skills_repo: Path) -> None:
        """Names win over directory names."""
        skills = scan_local(skills_repo)
        assert find_skill(skills, "helper").dir_name == "helper-dir"
        assert find_skill(skills, "helper-dir").name == "helper"
        assert find_skill(skills, "nope") is None


class TestReadFullContent:
    """Tests for inlining reference files."""

    def test_without_refs(self, skills_repo: Path) -> None:
        """The body is returned unchanged."""
        skill = load_skill(skills_repo / "helper-dir")
        assert read_full_content(skill) == skill.body

    def test_with_refs(self, skills_repo: Path) -> None:
        """Reference files follow the body under headings."""
        skill = load_skill(skills_repo / "helper-dir")
        content = read_full_content(skill, include_refs=True)
        assert content == skill.body + REFERENCE_SEPARATOR + "## Reference: api\n\nAPI notes\n\n"

    def test_unreadable_reference(self, tmp_path: Path) -> None:
        """A vanished reference file is a load error."""
        skill = Skill(name="x", path=tmp_path, reference_files=("reference/gone.md",))
        with pytest.raises(SkillLoadError):
            read_full_content(skill, include_refs=True)


class TestSkillModel:
    """Tests for the Skill dataclass."""

    def test_stub(self) -> None:
        """Stubs use the name as directory name."""
        stub = Skill.stub("old-skill")
        assert stub.dir_name == "old-skill"
        assert stub.body == ""

    def test_dir_name_defaults_to_name(self) -> None:
        """An empty directory name falls back to the skill name."""
        assert Skill(name="demo").dir_name == "demo"
