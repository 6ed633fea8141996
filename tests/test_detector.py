# Tests for platform detection
import json

import pytest
from conftest import write_extension, write_skill

from skillporter.detector import classify, detect
from skillporter.errors import DirectoryNotFoundError
from skillporter.models import Platform


class TestClassify:
    """Tests for the platform decision table."""

    @pytest.mark.parametrize(
        "has_claude,has_gemini,expected",
        [
            (True, True, Platform.UNIVERSAL),
            (True, False, Platform.CLAUDE),
            (False, True, Platform.GEMINI),
            (False, False, Platform.UNKNOWN),
        ],
    )
    def test_table(self, has_claude, has_gemini, expected):
        """Test each combination of present layouts."""
        assert classify(has_claude, has_gemini) is expected


class TestDetect:
    """Tests for detect() on real directories."""

    def test_claude_skill(self, skill_dir):
        """Test a skill is detected with its files and metadata."""
        result = detect(skill_dir)

        assert result.platform is Platform.CLAUDE
        assert result.confidence == "high"
        assert [f.file for f in result.claude_files] == ["SKILL.md", ".claude-plugin/marketplace.json"]
        assert all(f.valid for f in result.claude_files)
        assert result.gemini_files == []
        assert result.metadata["claude"]["name"] == "db-helper"
        assert result.metadata["claude_marketplace"]["name"] == "db-helper-marketplace"
        assert "gemini" not in result.metadata

    def test_gemini_extension(self, extension_dir):
        """Test an extension is detected with manifest and context."""
        result = detect(extension_dir)

        assert result.platform is Platform.GEMINI
        assert [f.kind for f in result.gemini_files] == ["manifest", "context"]
        assert result.metadata["gemini"]["version"] == "2.1.0"

    def test_universal(self, tmp_path):
        """Test both layouts in one directory."""
        directory = write_extension(write_skill(tmp_path / "both"))
        result = detect(directory)

        assert result.platform is Platform.UNIVERSAL
        assert {"claude", "claude_marketplace", "gemini"} <= set(result.metadata)

    def test_unknown(self, tmp_path):
        """Test an unrelated directory is unknown with low confidence."""
        (tmp_path / "README.md").write_text("# Hi\n")
        result = detect(tmp_path)

        assert result.platform is Platform.UNKNOWN
        assert result.confidence == "low"
        assert result.metadata == {}

    def test_invalid_files_still_count(self, tmp_path):
        """Test invalid files are recorded but still decide the platform."""
        write_skill(tmp_path, skill_md="# No frontmatter\n", marketplace=None)
        (tmp_path / "gemini-extension.json").write_text("{not json")

        result = detect(tmp_path)

        assert result.platform is Platform.UNIVERSAL
        assert result.claude_files[0].valid is False
        assert result.claude_files[0].issue == "Missing or invalid YAML frontmatter"
        assert result.gemini_files[0].issue == "Invalid JSON"
        assert "gemini" not in result.metadata
        assert "claude" not in result.metadata

    def test_non_utf8_files(self, tmp_path):
        """Test undecodable files are marked invalid and leave metadata absent."""
        (tmp_path / "gemini-extension.json").write_bytes(b'{"name": "x\xff"}')
        (tmp_path / "SKILL.md").write_bytes(b"---\nname: x\ndescription: \xff\n---\nbody\n")
        (tmp_path / ".claude-plugin").mkdir()
        (tmp_path / ".claude-plugin" / "marketplace.json").write_bytes(b'{"name": "\xfe"}')

        result = detect(tmp_path)

        assert result.platform is Platform.UNIVERSAL
        assert [f.valid for f in result.claude_files] == [False, False]
        assert result.gemini_files[0].valid is False
        assert result.metadata == {}

    def test_custom_context_file(self, tmp_path):
        """Test the context file named by the manifest is detected."""
        manifest = {"name": "x", "version": "1.0.0", "contextFileName": "CONTEXT.md"}
        write_extension(tmp_path, manifest=manifest, context="hi")
        (tmp_path / "GEMINI.md").write_text("ignored")

        result = detect(tmp_path)
        assert [f.file for f in result.gemini_files] == ["gemini-extension.json", "CONTEXT.md"]

    def test_context_file_alone_is_gemini(self, tmp_path):
        """Test a lone GEMINI.md is enough to detect the extension layout."""
        (tmp_path / "GEMINI.md").write_text("# Context\n")
        assert detect(tmp_path).platform is Platform.GEMINI

    def test_shared_signals(self, skill_dir):
        """Test presence-only shared files are listed."""
        (skill_dir / "package.json").write_text(json.dumps({"name": "db"}))
        (skill_dir / "shared").mkdir()
        (skill_dir / "mcp-server").mkdir()

        result = detect(skill_dir)

        assert [f.file for f in result.shared_files] == ["package.json", "shared/", "mcp-server/"]
        assert result.platform is Platform.CLAUDE

    def test_missing_directory(self, tmp_path):
        """Test a missing path raises."""
        with pytest.raises(DirectoryNotFoundError, match="Directory not found"):
            detect(tmp_path / "nope")

    def test_file_path(self, tmp_path):
        """Test a regular file is not a directory."""
        path = tmp_path / "SKILL.md"
        path.write_text("x")
        with pytest.raises(DirectoryNotFoundError):
            detect(path)
