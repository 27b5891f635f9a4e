"""
End-to-end tests over real directory trees.

Exercises walk, filter, render and sink together with the documented
example inputs.
"""

import pytest

from gitcontext.core.config.models import AppConfig, OutputConfig
from gitcontext.core.processor import ContextProcessor
from gitcontext.exporters import FileExporter


@pytest.mark.integration
class TestEndToEnd:
    """Full runs through ContextProcessor."""

    def test_binary_file_skipped(self, tmp_path):
        """Test binary files are left out of the output."""
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / "a.txt").write_bytes(b"hello")
        (repo / "bin.dat").write_bytes(b"\x00\x01")

        config = AppConfig(template="#file_name:#file_size:#file_content")
        assert ContextProcessor(config).process_directory(repo) == ["a.txt:5:hello"]

    def test_name_pattern_excludes_file(self, tmp_path):
        """Test a name pattern excludes matching files."""
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / "keep.txt").write_text("keep", encoding="utf-8")
        (repo / "drop.tmp").write_text("drop", encoding="utf-8")

        config = AppConfig(template="#file_name", exclude_patterns=["*.tmp"])
        assert ContextProcessor(config).process_directory(repo) == ["keep.txt"]

    def test_nested_directory_pattern(self, tmp_path):
        """Test a directory pattern excludes nested files."""
        project = tmp_path / "project"
        (project / "node_modules" / "pkg").mkdir(parents=True)
        (project / "node_modules" / "pkg" / "index.js").write_text("x", encoding="utf-8")
        (project / "index.js").write_text("y", encoding="utf-8")

        config = AppConfig(template="#file_content", exclude_patterns=["**/node_modules/**"])
        assert ContextProcessor(config).process_directory(project) == ["y"]

    def test_root_relative_patterns(self, sample_repo):
        """Test patterns relative to the root."""
        config = AppConfig(
            template="#file_name",
            exclude_patterns=["src/*/*.py", "node_modules/**"],
        )
        rendered = ContextProcessor(config).process_directory(sample_repo)
        assert "helpers.py" not in rendered
        assert "main.py" in rendered
        assert "index.js" not in rendered

    def test_file_output_matches_in_memory_rendering(self, sample_repo, plain_config):
        """Test the file sink matches in-memory rendering."""
        processor = ContextProcessor(plain_config)
        expected = processor.process_directory(sample_repo)

        out = plain_config.output.path
        result = ContextProcessor(plain_config).export(sample_repo, FileExporter(out))

        assert result.success is True
        assert result.records_exported == len(expected)
        assert out.read_text(encoding="utf-8") == "".join(text + "\n" for text in expected)

    def test_rerun_is_reproducible(self, sample_repo, tmp_path):
        """Test two runs produce identical output."""
        out = sample_repo / "context.txt"
        config = AppConfig(template="#file_path|#file_content", output=OutputConfig(path=out))

        ContextProcessor(config).export(sample_repo, FileExporter(out))
        first = out.read_text(encoding="utf-8")
        ContextProcessor(config).export(sample_repo, FileExporter(out))
        assert out.read_text(encoding="utf-8") == first
